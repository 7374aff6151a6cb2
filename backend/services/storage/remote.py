"""
Remote document store client (GET/POST /rules/files).

Every call goes straight to the server: no retry, no local fallback, no built-in
timeout. Any transport failure or non-2xx response raises TransportError.
"""

import logging
import os
from typing import Any, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError as PydanticValidationError

from backend.models.document import DocumentHandle, DocumentOrigin
from backend.services.document_codec import derive_file_name, load_document, serialize_document
from backend.services.errors import DocumentFormatError, TransportError
from backend.services.storage.base import LoadedDocument
from backend.utils.logging import log_storage_operation
from shared.schemas import DecisionContent, SaveDocumentRequest, StoredDocument

logger = logging.getLogger(__name__)

API_URL = os.getenv("RULEGRAPH_API_URL", "http://127.0.0.1:3000/api")


def response_body(response: httpx.Response) -> Any:
    """Decoded JSON body, or the raw text when the body is not JSON."""
    try:
        return response.json()
    except ValueError:
        return response.text


class RemoteDocumentStore:
    """Async client for the server-side document store."""

    backend = "remote"

    def __init__(self, base_url: str = API_URL, client: Optional[httpx.AsyncClient] = None):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=None)

    async def __aenter__(self) -> "RemoteDocumentStore":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise TransportError(
                f"Document store request failed (HTTP {status})",
                status_code=status,
                payload=response_body(e.response),
            ) from e
        except httpx.RequestError as e:
            raise TransportError(f"Document store unreachable: {e}") from e
        return response

    async def list_documents(self) -> list[str]:
        response = await self._request("GET", "/rules/files")
        try:
            names = response.json()
        except ValueError as e:
            raise DocumentFormatError("Document store returned an invalid file list") from e
        if not isinstance(names, list):
            raise DocumentFormatError("Document store returned an invalid file list")
        return [str(n) for n in names]

    async def fetch_document(self, name: str) -> LoadedDocument:
        try:
            response = await self._request("GET", f"/rules/files/{quote(name, safe='')}")
        except TransportError as e:
            log_storage_operation(logger, "read", self.backend, name, success=False, error=e.message)
            raise
        try:
            stored = StoredDocument.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            raise DocumentFormatError(f"Document store returned an invalid document for '{name}'") from e
        content = load_document(stored.content)
        log_storage_operation(logger, "read", self.backend, stored.name, extra={"nodes": len(content.nodes)})
        return LoadedDocument(
            content,
            DocumentHandle(name=stored.name, origin=DocumentOrigin.REMOTE, reference=stored.name),
        )

    async def create_document(self, name: str, content: DecisionContent) -> DocumentHandle:
        """Create or overwrite a stored document under the derived .json file name."""
        file_name = derive_file_name(name)
        body = SaveDocumentRequest(name=file_name, json=serialize_document(content))
        try:
            await self._request("POST", "/rules/files", json=body.model_dump(by_alias=True))
        except TransportError as e:
            log_storage_operation(logger, "write", self.backend, file_name, success=False, error=e.message)
            raise
        log_storage_operation(logger, "write", self.backend, file_name)
        return DocumentHandle(name=file_name, origin=DocumentOrigin.REMOTE, reference=file_name)
