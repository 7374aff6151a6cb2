"""
Local filesystem storage through a native file picker.

Opening binds the document to the chosen path; a plain save writes back to it,
"save as" always asks for a new location.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import IO

from backend.models.document import DocumentHandle, DocumentOrigin
from backend.services.document_codec import derive_file_name, load_document, serialize_document
from backend.services.errors import StorageError, UserCancelledError
from backend.services.storage.base import FilePicker, LoadedDocument
from backend.utils.logging import log_storage_operation
from shared.schemas import DecisionContent

logger = logging.getLogger(__name__)


class LocalHandleAdapter:
    """Read/write decision documents on the local filesystem via a FilePicker."""

    backend = "local"

    def __init__(self, picker: FilePicker):
        self._picker = picker

    async def read(self) -> LoadedDocument:
        path = await self._picker.pick_open()
        if path is None:
            raise UserCancelledError()
        try:
            raw = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            log_storage_operation(logger, "read", self.backend, path.name, success=False, error=str(e))
            raise StorageError(f"Could not read '{path.name}': {e.strerror or e}") from e
        content = load_document(raw)
        log_storage_operation(logger, "read", self.backend, path.name, extra={"nodes": len(content.nodes)})
        return LoadedDocument(
            content,
            DocumentHandle(name=path.name, origin=DocumentOrigin.LOCAL_FILE, reference=path),
        )

    async def write(
        self,
        content: DecisionContent,
        handle: DocumentHandle,
        *,
        save_as: bool = False,
    ) -> DocumentHandle:
        if handle.origin is DocumentOrigin.LOCAL_FILE and handle.reference and not save_as:
            path = Path(handle.reference)
        else:
            path = await self._picker.pick_save(derive_file_name(handle.name))
            if path is None:
                raise UserCancelledError()
        text = serialize_document(content)
        try:
            await asyncio.to_thread(self._write_text, path, text)
        except OSError as e:
            log_storage_operation(logger, "write", self.backend, path.name, success=False, error=str(e))
            raise StorageError(f"Could not write '{path.name}': {e.strerror or e}") from e
        log_storage_operation(logger, "write", self.backend, path.name)
        return DocumentHandle(name=path.name, origin=DocumentOrigin.LOCAL_FILE, reference=path)

    def open_writable(self, path: Path) -> IO[str]:
        return path.open("w", encoding="utf-8")

    def _write_text(self, path: Path, text: str) -> None:
        # A failed write leaves the existing file untouched.
        staging = path.with_name(f".{path.name}.tmp")
        try:
            with self.open_writable(staging) as stream:
                stream.write(text)
            os.replace(staging, path)
        finally:
            staging.unlink(missing_ok=True)
