"""
Download/upload fallback storage, used when no native file picker is available.

Saving writes a transient blob, hands it to a Downloader and always removes the
blob afterwards. Opening reads whatever file the UploadSource hands over.
"""

import asyncio
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from backend.models.document import DocumentHandle
from backend.services.document_codec import derive_file_name, load_document, serialize_document
from backend.services.errors import StorageError, UserCancelledError
from backend.services.storage.base import Downloader, FilePicker, LoadedDocument, Upload, UploadSource
from backend.utils.logging import log_storage_operation
from shared.schemas import DecisionContent

logger = logging.getLogger(__name__)

DOWNLOAD_DIR = Path(os.getenv("RULEGRAPH_DOWNLOAD_DIR", str(Path.home() / "Downloads")))


class DirectoryDownloader:
    """Copies downloads into a directory, never overwriting an earlier download."""

    def __init__(self, directory: Optional[Path] = None):
        self.directory = Path(directory or DOWNLOAD_DIR)

    def deliver(self, file_name: str, blob: Path) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self._free_path(file_name)
        shutil.copyfile(blob, target)
        logger.info("Downloaded %s", target)

    def _free_path(self, file_name: str) -> Path:
        target = self.directory / file_name
        stem, suffix = target.stem, target.suffix
        n = 1
        while target.exists():
            target = self.directory / f"{stem} ({n}){suffix}"
            n += 1
        return target


class PickerUploadSource:
    """Upload source backed by a file dialog: the chosen file is read off the event loop."""

    def __init__(self, picker: FilePicker):
        self._picker = picker

    async def receive(self) -> Optional[Upload]:
        path = await self._picker.pick_open()
        if path is None:
            return None
        try:
            data = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise StorageError(f"Could not read '{path.name}': {e.strerror or e}") from e
        return Upload(path.name, data)


class DownloadAdapter:
    """Save by download, open by upload. Documents opened this way have no write handle."""

    backend = "download"

    def __init__(self, downloader: Downloader, uploads: Optional[UploadSource] = None):
        self._downloader = downloader
        self._uploads = uploads

    async def read(self) -> LoadedDocument:
        if self._uploads is None:
            raise StorageError("Uploading files is not available")
        upload = await self._uploads.receive()
        if upload is None:
            raise UserCancelledError()
        content = load_document(upload.data)
        log_storage_operation(logger, "read", self.backend, upload.name, extra={"nodes": len(content.nodes)})
        return LoadedDocument(content, DocumentHandle(name=upload.name))

    async def write(
        self,
        content: DecisionContent,
        handle: DocumentHandle,
        *,
        save_as: bool = False,
    ) -> DocumentHandle:
        file_name = derive_file_name(handle.name)
        data = serialize_document(content).encode("utf-8")
        try:
            await asyncio.to_thread(self._deliver, file_name, data)
        except OSError as e:
            log_storage_operation(logger, "write", self.backend, file_name, success=False, error=str(e))
            raise StorageError(f"Could not download '{file_name}': {e.strerror or e}") from e
        log_storage_operation(logger, "write", self.backend, file_name)
        return DocumentHandle(name=handle.name)

    def _deliver(self, file_name: str, data: bytes) -> None:
        fd, blob = tempfile.mkstemp(prefix="rulegraph-", suffix=".json")
        blob_path = Path(blob)
        try:
            with os.fdopen(fd, "wb") as stream:
                stream.write(data)
            self._downloader.deliver(file_name, blob_path)
        finally:
            blob_path.unlink(missing_ok=True)
