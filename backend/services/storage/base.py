"""
Storage strategy interfaces.

Host integrations (native file pickers, browser-style downloads and uploads)
are injected through the small protocols below, so the adapters stay testable
and the controller never knows which variant is active.
"""

from pathlib import Path
from typing import NamedTuple, Optional, Protocol

from backend.models.document import DocumentHandle
from shared.schemas import DecisionContent


class LoadedDocument(NamedTuple):
    """Result of a successful read: sanitized, validated content plus its new handle."""

    content: DecisionContent
    handle: DocumentHandle


class Upload(NamedTuple):
    name: str
    data: bytes


class FilePicker(Protocol):
    """Native file dialog capability. Returning None means the user dismissed the dialog."""

    async def pick_open(self) -> Optional[Path]:
        ...

    async def pick_save(self, suggested_name: str) -> Optional[Path]:
        ...


class Downloader(Protocol):
    """Delivers a finished blob to the user under the given file name."""

    def deliver(self, file_name: str, blob: Path) -> None:
        ...


class UploadSource(Protocol):
    """Hands over a file chosen by the user. Returning None means nothing was chosen."""

    async def receive(self) -> Optional[Upload]:
        ...


class FileStorage(Protocol):
    """Common contract of the local-handle and download/upload adapters."""

    backend: str

    async def read(self) -> LoadedDocument:
        ...

    async def write(
        self,
        content: DecisionContent,
        handle: DocumentHandle,
        *,
        save_as: bool = False,
    ) -> DocumentHandle:
        ...
