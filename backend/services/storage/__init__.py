"""
Decision document storage backends.

The file backend is chosen once: the local-handle adapter when a native file
picker is available, otherwise the download/upload fallback.
"""

from typing import Optional

from backend.services.storage.base import (
    Downloader,
    FilePicker,
    FileStorage,
    LoadedDocument,
    Upload,
    UploadSource,
)
from backend.services.storage.download import DirectoryDownloader, DownloadAdapter, PickerUploadSource
from backend.services.storage.local_handle import LocalHandleAdapter
from backend.services.storage.remote import RemoteDocumentStore


def detect_file_capability(picker: Optional[FilePicker]) -> bool:
    """True when the host exposes a native file picker."""
    return picker is not None


def select_file_storage(
    picker: Optional[FilePicker] = None,
    downloader: Optional[Downloader] = None,
    uploads: Optional[UploadSource] = None,
) -> FileStorage:
    if detect_file_capability(picker):
        return LocalHandleAdapter(picker)
    return DownloadAdapter(downloader or DirectoryDownloader(), uploads)


__all__ = [
    "DirectoryDownloader",
    "DownloadAdapter",
    "Downloader",
    "FilePicker",
    "FileStorage",
    "LoadedDocument",
    "LocalHandleAdapter",
    "PickerUploadSource",
    "RemoteDocumentStore",
    "Upload",
    "UploadSource",
    "detect_file_capability",
    "select_file_storage",
]
