"""
Document lifecycle errors.

Every failure that the document controller reports to the user derives from
DocumentError. UserCancelledError is the one subclass reported silently.
"""

from typing import Any, Optional


class DocumentError(Exception):
    """Base class for failures surfaced to the user as a single message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class CycleDetectedError(DocumentError):
    """The edge set contains a directed cycle."""

    def __init__(self, cycle: Optional[list[str]] = None):
        super().__init__("Circular dependencies detected")
        self.cycle = cycle or []


class DocumentFormatError(DocumentError):
    """Unparsable JSON, wrong content type, or malformed nodes/edges."""


class TransportError(DocumentError):
    """Network failure or non-2xx response from a remote service."""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Optional[Any] = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class StorageError(DocumentError):
    """Local filesystem failure while reading or writing a document."""


class UserCancelledError(DocumentError):
    """The user dismissed a picker, upload, or confirmation."""

    def __init__(self, message: str = "Cancelled by user"):
        super().__init__(message)
