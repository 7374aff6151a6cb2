"""
Rulegraph in-memory document models.

For the JSON contract shared with the document store, see shared.schemas.
"""

from backend.models.document import DocumentHandle, DocumentOrigin, DocumentState

__all__ = [
    "DocumentHandle",
    "DocumentOrigin",
    "DocumentState",
]
