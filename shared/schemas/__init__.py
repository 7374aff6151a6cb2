"""Shared schemas for Rulegraph (document store and editor contract)."""

from shared.schemas.decision_document import (
    DEFAULT_DOCUMENT_NAME,
    DOCUMENT_CONTENT_TYPE,
    DecisionContent,
    DecisionEdge,
    DecisionNode,
    DocumentFile,
    SaveDocumentRequest,
    SimulationError,
    SimulationTrace,
    StoredDocument,
    get_document_json_schema,
)

__all__ = [
    "DEFAULT_DOCUMENT_NAME",
    "DOCUMENT_CONTENT_TYPE",
    "DecisionContent",
    "DecisionEdge",
    "DecisionNode",
    "DocumentFile",
    "SaveDocumentRequest",
    "SimulationError",
    "SimulationTrace",
    "StoredDocument",
    "get_document_json_schema",
]
