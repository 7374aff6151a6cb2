"""
Decision document JSON models (JDM graph: nodes + edges).

Used by the backend store, the document controller and the storage adapters.
Node and edge payloads keep any editor-specific fields verbatim.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

DOCUMENT_CONTENT_TYPE = "application/vnd.gorules.decision"
DEFAULT_DOCUMENT_NAME = "Untitled Decision"


class DecisionNode(BaseModel):
    """Single node in the decision graph (input, output, table, expression, ...)."""

    id: str = Field(..., description="Unique node ID within the document")
    type: str = Field(..., description="Node type (e.g. inputNode, decisionTableNode)")

    model_config = {"extra": "allow"}


class DecisionEdge(BaseModel):
    """Directed edge between two nodes."""

    id: str = Field(..., description="Unique edge ID")
    source_id: str = Field(..., alias="sourceId", description="ID of the source node")
    target_id: str = Field(..., alias="targetId", description="ID of the target node")

    model_config = {"extra": "allow", "populate_by_name": True}


class DecisionContent(BaseModel):
    """The graph itself: ordered nodes and edges."""

    nodes: list[DecisionNode] = Field(default_factory=list, description="All nodes in the graph")
    edges: list[DecisionEdge] = Field(default_factory=list, description="Edges between nodes")

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class DocumentFile(DecisionContent):
    """Serialized decision document as written to disk or to the document store."""

    content_type: str = Field(
        DOCUMENT_CONTENT_TYPE,
        alias="contentType",
        description="Document marker; must equal the decision content type on import",
    )

    model_config = {"populate_by_name": True}


class SimulationError(BaseModel):
    """Error record produced when a simulation request fails."""

    message: Optional[str] = Field(None, description="Human-readable failure message")
    data: Optional[Any] = Field(None, description="Raw error payload for diagnostics")


class SimulationTrace(BaseModel):
    """Outcome of one simulation run: either a result or an error, never both."""

    result: Optional[Any] = Field(None, description="Evaluator output, stored as-is")
    error: Optional[SimulationError] = Field(None, description="Failure record")

    @property
    def failed(self) -> bool:
        return self.error is not None


class StoredDocument(BaseModel):
    """Document store response for a single file."""

    name: str
    content: str


class SaveDocumentRequest(BaseModel):
    """Document store create/overwrite request body."""

    name: str = Field(..., min_length=1, max_length=256, description="File name (e.g. pricing.json)")
    json_: str = Field(..., alias="json", description="Serialized decision document")

    model_config = {"populate_by_name": True}


def get_document_json_schema() -> dict[str, Any]:
    """Return the JSON schema of a decision document file."""
    schema = DocumentFile.model_json_schema(by_alias=True)
    return {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "title": "Decision Document",
        "description": "JDM decision graph with content type marker",
        **{k: v for k, v in schema.items() if k not in ("$schema", "title", "description")},
    }
