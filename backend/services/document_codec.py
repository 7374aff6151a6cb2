"""
Decision document file format: export stamping and import validation.

Export always stamps the decision content type. Import is the single path every
storage backend goes through:

1. parse JSON (object expected)
2. check the content type marker
3. reject duplicate node IDs
4. drop edges that reference unknown nodes
5. reject cyclic graphs
"""

import json
import logging
from typing import Any, Union

from pydantic import ValidationError as PydanticValidationError

from backend.services.errors import DocumentFormatError
from backend.services.graph_validator import validate_graph
from shared.schemas import (
    DEFAULT_DOCUMENT_NAME,
    DOCUMENT_CONTENT_TYPE,
    DecisionContent,
    DecisionEdge,
    DecisionNode,
)

logger = logging.getLogger(__name__)

FILE_SUFFIX = ".json"


def derive_file_name(name: str) -> str:
    """Strip any trailing .json and re-append it ('Pricing.json' -> 'Pricing.json', 'Pricing' -> 'Pricing.json')."""
    stem = name.strip()
    while stem.lower().endswith(FILE_SUFFIX):
        stem = stem[: -len(FILE_SUFFIX)]
    return f"{stem or DEFAULT_DOCUMENT_NAME}{FILE_SUFFIX}"


def serialize_document(content: DecisionContent) -> str:
    """Serialize content as a decision document file (content type first, 2-space indent)."""
    payload = {"contentType": DOCUMENT_CONTENT_TYPE, **content.to_json_dict()}
    return json.dumps(payload, indent=2)


def parse_document(raw: Union[str, bytes]) -> DecisionContent:
    """
    Parse and sanitize a decision document file without the cycle check.

    Raises DocumentFormatError for unparsable JSON, a missing or wrong content
    type, malformed nodes/edges, or duplicate node IDs.
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise DocumentFormatError("File is not valid UTF-8 text") from e
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise DocumentFormatError(f"Invalid JSON: {e.msg}") from e
    if not isinstance(data, dict):
        raise DocumentFormatError("Decision document must be a JSON object")
    if data.get("contentType") != DOCUMENT_CONTENT_TYPE:
        raise DocumentFormatError("Invalid content type")

    raw_nodes = data.get("nodes") or []
    raw_edges = data.get("edges") or []
    if not isinstance(raw_nodes, list) or not isinstance(raw_edges, list):
        raise DocumentFormatError("'nodes' and 'edges' must be lists")

    try:
        nodes = [DecisionNode.model_validate(n) for n in raw_nodes]
    except PydanticValidationError as e:
        raise DocumentFormatError(f"Invalid node: {e.errors()[0]['msg']}") from e

    node_ids: set[str] = set()
    for node in nodes:
        if node.id in node_ids:
            raise DocumentFormatError(f"Duplicate node id '{node.id}'")
        node_ids.add(node.id)

    kept = [e for e in raw_edges if _references_known_nodes(e, node_ids)]
    dropped = len(raw_edges) - len(kept)
    if dropped:
        logger.info("Dropped %d edge(s) referencing unknown nodes", dropped)
    try:
        edges = [DecisionEdge.model_validate(e) for e in kept]
    except PydanticValidationError as e:
        raise DocumentFormatError(f"Invalid edge: {e.errors()[0]['msg']}") from e

    return DecisionContent(nodes=nodes, edges=edges)


def load_document(raw: Union[str, bytes]) -> DecisionContent:
    """Parse, sanitize and validate an imported document. Raises DocumentFormatError or CycleDetectedError."""
    content = parse_document(raw)
    validate_graph(content)
    return content


def _references_known_nodes(edge: Any, node_ids: set[str]) -> bool:
    if not isinstance(edge, dict):
        return False
    source, target = edge.get("sourceId"), edge.get("targetId")
    return isinstance(source, str) and isinstance(target, str) and source in node_ids and target in node_ids
