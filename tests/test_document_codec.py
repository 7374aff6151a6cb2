"""Tests for the decision document file format (export stamping, import validation)."""

import json

import pytest

from backend.services.document_codec import (
    derive_file_name,
    load_document,
    parse_document,
    serialize_document,
)
from backend.services.errors import CycleDetectedError, DocumentFormatError
from conftest import make_content, make_document
from shared.schemas import DOCUMENT_CONTENT_TYPE


def test_serialize_stamps_content_type(chain):
    data = json.loads(serialize_document(chain))
    assert data["contentType"] == DOCUMENT_CONTENT_TYPE
    assert [n["id"] for n in data["nodes"]] == ["a", "b", "c"]
    assert data["edges"][0] == {"id": "e1", "sourceId": "a", "targetId": "b"}


def test_export_import_preserves_order_and_extra_fields():
    original = make_content(["z", "a", "m"], [("z", "a"), ("z", "m"), ("a", "m")])
    data = original.to_json_dict()
    data["nodes"][0]["position"] = {"x": 10, "y": 20}
    data["edges"][0]["sourceHandle"] = "s-1"
    original = type(original).model_validate(data)
    loaded = load_document(serialize_document(original))
    assert loaded.to_json_dict() == original.to_json_dict()
    assert loaded.nodes[0].position == {"x": 10, "y": 20}


def test_import_drops_edges_to_missing_nodes():
    doc = make_document(
        nodes=[{"id": "a", "type": "inputNode"}],
        edges=[{"id": "e1", "sourceId": "a", "targetId": "ghost"}],
    )
    content = load_document(json.dumps(doc))
    assert [n.id for n in content.nodes] == ["a"]
    assert content.edges == []


def test_import_keeps_valid_edges_when_filtering():
    doc = make_document(
        nodes=[{"id": "a", "type": "t"}, {"id": "b", "type": "t"}, {"id": "c", "type": "t"}],
        edges=[
            {"id": "e1", "sourceId": "a", "targetId": "b"},
            {"id": "e2", "sourceId": "ghost", "targetId": "b"},
            {"id": "e3", "sourceId": "b", "targetId": "c"},
            {"id": "e4", "sourceId": "c"},
        ],
    )
    content = load_document(json.dumps(doc))
    assert [e.id for e in content.edges] == ["e1", "e3"]
    assert len(content.nodes) == 3


@pytest.mark.parametrize("content_type", [None, "application/json", "application/vnd.gorules.decision+v2"])
def test_import_rejects_wrong_content_type(content_type):
    doc = make_document(nodes=[{"id": "a", "type": "t"}], edges=[], content_type=content_type)
    with pytest.raises(DocumentFormatError, match="Invalid content type"):
        parse_document(json.dumps(doc))


@pytest.mark.parametrize("raw", ["{not json", "[]", '"text"', b"\xff\xfe\x00"])
def test_import_rejects_unparsable_input(raw):
    with pytest.raises(DocumentFormatError):
        parse_document(raw)


def test_import_rejects_duplicate_node_ids():
    doc = make_document(nodes=[{"id": "a", "type": "t"}, {"id": "a", "type": "u"}], edges=[])
    with pytest.raises(DocumentFormatError, match="Duplicate node id"):
        parse_document(json.dumps(doc))


def test_import_rejects_node_without_type():
    doc = make_document(nodes=[{"id": "a"}], edges=[])
    with pytest.raises(DocumentFormatError, match="Invalid node"):
        parse_document(json.dumps(doc))


def test_import_rejects_cycles_after_sanitizing():
    doc = make_document(
        nodes=[{"id": "a", "type": "t"}, {"id": "b", "type": "t"}],
        edges=[
            {"id": "e1", "sourceId": "a", "targetId": "b"},
            {"id": "e2", "sourceId": "b", "targetId": "a"},
        ],
    )
    with pytest.raises(CycleDetectedError):
        load_document(json.dumps(doc))


def test_import_accepts_bytes_with_bom():
    doc = make_document(nodes=[{"id": "a", "type": "t"}], edges=[])
    content = load_document(b"\xef\xbb\xbf" + json.dumps(doc).encode("utf-8"))
    assert content.nodes[0].id == "a"


def test_missing_nodes_and_edges_default_to_empty():
    content = load_document(json.dumps({"contentType": DOCUMENT_CONTENT_TYPE}))
    assert content.nodes == [] and content.edges == []


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Pricing", "Pricing.json"),
        ("Pricing.json", "Pricing.json"),
        ("Pricing.json.json", "Pricing.json"),
        ("  spaced  ", "spaced.json"),
        ("", "Untitled Decision.json"),
        (".json", "Untitled Decision.json"),
    ],
)
def test_derive_file_name(name, expected):
    assert derive_file_name(name) == expected
