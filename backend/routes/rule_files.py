"""
Document store routes: list, fetch and create stored decision documents,
plus validation/import helpers for decision document files.
"""

import json
import os
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, UploadFile
from sqlalchemy.orm import Session

from backend.database import get_db
from backend.models_db import RuleFileModel
from backend.services.document_codec import load_document, parse_document
from backend.services.errors import CycleDetectedError, DocumentFormatError
from backend.services.graph_validator import check_graph
from backend.utils.logging import get_logger, log_storage_operation
from shared.schemas import (
    DOCUMENT_CONTENT_TYPE,
    SaveDocumentRequest,
    StoredDocument,
    get_document_json_schema,
)

router = APIRouter()
logger = get_logger(__name__)

MAX_BODY_BYTES = int(os.getenv("RULEGRAPH_MAX_BODY_BYTES", str(16 * 1024 * 1024)))


@router.get("/files", response_model=list[str])
def list_files(db: Session = Depends(get_db)):
    """Names of all stored documents."""
    rows = db.query(RuleFileModel.name).order_by(RuleFileModel.name).all()
    return [name for (name,) in rows]


# Names may contain "/"; the client quotes them and the server sees the decoded path.
@router.get("/files/{name:path}", response_model=StoredDocument)
def get_file(name: str, db: Session = Depends(get_db)):
    """Get one stored document by name; content is the serialized document as saved."""
    row = db.get(RuleFileModel, name)
    if not row:
        raise HTTPException(status_code=404, detail=f"File '{name}' not found")
    return StoredDocument(name=row.name, content=row.content)


@router.post("/files")
def save_file(body: SaveDocumentRequest, db: Session = Depends(get_db)):
    """Create or overwrite a stored document."""
    if len(body.json_.encode("utf-8")) > MAX_BODY_BYTES:
        raise HTTPException(status_code=413, detail="Document too large")
    row = db.get(RuleFileModel, body.name)
    if row:
        row.content = body.json_
    else:
        row = RuleFileModel(name=body.name, content=body.json_)
        db.add(row)
    db.commit()
    log_storage_operation(logger, "store", "database", body.name, extra={"bytes": len(body.json_)})
    return {"name": body.name, "message": "File saved successfully"}


@router.post("/validate")
def validate_file(document: dict[str, Any]):
    """Run import validation on a document body. Returns sanitized content and any cycle."""
    try:
        content = parse_document(json.dumps(document))
    except DocumentFormatError as e:
        raise HTTPException(status_code=400, detail=e.message) from e
    issues = check_graph(content)
    return {
        "valid": not issues,
        "errors": [i.model_dump() for i in issues],
        "content": content.to_json_dict(),
    }


@router.post("/import")
async def import_file(file: UploadFile):
    """Import an uploaded decision document file; returns it sanitized and stamped."""
    raw = await file.read()
    try:
        content = load_document(raw)
    except (DocumentFormatError, CycleDetectedError) as e:
        raise HTTPException(status_code=400, detail=e.message) from e
    return {
        "name": file.filename,
        "document": {"contentType": DOCUMENT_CONTENT_TYPE, **content.to_json_dict()},
    }


@router.get("/schema")
def document_schema():
    """JSON schema of a decision document file."""
    return get_document_json_schema()
