"""
Pytest fixtures for Rulegraph tests.

Uses an in-memory SQLite DB for speed and isolation.
StaticPool keeps a single connection so the :memory: database (and tables) persist.
"""

from pathlib import Path
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from backend.database import Base, get_db
from backend.main import app
from shared.schemas import DOCUMENT_CONTENT_TYPE, DecisionContent

TEST_DB = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh in-memory DB and tables per test."""
    test_engine = create_engine(
        TEST_DB,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,  # single connection so :memory: DB and tables persist
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def override_db(db_engine):
    """Point the app's get_db dependency at the test DB."""
    session_factory = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(override_db):
    """FastAPI TestClient with test DB."""
    with TestClient(override_db) as c:
        yield c


def make_content(node_ids: list[str], edges: list[tuple[str, str]]) -> DecisionContent:
    """Build content with generic nodes and edges named e1, e2, ... in order."""
    return DecisionContent.model_validate(
        {
            "nodes": [{"id": nid, "type": "expressionNode", "name": nid.upper()} for nid in node_ids],
            "edges": [
                {"id": f"e{i}", "sourceId": s, "targetId": t}
                for i, (s, t) in enumerate(edges, start=1)
            ],
        }
    )


def make_document(nodes: list[dict], edges: list[dict], content_type: Optional[str] = DOCUMENT_CONTENT_TYPE) -> dict:
    doc = {"nodes": nodes, "edges": edges}
    if content_type is not None:
        doc["contentType"] = content_type
    return doc


@pytest.fixture
def chain() -> DecisionContent:
    """A -> B -> C"""
    return make_content(["a", "b", "c"], [("a", "b"), ("b", "c")])


@pytest.fixture
def cyclic() -> DecisionContent:
    """A -> B -> C -> A"""
    return make_content(["a", "b", "c"], [("a", "b"), ("b", "c"), ("c", "a")])


class FakePicker:
    """FilePicker that returns preset paths (None = dismissed) and records prompts."""

    def __init__(self, open_path: Optional[Path] = None, save_path: Optional[Path] = None):
        self.open_path = open_path
        self.save_path = save_path
        self.save_prompts: list[str] = []
        self.open_prompts = 0

    async def pick_open(self) -> Optional[Path]:
        self.open_prompts += 1
        return self.open_path

    async def pick_save(self, suggested_name: str) -> Optional[Path]:
        self.save_prompts.append(suggested_name)
        return self.save_path


class RecordingNotifier:
    def __init__(self):
        self.successes: list[str] = []
        self.errors: list[str] = []

    def success(self, message: str) -> None:
        self.successes.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)
