"""
Rulegraph FastAPI application entrypoint (decision document store).

Run with: uvicorn backend.main:app --reload
"""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.database import Base, engine
from backend.models_db import RuleFileModel  # noqa: F401  (registers the table)
from backend.routes import api_router
from backend.utils.logging import LOG_DIR, configure_logging

CORS_PERMISSIVE = bool(os.getenv("RULEGRAPH_CORS_PERMISSIVE"))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the logs dir and DB tables, and configure logging on startup."""
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    configure_logging()
    Base.metadata.create_all(bind=engine)
    yield
    # Shutdown: nothing to do for SQLite


app = FastAPI(
    title="Rulegraph API",
    description="""Decision document store for the Rulegraph editor.

Stored documents are JDM decision graphs serialized as JSON with
`contentType: application/vnd.gorules.decision`.
""",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS for local editor dev (Vite default port 5173); RULEGRAPH_CORS_PERMISSIVE allows any origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if CORS_PERMISSIVE else ["http://localhost:5173", "http://127.0.0.1:5173"],
    allow_credentials=not CORS_PERMISSIVE,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/")
def root():
    return {"service": "Rulegraph", "docs": "/docs", "api": "/api"}
