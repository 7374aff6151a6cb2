"""
Health and metrics for the document store (/api/health, /api/metrics).
"""

import logging
from typing import Any

from sqlalchemy import func, text

from backend.database import SessionLocal, engine
from backend.models_db import RuleFileModel

logger = logging.getLogger(__name__)


def check_db() -> tuple[bool, str]:
    """Check database connectivity. Returns (ok, message)."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True, "ok"
    except Exception as e:
        return False, str(e)


def get_health() -> dict[str, Any]:
    db_ok, db_msg = check_db()
    return {
        "status": "healthy" if db_ok else "unhealthy",
        "checks": {
            "database": {"status": "up" if db_ok else "down", "message": db_msg},
        },
    }


def get_metrics(db=None) -> dict[str, Any]:
    """Aggregate document store metrics."""
    own_session = db is None
    if own_session:
        db = SessionLocal()
    try:
        count, total_bytes = db.query(
            func.count(RuleFileModel.name),
            func.coalesce(func.sum(func.length(RuleFileModel.content)), 0),
        ).one()
        return {"documents_stored": count or 0, "stored_bytes": int(total_bytes or 0)}
    except Exception as e:
        logger.exception("get_metrics failed: %s", e)
        return {"documents_stored": 0, "stored_bytes": 0, "error": str(e)}
    finally:
        if own_session:
            db.close()
