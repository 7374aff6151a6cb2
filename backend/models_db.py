"""
SQLAlchemy ORM models for the Rulegraph document store (persisted in SQLite).
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from backend.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RuleFileModel(Base):
    """Stored decision document, keyed by file name. Content is kept verbatim."""

    __tablename__ = "rule_files"

    name: Mapped[str] = mapped_column(String(256), primary_key=True, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, onupdate=_utcnow)
