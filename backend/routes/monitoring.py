"""Health and metrics endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.database import get_db
from backend.services.monitoring_service import get_health, get_metrics

router = APIRouter(tags=["monitoring"])


@router.get("/health", summary="Health check")
def health():
    """Health check for load balancers and orchestration. Reports database status."""
    return get_health()


@router.get("/metrics", summary="Document store metrics")
def metrics(db: Session = Depends(get_db)):
    """Stored document count and total size."""
    return get_metrics(db)
