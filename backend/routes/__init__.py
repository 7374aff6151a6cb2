"""API routes for the Rulegraph backend."""

from fastapi import APIRouter

from backend.routes import monitoring, rule_files

api_router = APIRouter(prefix="/api", tags=["api"])

api_router.include_router(monitoring.router)
api_router.include_router(rule_files.router, prefix="/rules", tags=["rules"])
