"""
Structured logging for Rulegraph.

- Configurable level (DEBUG, INFO, WARN, ERROR)
- Writes to /logs/ directory
- Console handler for development
- Helpers for storage operations, graph validation and simulation runs
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

# Default: project root / logs
LOG_DIR = Path(__file__).resolve().parent.parent.parent / "logs"
LOG_LEVEL = os.getenv("RULEGRAPH_LOG_LEVEL", "INFO").upper()


def _ensure_log_dir(log_dir: Path) -> Path:
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def configure_logging(
    level: str = LOG_LEVEL,
    log_dir: Optional[Path] = None,
    log_to_console: bool = True,
) -> None:
    """Configure root and Rulegraph loggers. Call once at app startup."""
    log_dir = _ensure_log_dir(log_dir or LOG_DIR)
    level_value = getattr(logging, level.upper(), logging.INFO)

    file_handler = logging.FileHandler(log_dir / "rulegraph.log", encoding="utf-8")
    file_handler.setLevel(level_value)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    )

    root = logging.getLogger()
    root.setLevel(level_value)
    # Avoid duplicate handlers when reloading
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(file_handler)
    if log_to_console:
        console = logging.StreamHandler(sys.stdout)
        console.setLevel(level_value)
        console.setFormatter(logging.Formatter("%(levelname)s | %(name)s | %(message)s"))
        root.addHandler(console)

    logging.getLogger("backend").setLevel(level_value)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level_value, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module (e.g. backend.services.document_controller)."""
    return logging.getLogger(name)


def log_storage_operation(
    logger: logging.Logger,
    operation: str,
    backend: str,
    name: Optional[str] = None,
    success: bool = True,
    error: Optional[str] = None,
    extra: Optional[dict[str, Any]] = None,
) -> None:
    """Log a document read/write against a storage backend (local, download, remote)."""
    payload = {
        "event": "storage",
        "operation": operation,
        "backend": backend,
        "name": name,
        "success": success,
        "error": error,
        "ts": _now(),
    }
    if extra:
        payload.update(extra)
    if success:
        logger.info("Storage: %s", json.dumps(payload, default=str))
    else:
        logger.warning("Storage: %s", json.dumps(payload, default=str))


def log_validation_result(
    logger: logging.Logger,
    node_count: int,
    edge_count: int,
    cycle: Optional[list[str]],
    duration_sec: Optional[float] = None,
) -> None:
    """Log a graph validation run."""
    payload = {
        "event": "validation",
        "nodes": node_count,
        "edges": edge_count,
        "cycle": cycle,
        "duration_sec": duration_sec,
        "ts": _now(),
    }
    level = logging.WARNING if cycle else logging.DEBUG
    logger.log(level, "Validation: %s", json.dumps(payload, default=str))


def log_simulation_run(
    logger: logging.Logger,
    node_count: int,
    success: bool,
    status_code: Optional[int] = None,
    duration_sec: Optional[float] = None,
    error: Optional[str] = None,
) -> None:
    """Log a simulation request against the remote evaluator."""
    payload = {
        "event": "simulation",
        "nodes": node_count,
        "success": success,
        "status_code": status_code,
        "duration_sec": duration_sec,
        "error": error,
        "ts": _now(),
    }
    if success:
        logger.info("Simulation: %s", json.dumps(payload, default=str))
    else:
        logger.warning("Simulation: %s", json.dumps(payload, default=str))
