"""Backend services (validation, storage, templates, simulation, document lifecycle)."""

from backend.services.errors import (
    CycleDetectedError,
    DocumentError,
    DocumentFormatError,
    StorageError,
    TransportError,
    UserCancelledError,
)
from backend.services.graph_validator import (
    GraphIssue,
    check_graph,
    find_cycle,
    has_cycle,
    validate_graph,
)
from backend.services.document_codec import (
    derive_file_name,
    load_document,
    parse_document,
    serialize_document,
)
from backend.services.template_loader import list_templates, load_template
from backend.services.simulation_client import SimulationClient
from backend.services.document_controller import (
    DocumentController,
    LoggingNotifier,
    Notifier,
    always_confirm,
)

__all__ = [
    "CycleDetectedError",
    "DocumentError",
    "DocumentFormatError",
    "StorageError",
    "TransportError",
    "UserCancelledError",
    "GraphIssue",
    "check_graph",
    "find_cycle",
    "has_cycle",
    "validate_graph",
    "derive_file_name",
    "load_document",
    "parse_document",
    "serialize_document",
    "list_templates",
    "load_template",
    "SimulationClient",
    "DocumentController",
    "LoggingNotifier",
    "Notifier",
    "always_confirm",
]
