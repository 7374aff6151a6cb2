"""
Built-in decision templates (examples offered in the Open menu).

Templates are shipped as decision document files under shared/templates and are
trusted as-is: no content type or cycle check on load.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from shared.schemas import DecisionContent

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent.parent / "shared" / "templates"

# Launch hint: template to pre-load when the editor starts
LAUNCH_TEMPLATE = os.getenv("RULEGRAPH_TEMPLATE") or None

# name -> (menu title, file under TEMPLATES_DIR)
TEMPLATES: dict[str, tuple[str, str]] = {
    "company-analysis": ("Fintech: Company analysis", "company_analysis.json"),
    "aml": ("Fintech: AML", "aml.json"),
    "shipping-fees": ("Retail: Shipping fees", "shipping_fees.json"),
}

_cache: dict[str, DecisionContent] = {}


def list_templates() -> list[tuple[str, str]]:
    """(name, title) pairs in menu order."""
    return [(name, title) for name, (title, _file) in TEMPLATES.items()]


def load_template(name: str) -> Optional[DecisionContent]:
    """Return a fresh copy of the named template, or None if no such template exists."""
    if not isinstance(name, str) or name not in TEMPLATES:
        return None
    if name not in _cache:
        _title, file_name = TEMPLATES[name]
        data = json.loads((TEMPLATES_DIR / file_name).read_text(encoding="utf-8"))
        _cache[name] = DecisionContent.model_validate(
            {"nodes": data.get("nodes") or [], "edges": data.get("edges") or []}
        )
        logger.debug("Loaded template %s from %s", name, file_name)
    return _cache[name].model_copy(deep=True)
