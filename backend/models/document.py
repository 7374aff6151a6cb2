"""
In-memory state of the open decision document.

DocumentState is owned by a single DocumentController and passed by reference;
nothing else writes to it. Replacement is always wholesale: nodes, edges and the
handle change together or not at all.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from shared.schemas import DEFAULT_DOCUMENT_NAME, DecisionContent


class DocumentOrigin(str, Enum):
    """Where the open document was loaded from or last saved to."""

    NONE = "none"
    LOCAL_FILE = "local_file"
    REMOTE = "remote"


class DocumentHandle(BaseModel):
    """Display name plus an opaque reference to the document's persistence origin."""

    name: str = Field(DEFAULT_DOCUMENT_NAME, description="Display / file name")
    origin: DocumentOrigin = Field(DocumentOrigin.NONE, description="Persistence origin")
    reference: Optional[Any] = Field(
        None,
        description="Local path for local_file, document name for remote, None otherwise",
    )

    model_config = {"frozen": True}

    @property
    def is_bound(self) -> bool:
        return self.origin is not DocumentOrigin.NONE


class DocumentState:
    """Current content + handle of the open document."""

    def __init__(
        self,
        content: Optional[DecisionContent] = None,
        handle: Optional[DocumentHandle] = None,
    ):
        self._content = content or DecisionContent()
        self._handle = handle or DocumentHandle()

    @property
    def content(self) -> DecisionContent:
        return self._content

    @property
    def handle(self) -> DocumentHandle:
        return self._handle

    @property
    def name(self) -> str:
        return self._handle.name

    def snapshot(self) -> DecisionContent:
        """Deep copy of the content, safe to hand to slow I/O."""
        return self._content.model_copy(deep=True)

    def replace(self, content: DecisionContent, handle: DocumentHandle) -> None:
        self._content = content
        self._handle = handle

    def bind(self, handle: DocumentHandle) -> None:
        """Point the open document at a new persistence origin (after a save)."""
        self._handle = handle

    def update_content(self, content: DecisionContent) -> None:
        """Editor change; no validation (transient cycles are allowed while editing)."""
        self._content = content

    def rename(self, name: str) -> None:
        self._handle = self._handle.model_copy(update={"name": name.strip()})

    def reset(self) -> None:
        self.replace(DecisionContent(), DocumentHandle())
