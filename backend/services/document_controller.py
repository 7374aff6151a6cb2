"""
Document controller: the user-facing operations on the open decision document.

Every operation is all-or-nothing with respect to DocumentState. Failures are
reported once through the notifier; user cancellations are silent. Saves are
validated before any I/O; simulations are not, so evaluator errors can be
inspected on a cyclic draft.

Overlapping operations are not serialized: if a slow open or save resolves
after a newer one, the last one to resolve wins.
"""

import logging
from typing import Any, Awaitable, Callable, Optional, Protocol

from backend.models.document import DocumentHandle, DocumentState
from backend.services.errors import DocumentError, UserCancelledError
from backend.services.graph_validator import validate_graph
from backend.services.simulation_client import SimulationClient
from backend.services.storage import FileStorage, LoadedDocument, RemoteDocumentStore
from backend.services.template_loader import LAUNCH_TEMPLATE, load_template
from shared.schemas import DecisionContent, SimulationTrace

logger = logging.getLogger(__name__)

Confirm = Callable[[str, str], Awaitable[bool]]


class Notifier(Protocol):
    def success(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...


class LoggingNotifier:
    """Notifier for headless use: notifications go to the log."""

    def success(self, message: str) -> None:
        logger.info("%s", message)

    def error(self, message: str) -> None:
        logger.error("%s", message)


async def always_confirm(title: str, message: str) -> bool:
    return True


class DocumentController:
    """Owns the DocumentState and coordinates storage, templates and simulation."""

    def __init__(
        self,
        files: FileStorage,
        remote: Optional[RemoteDocumentStore] = None,
        simulator: Optional[SimulationClient] = None,
        state: Optional[DocumentState] = None,
        notifier: Optional[Notifier] = None,
        confirm: Confirm = always_confirm,
    ):
        self.files = files
        self.remote = remote
        self.simulator = simulator
        self.state = state or DocumentState()
        self.notifier = notifier or LoggingNotifier()
        self._confirm = confirm
        self.remote_documents: list[str] = []

    async def aclose(self) -> None:
        if self.remote is not None:
            await self.remote.aclose()
        if self.simulator is not None:
            await self.simulator.aclose()

    # -------------------------------------------------------------------------
    # New / rename / edit
    # -------------------------------------------------------------------------

    async def new_document(self) -> bool:
        confirmed = await self._confirm(
            "New decision",
            "Are you sure you want to create new blank decision, your current work might be lost?",
        )
        if not confirmed:
            return False
        self.state.reset()
        return True

    def rename(self, name: str) -> None:
        self.state.rename(name)

    def update_content(self, content: DecisionContent) -> None:
        self.state.update_content(content)

    # -------------------------------------------------------------------------
    # Open
    # -------------------------------------------------------------------------

    async def open_file(self) -> bool:
        return await self._open(self.files.read(), self.files.backend)

    async def open_remote(self, name: str) -> bool:
        if self.remote is None:
            self.notifier.error("Document store is not configured")
            return False
        opened = await self._open(self.remote.fetch_document(name), self.remote.backend)
        if opened:
            self.notifier.success("File retrieved successfully")
        return opened

    async def open_template(self, name: str) -> bool:
        """Open a built-in example after confirmation. Unknown names are ignored."""
        content = load_template(name)
        if content is None:
            return False
        confirmed = await self._confirm(
            "Open example",
            "Are you sure you want to open example decision, your current work might be lost?",
        )
        if not confirmed:
            return False
        self.state.replace(content, DocumentHandle(name=name))
        return True

    def preload_template(self, name: Optional[str] = LAUNCH_TEMPLATE) -> bool:
        """Apply a launch-time template hint; no confirmation, unknown names ignored."""
        if not name:
            return False
        content = load_template(name)
        if content is None:
            logger.debug("Ignoring unknown launch template %r", name)
            return False
        self.state.replace(content, DocumentHandle(name=name))
        return True

    async def _open(self, loading: Awaitable[LoadedDocument], backend: str) -> bool:
        try:
            loaded = await loading
        except UserCancelledError:
            return False
        except DocumentError as e:
            self._report("open", backend, e)
            return False
        self.state.replace(loaded.content, loaded.handle)
        return True

    # -------------------------------------------------------------------------
    # Save
    # -------------------------------------------------------------------------

    async def save(self) -> bool:
        """Write back to the bound local file, or prompt for a location."""
        return await self._save_file(save_as=False)

    async def save_as(self) -> bool:
        return await self._save_file(save_as=True)

    async def _save_file(self, save_as: bool) -> bool:
        content = self.state.snapshot()
        try:
            validate_graph(content)
            handle = await self.files.write(content, self.state.handle, save_as=save_as)
        except UserCancelledError:
            return False
        except DocumentError as e:
            self._report("save", self.files.backend, e)
            return False
        self._saved(handle)
        return True

    async def save_to_server(self) -> bool:
        if self.remote is None:
            self.notifier.error("Document store is not configured")
            return False
        content = self.state.snapshot()
        try:
            validate_graph(content)
            handle = await self.remote.create_document(self.state.name, content)
        except DocumentError as e:
            self._report("save", self.remote.backend, e)
            return False
        self._saved(handle)
        await self.refresh_remote_documents()
        return True

    def _saved(self, handle: DocumentHandle) -> None:
        self.state.bind(handle)
        self.notifier.success("File saved")

    async def refresh_remote_documents(self) -> bool:
        if self.remote is None:
            return False
        try:
            self.remote_documents = await self.remote.list_documents()
        except DocumentError as e:
            self._report("list", self.remote.backend, e)
            return False
        return True

    # -------------------------------------------------------------------------
    # Simulation
    # -------------------------------------------------------------------------

    @property
    def trace(self) -> Optional[SimulationTrace]:
        return self.simulator.trace if self.simulator is not None else None

    async def run_simulation(self, context: Any) -> Optional[SimulationTrace]:
        if self.simulator is None:
            self.notifier.error("Simulation service is not configured")
            return None
        return await self.simulator.run(self.state.snapshot(), context)

    def clear_simulation(self) -> None:
        if self.simulator is not None:
            self.simulator.clear()

    def _report(self, operation: str, backend: str, error: DocumentError) -> None:
        logger.warning("%s via %s failed: %s", operation, backend, error.message)
        self.notifier.error(error.message)
