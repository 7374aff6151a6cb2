"""
Client for the remote decision evaluator (POST /simulate).

The evaluator owns rule semantics; this client only ships the graph plus an
execution context and turns the outcome into a SimulationTrace. Only transport
and HTTP failures become error traces; anything else propagates to the caller.
"""

import logging
import time
from typing import Any, Optional

import httpx

from backend.services.storage.remote import API_URL, response_body
from backend.utils.logging import log_simulation_run
from shared.schemas import DecisionContent, SimulationError, SimulationTrace

logger = logging.getLogger(__name__)

# Error bodies from the evaluator carry the failing node's message here
ERROR_MESSAGE_FIELD = "source"


class SimulationClient:
    """Runs simulations and keeps the latest trace for display."""

    def __init__(self, base_url: str = API_URL, client: Optional[httpx.AsyncClient] = None):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=None)
        self.trace: Optional[SimulationTrace] = None

    async def __aenter__(self) -> "SimulationClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def run(self, content: DecisionContent, context: Any) -> SimulationTrace:
        """Submit content + context; the returned trace also replaces self.trace."""
        payload = {"context": context, "content": content.to_json_dict()}
        started = time.perf_counter()
        try:
            response = await self._client.post("/simulate", json=payload)
            response.raise_for_status()
            trace = SimulationTrace(result=response_body(response))
        except httpx.HTTPStatusError as e:
            body = response_body(e.response)
            message = body.get(ERROR_MESSAGE_FIELD) if isinstance(body, dict) else None
            if not isinstance(message, str):
                message = None
            trace = SimulationTrace(
                error=SimulationError(
                    message=message or f"Simulation failed (HTTP {e.response.status_code})",
                    data=body,
                )
            )
            status_code = e.response.status_code
        except httpx.RequestError as e:
            trace = SimulationTrace(error=SimulationError(message=f"Simulation service unreachable: {e}"))
            status_code = None
        else:
            status_code = response.status_code

        log_simulation_run(
            logger,
            node_count=len(content.nodes),
            success=not trace.failed,
            status_code=status_code,
            duration_sec=round(time.perf_counter() - started, 4),
            error=trace.error.message if trace.error else None,
        )
        self.trace = trace
        return trace

    def clear(self) -> None:
        self.trace = None
