"""
Structural validation of decision graphs.

Edges are interpreted as directed arcs between node IDs. A document is only
trusted (saved, exported, imported) when that graph is acyclic. Parallel edges
between the same pair of nodes collapse to one arc.
"""

import logging
import time
from typing import Optional

import networkx as nx
from pydantic import BaseModel, Field

from backend.services.errors import CycleDetectedError
from backend.utils.logging import log_validation_result
from shared.schemas import DecisionContent

logger = logging.getLogger(__name__)


class GraphIssue(BaseModel):
    """A single validation issue."""

    code: str = Field(..., description="Error code (e.g. cycle)")
    message: str = Field(..., description="Human-readable message")
    path: Optional[list[str]] = Field(None, description="Node IDs involved, in order")


def build_graph(content: DecisionContent) -> nx.DiGraph:
    """Directed graph over every node ID mentioned by an edge."""
    graph = nx.DiGraph()
    for edge in content.edges:
        graph.add_edge(edge.source_id, edge.target_id)
    return graph


def find_cycle(content: DecisionContent) -> Optional[list[str]]:
    """Return the node IDs along the first cycle found, or None if the graph is a DAG."""
    graph = build_graph(content)
    try:
        arcs = nx.find_cycle(graph, orientation="original")
    except nx.NetworkXNoCycle:
        return None
    return [source for source, _target, _direction in arcs]


def has_cycle(content: DecisionContent) -> bool:
    return find_cycle(content) is not None


def validate_graph(content: DecisionContent) -> None:
    """Raise CycleDetectedError when the edges contain a directed cycle."""
    started = time.perf_counter()
    cycle = find_cycle(content)
    log_validation_result(
        logger,
        node_count=len(content.nodes),
        edge_count=len(content.edges),
        cycle=cycle,
        duration_sec=round(time.perf_counter() - started, 6),
    )
    if cycle is not None:
        raise CycleDetectedError(cycle)


def check_graph(content: DecisionContent) -> list[GraphIssue]:
    """Validation report form of validate_graph (empty list when valid)."""
    cycle = find_cycle(content)
    if cycle is None:
        return []
    return [
        GraphIssue(
            code="cycle",
            message=f"Cycle detected: {' -> '.join(cycle + cycle[:1])}",
            path=cycle,
        )
    ]
