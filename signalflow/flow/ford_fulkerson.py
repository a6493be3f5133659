"""
Ford-Fulkerson maximum flow with breadth-first path search (Edmonds-Karp).

The residual graph is never materialised: a forward step along an edge uses its
spare capacity ``capacity - flow``, a backward step against an edge cancels up
to ``flow`` units already sent along it.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field

from signalflow.errors import MissingEndpointError
from signalflow.flow.graph import FlowEdge, FlowGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathStep:
    """One hop of an augmenting path; forward=False traverses the edge backwards."""
    edge_id: str
    forward: bool = True


AugmentingPath = tuple[PathStep, ...]


@dataclass
class FlowResult:
    """Outcome of a complete max-flow run."""
    total_flow: float
    cut_edges: list[str]
    steps: list[str] = field(default_factory=list)
    reachable: set[str] = field(default_factory=set)
    augmentations: int = 0


def validate_endpoints(graph: FlowGraph, source: str | None, sink: str | None) -> None:
    """Check that source and sink are chosen and exist in the graph.

    Raises:
        MissingEndpointError: If either endpoint is unset
        InvalidEndpointError: If either endpoint is not a node of the graph
    """
    if not source or not sink:
        missing = [name for name, value in (("source", source), ("sink", sink)) if not value]
        raise MissingEndpointError(f"Set the {' and '.join(missing)} before running the flow computation")
    graph.require_node(source)
    graph.require_node(sink)


def _adjacency(graph: FlowGraph) -> tuple[dict[str, list[FlowEdge]], dict[str, list[FlowEdge]]]:
    outgoing: dict[str, list[FlowEdge]] = {node: [] for node in graph.nodes}
    incoming: dict[str, list[FlowEdge]] = {node: [] for node in graph.nodes}
    for edge in graph.edges:
        outgoing[edge.source].append(edge)
        incoming[edge.target].append(edge)
    return outgoing, incoming


def _residual_bfs(graph: FlowGraph, source: str, stop_at: str | None = None) -> dict[str, PathStep | None]:
    """BFS over residual arcs; returns parent step per discovered node."""
    outgoing, incoming = _adjacency(graph)
    parent: dict[str, PathStep | None] = {source: None}
    queue = deque([source])

    while queue:
        node = queue.popleft()
        for edge in outgoing[node]:
            if edge.target not in parent and edge.capacity - edge.flow > 0:
                parent[edge.target] = PathStep(edge.id, forward=True)
                queue.append(edge.target)
        for edge in incoming[node]:
            if edge.source not in parent and edge.flow > 0:
                parent[edge.source] = PathStep(edge.id, forward=False)
                queue.append(edge.source)
        if stop_at is not None and stop_at in parent:
            break

    return parent


def find_augmenting_path(graph: FlowGraph, source: str, sink: str) -> AugmentingPath:
    """Shortest (fewest hops) augmenting path from source to sink, or () if none."""
    validate_endpoints(graph, source, sink)
    if source == sink:
        return ()

    parent = _residual_bfs(graph, source, stop_at=sink)
    if sink not in parent:
        return ()

    path: list[PathStep] = []
    current = sink
    while current != source:
        step = parent[current]
        path.append(step)
        edge = graph.edge(step.edge_id)
        current = edge.source if step.forward else edge.target
    path.reverse()
    logger.debug("Augmenting path: %s", format_path(graph, tuple(path), source))
    return tuple(path)


def residual_capacity(graph: FlowGraph, step: PathStep) -> float:
    edge = graph.edge(step.edge_id)
    return edge.capacity - edge.flow if step.forward else edge.flow


def find_bottleneck_capacity(graph: FlowGraph, path: AugmentingPath) -> float:
    """Smallest residual capacity along the path."""
    if not path:
        raise ValueError("Bottleneck of an empty path is undefined")
    return min(residual_capacity(graph, step) for step in path)


def augment_flow(graph: FlowGraph, path: AugmentingPath, bottleneck: float) -> None:
    """Push bottleneck units along the path (cancelling flow on backward steps)."""
    for step in path:
        edge = graph.edge(step.edge_id)
        if step.forward:
            edge.flow += bottleneck
        else:
            edge.flow -= bottleneck


def max_flow(graph: FlowGraph, source: str, sink: str, log: list[str] | None = None) -> float:
    """Augment until no path remains and return the flow added.

    Existing edge flows are kept as the starting point; call
    ``graph.reset_flow()`` first for a computation from zero.
    """
    validate_endpoints(graph, source, sink)
    total, _ = _augment_until_blocked(graph, source, sink, log)
    return total


def _augment_until_blocked(graph: FlowGraph, source: str, sink: str, log: list[str] | None) -> tuple[float, int]:
    total = 0
    count = 0
    if source == sink:
        return total, count

    path = find_augmenting_path(graph, source, sink)
    while path:
        bottleneck = find_bottleneck_capacity(graph, path)
        augment_flow(graph, path, bottleneck)
        total += bottleneck
        count += 1
        if log is not None:
            log.append(
                f"Augmenting path {format_path(graph, path, source)} found, "
                f"bottleneck {bottleneck:g}; total flow {total:g}"
            )
        path = find_augmenting_path(graph, source, sink)

    if log is not None:
        log.append(f"No further augmenting path. Maximum flow: {total:g}")
    return total, count


def residual_reachable(graph: FlowGraph, source: str) -> set[str]:
    """Nodes reachable from source through residual arcs."""
    graph.require_node(source)
    return set(_residual_bfs(graph, source))


def min_cut(graph: FlowGraph, source: str, sink: str | None = None) -> list[FlowEdge]:
    """Edges leaving the source side of the residual graph.

    Only meaningful once max flow has been reached; the capacities of the
    returned edges then sum to the maximum flow.
    """
    graph.require_node(source)
    if sink is not None:
        graph.require_node(sink)
        if source == sink:
            return []
    reachable = residual_reachable(graph, source)
    return [e for e in graph.edges if e.source in reachable and e.target not in reachable]


def cut_capacity(edges: list[FlowEdge]) -> float:
    return sum(e.capacity for e in edges)


def run_max_flow(graph: FlowGraph, source: str | None, sink: str | None) -> FlowResult:
    """Reset flows, compute the maximum flow and derive the minimum cut."""
    validate_endpoints(graph, source, sink)
    graph.reset_flow()
    steps = ["Initialise flow to 0 on all edges"]

    total, count = _augment_until_blocked(graph, source, sink, steps)
    cut = min_cut(graph, source, sink)
    reachable = residual_reachable(graph, source) if source != sink else {source}
    steps.append(f"Minimum cut: {', '.join(e.id for e in cut) or 'none'}")
    logger.info("Max flow %s -> %s: %g (%d cut edges)", source, sink, total, len(cut))

    return FlowResult(
        total_flow=total,
        cut_edges=[e.id for e in cut],
        steps=steps,
        reachable=reachable,
        augmentations=count,
    )


def format_path(graph: FlowGraph, path: AugmentingPath, source: str) -> str:
    """Render a path as node ids, e.g. 'S -> A <- C -> T' (arrow = step direction)."""
    parts = [source]
    current = source
    for step in path:
        edge = graph.edge(step.edge_id)
        current = edge.target if step.forward else edge.source
        parts.append(("-> " if step.forward else "<- ") + current)
    return " ".join(parts)
