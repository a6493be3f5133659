"""Directed capacity graph used by the flow engine."""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Iterable, Iterator

from signalflow.errors import InputValidationError, InvalidEndpointError


@dataclass
class FlowEdge:
    """Directed edge with capacity and current flow.

    ``0 <= flow <= capacity`` holds whenever no augmentation is in progress.
    """
    id: str
    source: str
    target: str
    capacity: float
    flow: float = 0


class FlowGraph:
    """Insertion-ordered directed multigraph keyed by node and edge ids."""

    def __init__(self, nodes: Iterable[str] = (), edges: Iterable[FlowEdge] = ()):
        self._nodes: dict[str, None] = {}
        self._edges: dict[str, FlowEdge] = {}
        for node in nodes:
            self.add_node(node)
        for edge in edges:
            self.add_edge(edge.id, edge.source, edge.target, edge.capacity, flow=edge.flow)

    def __repr__(self) -> str:
        return f"FlowGraph(nodes={len(self._nodes)}, edges={len(self._edges)})"

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._nodes

    # ------------------------------------------------------------------ nodes

    @property
    def nodes(self) -> list[str]:
        return list(self._nodes)

    def add_node(self, node_id: str) -> None:
        if not node_id:
            raise InputValidationError("Node id must be a non-empty string")
        self._nodes.setdefault(node_id, None)

    def remove_node(self, node_id: str) -> None:
        """Remove a node together with every incident edge."""
        self.require_node(node_id)
        for edge in [e for e in self._edges.values() if node_id in (e.source, e.target)]:
            del self._edges[edge.id]
        del self._nodes[node_id]

    def require_node(self, node_id: str) -> None:
        if node_id not in self._nodes:
            raise InvalidEndpointError(f"Node {node_id!r} is not in the graph")

    # ------------------------------------------------------------------ edges

    @property
    def edges(self) -> list[FlowEdge]:
        return list(self._edges.values())

    def edge(self, edge_id: str) -> FlowEdge:
        return self._edges[edge_id]

    def add_edge(
        self,
        edge_id: str | None,
        source: str,
        target: str,
        capacity: float,
        flow: float = 0,
    ) -> FlowEdge:
        """Add a directed edge between two existing nodes.

        Args:
            edge_id: Unique id; defaults to source + target
            capacity: Non-negative capacity
            flow: Initial flow, within [0, capacity]

        Raises:
            InvalidEndpointError: If either endpoint is missing
            InputValidationError: If the capacity is negative, the flow does not
                fit the capacity or the id is taken
        """
        self.require_node(source)
        self.require_node(target)
        capacity = validate_capacity(capacity)
        flow = validate_flow(flow, capacity)
        edge_id = edge_id or f"{source}{target}"
        if edge_id in self._edges:
            raise InputValidationError(f"Edge id {edge_id!r} already exists")
        edge = FlowEdge(id=edge_id, source=source, target=target, capacity=capacity, flow=flow)
        self._edges[edge_id] = edge
        return edge

    def remove_edge(self, edge_id: str) -> None:
        del self._edges[edge_id]

    def set_capacity(self, edge_id: str, capacity: float) -> None:
        capacity = validate_capacity(capacity)
        edge = self._edges[edge_id]
        edge.capacity = capacity
        edge.flow = min(edge.flow, capacity)

    def outgoing(self, node_id: str) -> Iterator[FlowEdge]:
        return (e for e in self._edges.values() if e.source == node_id)

    def incoming(self, node_id: str) -> Iterator[FlowEdge]:
        return (e for e in self._edges.values() if e.target == node_id)

    # ------------------------------------------------------------------ flows

    def reset_flow(self) -> None:
        """Zero the flow on every edge."""
        for edge in self._edges.values():
            edge.flow = 0

    def flows(self) -> dict[str, float]:
        return {edge_id: edge.flow for edge_id, edge in self._edges.items()}

    def net_outflow(self, node_id: str) -> float:
        """Outflow minus inflow at a node."""
        out = sum(e.flow for e in self.outgoing(node_id))
        into = sum(e.flow for e in self.incoming(node_id))
        return out - into


def validate_capacity(value) -> float:
    """Parse an operator-entered capacity; integers stay integers."""
    if isinstance(value, bool):
        raise InputValidationError(f"Capacity must be a number, got {value!r}")
    if isinstance(value, str):
        text = value.strip()
        try:
            value = int(text)
        except ValueError:
            try:
                value = float(text)
            except ValueError:
                raise InputValidationError(f"Capacity must be a number, got {text!r}") from None
    if not isinstance(value, numbers.Real):
        raise InputValidationError(f"Capacity must be a number, got {value!r}")
    if value != value or value in (float('inf'), float('-inf')):
        raise InputValidationError("Capacity must be finite")
    if value < 0:
        raise InputValidationError(f"Capacity must be non-negative, got {value}")
    return value


def validate_flow(value, capacity: float) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InputValidationError(f"Flow must be a number, got {value!r}")
    if not 0 <= value <= capacity:
        raise InputValidationError(f"Flow {value} does not fit capacity {capacity:g}")
    return value


def sample_flow_network() -> FlowGraph:
    """The five-node example network (source S, sink T)."""
    graph = FlowGraph(nodes=["S", "A", "B", "C", "T"])
    for edge_id, source, target, capacity in (
        ("SA", "S", "A", 10),
        ("SB", "S", "B", 10),
        ("AC", "A", "C", 25),
        ("BC", "B", "C", 6),
        ("AT", "A", "T", 10),
        ("CT", "C", "T", 10),
    ):
        graph.add_edge(edge_id, source, target, capacity)
    return graph
