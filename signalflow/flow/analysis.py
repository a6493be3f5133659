"""Structural analysis of the editor graph (edge direction ignored)."""

from __future__ import annotations

from signalflow.flow.graph import FlowGraph


def connected_components(graph: FlowGraph, skip_edge: str | None = None) -> list[list[str]]:
    """Connected components of the undirected view, in node insertion order.

    Args:
        skip_edge: Edge id to treat as absent (used for bridge detection)
    """
    neighbours: dict[str, list[str]] = {node: [] for node in graph.nodes}
    for edge in graph.edges:
        if edge.id == skip_edge:
            continue
        neighbours[edge.source].append(edge.target)
        neighbours[edge.target].append(edge.source)

    visited: set[str] = set()
    components = []
    for start in graph.nodes:
        if start in visited:
            continue
        component = []
        stack = [start]
        visited.add(start)
        while stack:
            node = stack.pop()
            component.append(node)
            for other in reversed(neighbours[node]):
                if other not in visited:
                    visited.add(other)
                    stack.append(other)
        components.append(component)
    return components


def find_bridges(graph: FlowGraph) -> list[str]:
    """Edge ids whose removal increases the number of connected components."""
    baseline = len(connected_components(graph))
    return [
        edge.id
        for edge in graph.edges
        if len(connected_components(graph, skip_edge=edge.id)) > baseline
    ]
