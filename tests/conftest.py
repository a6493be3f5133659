"""Test configuration for signalflow."""

import random

import pytest

from signalflow.flow.graph import FlowGraph, sample_flow_network


@pytest.fixture
def sample_graph() -> FlowGraph:
    """The five-node S/A/B/C/T example network."""
    return sample_flow_network()


def random_flow_graph(seed: int, n_nodes: int = 8, edge_probability: float = 0.35,
                      max_capacity: int = 20) -> FlowGraph:
    """Random directed graph with integer capacities; node 0 is source, last is sink."""
    rng = random.Random(seed)
    nodes = [str(i) for i in range(n_nodes)]
    graph = FlowGraph(nodes=nodes)
    for u in nodes:
        for v in nodes:
            if u != v and rng.random() < edge_probability:
                graph.add_edge(f"{u}-{v}", u, v, rng.randint(0, max_capacity))
    return graph


@pytest.fixture
def make_random_graph():
    return random_flow_graph
