"""Tests for the Edmonds-Karp max flow / min cut engine."""

import networkx as nx
import pytest

from signalflow.errors import InputValidationError, InvalidEndpointError, MissingEndpointError
from signalflow.flow import (
    FlowGraph,
    PathStep,
    augment_flow,
    find_augmenting_path,
    find_bottleneck_capacity,
    max_flow,
    min_cut,
    run_max_flow,
)
from signalflow.flow.ford_fulkerson import cut_capacity, format_path, residual_reachable
from signalflow.flow.graph import validate_capacity


def networkx_max_flow(graph: FlowGraph, source: str, sink: str) -> float:
    """Reference value from networkx; parallel edges are merged by summing capacity."""
    g = nx.DiGraph()
    g.add_nodes_from(graph.nodes)
    for edge in graph.edges:
        if g.has_edge(edge.source, edge.target):
            g[edge.source][edge.target]['capacity'] += edge.capacity
        else:
            g.add_edge(edge.source, edge.target, capacity=edge.capacity)
    return nx.maximum_flow_value(g, source, sink)


def assert_valid_flow(graph: FlowGraph, source: str, sink: str, total: float) -> None:
    for edge in graph.edges:
        assert 0 <= edge.flow <= edge.capacity, edge
    for node in graph.nodes:
        if node not in (source, sink):
            assert graph.net_outflow(node) == pytest.approx(0)
    assert graph.net_outflow(source) == pytest.approx(total)
    assert graph.net_outflow(sink) == pytest.approx(-total)


class TestSampleNetwork:
    """The worked example: S->A->T and S->B->C->T limited by SA and BC."""

    def test_first_path_is_shortest(self, sample_graph):
        path = find_augmenting_path(sample_graph, "S", "T")
        assert path == (PathStep("SA"), PathStep("AT"))
        assert find_bottleneck_capacity(sample_graph, path) == 10

    def test_max_flow_value(self, sample_graph):
        result = run_max_flow(sample_graph, "S", "T")
        assert result.total_flow == 16
        assert result.augmentations == 2

    def test_augmentation_order(self, sample_graph):
        result = run_max_flow(sample_graph, "S", "T")
        assert result.steps[0] == "Initialise flow to 0 on all edges"
        assert "S -> A -> T" in result.steps[1]
        assert "bottleneck 10" in result.steps[1]
        assert "S -> B -> C -> T" in result.steps[2]
        assert "bottleneck 6" in result.steps[2]

    def test_min_cut(self, sample_graph):
        result = run_max_flow(sample_graph, "S", "T")
        assert sorted(result.cut_edges) == ["BC", "SA"]
        assert result.reachable == {"S", "B"}
        assert result.steps[-1] == "Minimum cut: SA, BC"

    def test_final_flows(self, sample_graph):
        run_max_flow(sample_graph, "S", "T")
        assert sample_graph.flows() == {"SA": 10, "SB": 6, "AC": 0, "BC": 6, "AT": 10, "CT": 6}
        assert_valid_flow(sample_graph, "S", "T", 16)


class TestEdgeCases:

    def test_source_equals_sink(self, sample_graph):
        result = run_max_flow(sample_graph, "A", "A")
        assert result.total_flow == 0
        assert result.cut_edges == []
        assert find_augmenting_path(sample_graph, "A", "A") == ()

    def test_unreachable_sink(self):
        graph = FlowGraph(nodes=["S", "A", "T"])
        graph.add_edge("SA", "S", "A", 5)
        result = run_max_flow(graph, "S", "T")
        assert result.total_flow == 0
        assert result.cut_edges == []
        assert result.reachable == {"S", "A"}
        assert find_augmenting_path(graph, "S", "T") == ()

    def test_zero_capacity_blocks(self):
        graph = FlowGraph(nodes=["S", "T"])
        graph.add_edge("ST", "S", "T", 0)
        assert run_max_flow(graph, "S", "T").total_flow == 0

    @pytest.mark.parametrize("source,sink", [(None, "T"), ("S", None), ("", "T"), (None, None)])
    def test_missing_endpoint(self, sample_graph, source, sink):
        with pytest.raises(MissingEndpointError):
            run_max_flow(sample_graph, source, sink)

    def test_unknown_endpoint(self, sample_graph):
        with pytest.raises(InvalidEndpointError):
            run_max_flow(sample_graph, "S", "Z")
        with pytest.raises(InvalidEndpointError):
            max_flow(sample_graph, "Q", "T")

    def test_endpoint_errors_do_not_touch_flows(self, sample_graph):
        sample_graph.edge("SA").flow = 3
        with pytest.raises(InvalidEndpointError):
            run_max_flow(sample_graph, "S", "Z")
        assert sample_graph.edge("SA").flow == 3

    @pytest.mark.parametrize("source,sink", [("X", "T"), ("S", "X"), ("X", "X")])
    def test_path_search_rejects_unknown_endpoint(self, sample_graph, source, sink):
        with pytest.raises(InvalidEndpointError):
            find_augmenting_path(sample_graph, source, sink)

    @pytest.mark.parametrize("source,sink", [("X", None), ("X", "T"), ("S", "X")])
    def test_min_cut_rejects_unknown_endpoint(self, sample_graph, source, sink):
        with pytest.raises(InvalidEndpointError):
            min_cut(sample_graph, source, sink)

    def test_reachability_rejects_unknown_source(self, sample_graph):
        with pytest.raises(InvalidEndpointError):
            residual_reachable(sample_graph, "X")

    def test_bottleneck_of_empty_path(self, sample_graph):
        with pytest.raises(ValueError):
            find_bottleneck_capacity(sample_graph, ())

    def test_parallel_edges(self):
        graph = FlowGraph(nodes=["S", "T"])
        graph.add_edge("a", "S", "T", 3)
        graph.add_edge("b", "S", "T", 4)
        assert run_max_flow(graph, "S", "T").total_flow == 7

    def test_fractional_capacities(self):
        graph = FlowGraph(nodes=["S", "A", "T"])
        graph.add_edge(None, "S", "A", 2.5)
        graph.add_edge(None, "A", "T", 1.25)
        assert run_max_flow(graph, "S", "T").total_flow == pytest.approx(1.25)


class TestBackwardSteps:
    """Augmenting paths that cancel flow must use edges in reverse."""

    def build(self) -> FlowGraph:
        graph = FlowGraph(nodes=["S", "A", "B", "T"])
        graph.add_edge("SA", "S", "A", 1)
        graph.add_edge("SB", "S", "B", 1)
        graph.add_edge("AB", "A", "B", 1)
        graph.add_edge("AT", "A", "T", 1)
        graph.add_edge("BT", "B", "T", 1)
        return graph

    def test_cancellation_path(self):
        graph = self.build()
        # Route the first unit the "wrong" way so the next path must cancel AB
        augment_flow(graph, (PathStep("SA"), PathStep("AB"), PathStep("BT")), 1)
        path = find_augmenting_path(graph, "S", "T")
        assert path == (PathStep("SB"), PathStep("AB", forward=False), PathStep("AT"))
        assert format_path(graph, path, "S") == "S -> B <- A -> T"

        augment_flow(graph, path, find_bottleneck_capacity(graph, path))
        assert graph.edge("AB").flow == 0
        assert max_flow(graph, "S", "T") == 0
        assert_valid_flow(graph, "S", "T", 2)


class TestProperties:

    @pytest.mark.parametrize("seed", range(25))
    def test_matches_networkx(self, make_random_graph, seed):
        graph = make_random_graph(seed)
        source, sink = graph.nodes[0], graph.nodes[-1]
        result = run_max_flow(graph, source, sink)
        assert result.total_flow == networkx_max_flow(graph, source, sink)

    @pytest.mark.parametrize("seed", range(25))
    def test_flow_is_feasible(self, make_random_graph, seed):
        graph = make_random_graph(seed, n_nodes=10)
        source, sink = graph.nodes[0], graph.nodes[-1]
        result = run_max_flow(graph, source, sink)
        assert_valid_flow(graph, source, sink, result.total_flow)

    @pytest.mark.parametrize("seed", range(25))
    def test_max_flow_equals_min_cut(self, make_random_graph, seed):
        graph = make_random_graph(seed)
        source, sink = graph.nodes[0], graph.nodes[-1]
        result = run_max_flow(graph, source, sink)
        cut = min_cut(graph, source, sink)
        assert cut_capacity(cut) == result.total_flow
        reachable = residual_reachable(graph, source)
        assert source in reachable
        assert sink not in reachable

    def test_reset_is_idempotent(self, sample_graph):
        first = run_max_flow(sample_graph, "S", "T")
        flows = sample_graph.flows()
        second = run_max_flow(sample_graph, "S", "T")
        assert second.total_flow == first.total_flow
        assert sample_graph.flows() == flows

    def test_max_flow_keeps_existing_flow(self, sample_graph):
        assert max_flow(sample_graph, "S", "T") == 16
        # Already saturated: a second call finds nothing more
        assert max_flow(sample_graph, "S", "T") == 0
        sample_graph.reset_flow()
        assert max_flow(sample_graph, "S", "T") == 16


class TestCapacityValidation:

    @pytest.mark.parametrize("value,expected", [(5, 5), ("7", 7), (" 2.5 ", 2.5), (0, 0)])
    def test_accepts(self, value, expected):
        assert validate_capacity(value) == expected

    @pytest.mark.parametrize("value", [-1, "abc", "", float("nan"), float("inf"), True, None])
    def test_rejects(self, value):
        with pytest.raises(InputValidationError):
            validate_capacity(value)

    def test_lowering_capacity_clamps_flow(self, sample_graph):
        run_max_flow(sample_graph, "S", "T")
        sample_graph.set_capacity("SA", 4)
        assert sample_graph.edge("SA").flow == 4

    def test_duplicate_edge_id(self, sample_graph):
        with pytest.raises(InputValidationError):
            sample_graph.add_edge("SA", "S", "A", 1)

    @pytest.mark.parametrize("flow", [-1, 11, float("nan"), "3", True])
    def test_initial_flow_must_fit_capacity(self, sample_graph, flow):
        with pytest.raises(InputValidationError):
            sample_graph.add_edge("SC", "S", "C", 10, flow=flow)
        assert "SC" not in sample_graph.flows()

    def test_initial_flow_at_capacity(self, sample_graph):
        edge = sample_graph.add_edge("SC", "S", "C", 10, flow=10)
        assert edge.flow == 10

    def test_edge_to_unknown_node(self, sample_graph):
        with pytest.raises(InvalidEndpointError):
            sample_graph.add_edge(None, "S", "Z", 1)
