"""Step-by-step Ford-Fulkerson for teaching.

Each call to ``advance`` performs exactly one transition so the caller can show
the discovered path before the flow along it changes:

    AWAITING_PATH --path found--> PATH_FOUND --augment--> AWAITING_PATH
    AWAITING_PATH --no path-----> COMPLETE

The state is an immutable value owned by the caller; the graph's edge flows are
the only thing mutated, and only by the PATH_FOUND -> AWAITING_PATH transition.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, replace

from signalflow.flow.ford_fulkerson import (
    AugmentingPath,
    augment_flow,
    find_augmenting_path,
    find_bottleneck_capacity,
    format_path,
    min_cut,
    validate_endpoints,
)
from signalflow.flow.graph import FlowGraph

logger = logging.getLogger(__name__)


class StepPhase(enum.Enum):
    AWAITING_PATH = "awaiting_path"
    PATH_FOUND = "path_found"
    COMPLETE = "complete"


@dataclass(frozen=True)
class StepState:
    phase: StepPhase = StepPhase.AWAITING_PATH
    path: AugmentingPath = ()
    bottleneck: float = 0
    total_flow: float = 0
    iteration: int = 0
    log: tuple[str, ...] = ()
    cut_edges: tuple[str, ...] = ()

    @property
    def done(self) -> bool:
        return self.phase is StepPhase.COMPLETE


def begin_stepping(graph: FlowGraph, source: str | None, sink: str | None) -> StepState:
    """Validate endpoints, zero all flows and return the initial state."""
    validate_endpoints(graph, source, sink)
    graph.reset_flow()
    return StepState(log=("Initialise flow to 0 on all edges",))


def advance(graph: FlowGraph, source: str, sink: str, state: StepState) -> StepState:
    """Perform one transition of the step protocol and return the new state."""
    if state.phase is StepPhase.COMPLETE:
        return state

    if state.phase is StepPhase.PATH_FOUND:
        augment_flow(graph, state.path, state.bottleneck)
        total = state.total_flow + state.bottleneck
        logger.debug("Step %d: augmented by %g, total %g", state.iteration, state.bottleneck, total)
        return replace(
            state,
            phase=StepPhase.AWAITING_PATH,
            path=(),
            bottleneck=0,
            total_flow=total,
            log=state.log + (f"Increased flow along the path by {state.bottleneck:g}; total flow {total:g}",),
        )

    path = find_augmenting_path(graph, source, sink)
    if not path:
        cut = tuple(e.id for e in min_cut(graph, source, sink))
        return replace(
            state,
            phase=StepPhase.COMPLETE,
            cut_edges=cut,
            log=state.log + (
                "No further augmenting path. Ford-Fulkerson complete.",
                f"Maximum flow: {state.total_flow:g}",
            ),
        )

    bottleneck = find_bottleneck_capacity(graph, path)
    return replace(
        state,
        phase=StepPhase.PATH_FOUND,
        path=path,
        bottleneck=bottleneck,
        iteration=state.iteration + 1,
        log=state.log + (
            f"Augmenting path found: {format_path(graph, path, source)}",
            f"Bottleneck capacity along the path: {bottleneck:g}",
        ),
    )


def run_to_completion(graph: FlowGraph, source: str, sink: str, state: StepState | None = None) -> StepState:
    """Drive ``advance`` until COMPLETE, starting fresh when no state is given."""
    if state is None:
        state = begin_stepping(graph, source, sink)
    while not state.done:
        state = advance(graph, source, sink, state)
    return state
