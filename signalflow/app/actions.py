"""High-level mutations on AppState reused across front ends.

Every action validates operator input before touching state and reports
problems through the returned ActionResult instead of raising, so a front end
can show the message inline next to the control that caused it.
"""

from __future__ import annotations

import functools
import logging
import math
import numbers
from dataclasses import dataclass

from signalflow import defaults
from signalflow.app.core import AppState, FieldState, FlowState, SimulationStatus
from signalflow.errors import InputValidationError, SignalflowError
from signalflow.field.metrics import compute_metrics
from signalflow.field.simulation import compute_field
from signalflow.flow.ford_fulkerson import run_max_flow
from signalflow.flow.graph import sample_flow_network
from signalflow.flow.stepping import StepPhase, advance, begin_stepping
from signalflow.materials import Material
from signalflow.serialization import load_graph, save_graph
from signalflow.types import Wall, WaveSource

logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    ok: bool
    message: str = ""

    def __bool__(self) -> bool:
        return self.ok


def _reports_errors(func):
    """Turn SignalflowError raised by an action into a failed ActionResult."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> ActionResult:
        try:
            return func(*args, **kwargs)
        except SignalflowError as e:
            logger.info("%s rejected: %s", func.__name__, e)
            return ActionResult(False, str(e))

    return wrapper


def parse_number(name: str, value, minimum: float | None = None, maximum: float | None = None) -> float:
    """Parse an operator-entered number and check it against inclusive bounds."""
    if isinstance(value, bool):
        raise InputValidationError(f"{name} must be a number, got {value!r}")
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            raise InputValidationError(f"{name} must be a number, got {value!r}") from None
    if not isinstance(value, numbers.Real) or not math.isfinite(value):
        raise InputValidationError(f"{name} must be a finite number, got {value!r}")
    if minimum is not None and value < minimum:
        raise InputValidationError(f"{name} must be >= {minimum:g}, got {value:g}")
    if maximum is not None and value > maximum:
        raise InputValidationError(f"{name} must be <= {maximum:g}, got {value:g}")
    return float(value)


# ============================================================================
# Flow network editor
# ============================================================================

def _graph_changed(flow: FlowState) -> None:
    flow.graph.reset_flow()
    flow.invalidate()


@_reports_errors
def add_flow_node(state: AppState, node_id: str) -> ActionResult:
    flow = state.flow
    if node_id in flow.graph:
        return ActionResult(False, f"Node {node_id!r} already exists")
    flow.graph.add_node(node_id)
    _graph_changed(flow)
    return ActionResult(True, f"Added node {node_id}")


@_reports_errors
def remove_flow_node(state: AppState, node_id: str) -> ActionResult:
    flow = state.flow
    flow.graph.remove_node(node_id)
    if flow.source == node_id:
        flow.source = None
    if flow.sink == node_id:
        flow.sink = None
    _graph_changed(flow)
    return ActionResult(True, f"Removed node {node_id}")


@_reports_errors
def add_flow_edge(state: AppState, source: str, target: str, capacity=defaults.DEFAULT_EDGE_CAPACITY,
                  edge_id: str | None = None) -> ActionResult:
    flow = state.flow
    edge = flow.graph.add_edge(edge_id, source, target, capacity)
    _graph_changed(flow)
    return ActionResult(True, f"Added edge {edge.id} ({edge.capacity:g})")


@_reports_errors
def remove_flow_edge(state: AppState, edge_id: str) -> ActionResult:
    flow = state.flow
    if edge_id not in flow.graph.flows():
        return ActionResult(False, f"Edge {edge_id!r} does not exist")
    flow.graph.remove_edge(edge_id)
    _graph_changed(flow)
    return ActionResult(True, f"Removed edge {edge_id}")


@_reports_errors
def set_edge_capacity(state: AppState, edge_id: str, capacity) -> ActionResult:
    """Change an edge capacity from operator text or a number."""
    flow = state.flow
    if edge_id not in flow.graph.flows():
        return ActionResult(False, f"Edge {edge_id!r} does not exist")
    flow.graph.set_capacity(edge_id, capacity)
    _graph_changed(flow)
    return ActionResult(True, f"Capacity of {edge_id} set to {flow.graph.edge(edge_id).capacity:g}")


@_reports_errors
def set_source(state: AppState, node_id: str) -> ActionResult:
    state.flow.graph.require_node(node_id)
    state.flow.source = node_id
    _graph_changed(state.flow)
    return ActionResult(True, f"Source set to {node_id}")


@_reports_errors
def set_sink(state: AppState, node_id: str) -> ActionResult:
    state.flow.graph.require_node(node_id)
    state.flow.sink = node_id
    _graph_changed(state.flow)
    return ActionResult(True, f"Sink set to {node_id}")


@_reports_errors
def run_flow(state: AppState) -> ActionResult:
    """Compute maximum flow and minimum cut in one go."""
    flow = state.flow
    flow.step_state = None
    result = run_max_flow(flow.graph, flow.source, flow.sink)
    flow.last_result = result
    cut = ", ".join(result.cut_edges) or "none"
    return ActionResult(True, f"Maximum flow: {result.total_flow:g}; minimum cut: {cut}")


@_reports_errors
def step_flow(state: AppState) -> ActionResult:
    """Advance the step-by-step run by one transition, starting one if needed."""
    flow = state.flow
    if flow.step_state is None or flow.step_state.done:
        flow.last_result = None
        flow.step_state = begin_stepping(flow.graph, flow.source, flow.sink)
        return ActionResult(True, flow.step_state.log[-1])

    previous = flow.step_state
    flow.step_state = advance(flow.graph, flow.source, flow.sink, previous)
    new_lines = flow.step_state.log[len(previous.log):]
    if flow.step_state.phase is StepPhase.COMPLETE:
        logger.info("Stepping finished: max flow %g", flow.step_state.total_flow)
    return ActionResult(True, " ".join(new_lines))


def reset_flow(state: AppState) -> ActionResult:
    _graph_changed(state.flow)
    return ActionResult(True, "Flow reset to 0 on all edges")


def load_sample_network(state: AppState) -> ActionResult:
    state.flow = FlowState(graph=sample_flow_network(), source="S", sink="T")
    return ActionResult(True, "Loaded example network")


def save_flow_graph(state: AppState) -> ActionResult:
    flow = state.flow
    try:
        save_graph(state.store_path, flow.graph, flow.source, flow.sink)
    except SignalflowError as e:
        logger.warning("Saving graph failed: %s", e)
        return ActionResult(False, f"Could not save graph: {e}")
    logger.info("Saved graph to %s", state.store_path)
    return ActionResult(True, "Graph saved")


def restore_flow_graph(state: AppState) -> ActionResult:
    """Replace the current graph with the saved one; state is untouched on failure."""
    try:
        snapshot = load_graph(state.store_path)
    except SignalflowError as e:
        logger.warning("Restoring graph failed: %s", e)
        return ActionResult(False, f"Could not load graph: {e}")
    if snapshot is None:
        return ActionResult(False, "No saved graph found")

    state.flow = FlowState(graph=snapshot.graph, source=snapshot.source, sink=snapshot.sink)
    logger.info("Restored graph from %s", state.store_path)
    return ActionResult(True, "Graph restored")


# ============================================================================
# Field simulation
# ============================================================================

def _scene_changed(sim: FieldState) -> None:
    sim.field_dirty = True
    if sim.running:
        refresh_field(sim)


def refresh_field(sim: FieldState) -> None:
    """Recompute the cached field and metrics for the current time step."""
    sim.grid = compute_field(sim.walls, sim.sources, sim.time_step, sim.settings)
    sim.metrics = compute_metrics(sim.grid)
    sim.field_dirty = False


def _parse_material(material) -> Material:
    try:
        return Material(material)
    except ValueError:
        names = ", ".join(m.value for m in Material)
        raise InputValidationError(f"Unknown material {material!r}. Expected one of: {names}") from None


def _parse_frequency(frequency) -> float:
    frequency = parse_number("Frequency", frequency)
    if frequency not in defaults.SUPPORTED_FREQUENCIES_GHZ:
        choices = ", ".join(f"{f:g}" for f in defaults.SUPPORTED_FREQUENCIES_GHZ)
        raise InputValidationError(f"Frequency must be one of {choices} GHz, got {frequency:g}")
    return frequency


def _parse_power(power) -> float:
    return parse_number("Power", power, defaults.MIN_SOURCE_POWER_MW, defaults.MAX_SOURCE_POWER_MW)


def _parse_phase(phase) -> float:
    return parse_number("Phase", phase) % 360.0


@_reports_errors
def add_wall(state: AppState, x1, y1, x2, y2, material=Material.DRYWALL,
             thickness=defaults.DEFAULT_WALL_THICKNESS_MM) -> ActionResult:
    sim = state.simulation
    coords = [parse_number(name, v) for name, v in zip(("x1", "y1", "x2", "y2"), (x1, y1, x2, y2))]
    material = _parse_material(material)
    thickness = parse_number("Thickness", thickness,
                             defaults.MIN_WALL_THICKNESS_MM, defaults.MAX_WALL_THICKNESS_MM)
    wall = Wall(*coords, material=material, thickness=thickness)
    if wall.length < defaults.MIN_WALL_LENGTH:
        return ActionResult(False, f"Wall shorter than {defaults.MIN_WALL_LENGTH:g} units ignored")

    wall.id = sim.next_wall_id
    sim.next_wall_id += 1
    sim.walls.append(wall)
    _scene_changed(sim)
    return ActionResult(True, f"Added {material.value} wall")


@_reports_errors
def remove_wall(state: AppState, wall_id: int) -> ActionResult:
    sim = state.simulation
    wall = sim.find_wall(wall_id)
    if wall is None:
        return ActionResult(False, f"No wall with id {wall_id}")
    sim.walls.remove(wall)
    _scene_changed(sim)
    return ActionResult(True, "Wall removed")


@_reports_errors
def add_source(state: AppState, x, y, frequency=defaults.DEFAULT_SOURCE_FREQUENCY_GHZ,
               power=defaults.DEFAULT_SOURCE_POWER_MW, phase=defaults.DEFAULT_SOURCE_PHASE_DEG) -> ActionResult:
    sim = state.simulation
    source = WaveSource(
        x=parse_number("x", x),
        y=parse_number("y", y),
        frequency=_parse_frequency(frequency),
        power=_parse_power(power),
        phase=_parse_phase(phase),
    )
    source.id = sim.next_source_id
    sim.next_source_id += 1
    sim.sources.append(source)
    _scene_changed(sim)
    return ActionResult(True, f"Added {source.frequency:g} GHz source")


@_reports_errors
def update_source(state: AppState, source_id: int, frequency=None, power=None, phase=None) -> ActionResult:
    """Change any of a source's frequency, power or phase; others stay as they are."""
    sim = state.simulation
    source = sim.find_source(source_id)
    if source is None:
        return ActionResult(False, f"No source with id {source_id}")

    # Parse everything before assigning anything
    new_frequency = _parse_frequency(frequency) if frequency is not None else source.frequency
    new_power = _parse_power(power) if power is not None else source.power
    new_phase = _parse_phase(phase) if phase is not None else source.phase
    source.frequency, source.power, source.phase = new_frequency, new_power, new_phase
    _scene_changed(sim)
    return ActionResult(True, "Source updated")


@_reports_errors
def toggle_source(state: AppState, source_id: int) -> ActionResult:
    sim = state.simulation
    source = sim.find_source(source_id)
    if source is None:
        return ActionResult(False, f"No source with id {source_id}")
    source.active = not source.active
    _scene_changed(sim)
    return ActionResult(True, "Source enabled" if source.active else "Source disabled")


@_reports_errors
def remove_source(state: AppState, source_id: int) -> ActionResult:
    sim = state.simulation
    source = sim.find_source(source_id)
    if source is None:
        return ActionResult(False, f"No source with id {source_id}")
    sim.sources.remove(source)
    if sim.running and not sim.sources:
        sim.status = SimulationStatus.IDLE
        sim.field_dirty = True
        logger.info("Last source removed; simulation stopped at step %d", sim.time_step)
        return ActionResult(True, "Source removed; simulation stopped")
    _scene_changed(sim)
    return ActionResult(True, "Source removed")


def synchronize_phases(state: AppState) -> ActionResult:
    """Put every source in phase (0 degrees)."""
    sim = state.simulation
    for source in sim.sources:
        source.phase = 0.0
    _scene_changed(sim)
    return ActionResult(True, "All sources synchronised")


def anti_synchronize_phases(state: AppState) -> ActionResult:
    """Alternate sources between 0 and 180 degrees in insertion order."""
    sim = state.simulation
    for i, source in enumerate(sim.sources):
        source.phase = 0.0 if i % 2 == 0 else 180.0
    _scene_changed(sim)
    return ActionResult(True, "Sources set to alternating phase")


@_reports_errors
def start_simulation(state: AppState) -> ActionResult:
    sim = state.simulation
    if not sim.sources:
        raise InputValidationError("Add at least one source before starting the simulation")
    sim.status = SimulationStatus.RUNNING
    sim.time_step = 0
    refresh_field(sim)
    logger.info("Simulation started with %d sources and %d walls", len(sim.sources), len(sim.walls))
    return ActionResult(True, "Simulation running")


def stop_simulation(state: AppState) -> ActionResult:
    sim = state.simulation
    if not sim.running:
        return ActionResult(False, "Simulation is not running")
    sim.status = SimulationStatus.IDLE
    logger.info("Simulation stopped at step %d", sim.time_step)
    return ActionResult(True, "Simulation stopped")


def tick(state: AppState) -> ActionResult:
    """Advance the animation clock by one step and recompute the field."""
    sim = state.simulation
    if not sim.running:
        return ActionResult(False, "Simulation is not running")
    sim.time_step += 1
    refresh_field(sim)
    return ActionResult(True)


def clear_all(state: AppState) -> ActionResult:
    """Remove every wall and source and stop the simulation."""
    sim = state.simulation
    state.simulation = FieldState(settings=sim.settings)
    logger.info("Cleared %d walls and %d sources", len(sim.walls), len(sim.sources))
    return ActionResult(True, "Floor plan cleared")
