"""Toolkit-neutral application state for the flow and field demos."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from signalflow import defaults
from signalflow.field.metrics import FieldMetrics
from signalflow.flow.ford_fulkerson import FlowResult
from signalflow.flow.graph import FlowGraph, sample_flow_network
from signalflow.flow.stepping import StepState
from signalflow.types import FieldGrid, FieldSettings, Wall, WaveSource


@dataclass
class FlowState:
    """Graph editor state: the network, chosen endpoints and latest results."""

    graph: FlowGraph = field(default_factory=sample_flow_network)
    source: Optional[str] = "S"
    sink: Optional[str] = "T"

    # Set while stepping through the algorithm one transition at a time
    step_state: Optional[StepState] = None

    # Latest full run, cleared whenever the graph changes
    last_result: Optional[FlowResult] = None

    def invalidate(self) -> None:
        """Drop results that no longer describe the graph."""
        self.step_state = None
        self.last_result = None


class SimulationStatus(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"


@dataclass
class FieldState:
    """Floor-plan state: walls, transmitters, animation clock and cached field."""

    walls: list[Wall] = field(default_factory=list)
    sources: list[WaveSource] = field(default_factory=list)
    settings: FieldSettings = field(default_factory=FieldSettings)

    status: SimulationStatus = SimulationStatus.IDLE
    time_step: int = 0

    # Cached outputs; None until the first computation
    grid: Optional[FieldGrid] = None
    metrics: Optional[FieldMetrics] = None

    next_wall_id: int = 0
    next_source_id: int = 0

    # Scene changed since the cached field was computed
    field_dirty: bool = True

    @property
    def running(self) -> bool:
        return self.status is SimulationStatus.RUNNING

    def find_source(self, source_id: int) -> Optional[WaveSource]:
        for source in self.sources:
            if source.id == source_id:
                return source
        return None

    def find_wall(self, wall_id: int) -> Optional[Wall]:
        for wall in self.walls:
            if wall.id == wall_id:
                return wall
        return None


@dataclass
class AppState:
    """Central application state shared across front ends."""

    flow: FlowState = field(default_factory=FlowState)
    simulation: FieldState = field(default_factory=FieldState)

    # Key-value store file backing save/restore of the flow graph
    store_path: Path = field(default_factory=lambda: Path(defaults.DEFAULT_STORE_FILENAME))
