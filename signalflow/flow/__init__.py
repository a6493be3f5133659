"""
Maximum flow / minimum cut on directed capacity graphs.
"""

from .graph import FlowEdge, FlowGraph, sample_flow_network
from .ford_fulkerson import (
    PathStep,
    FlowResult,
    find_augmenting_path,
    find_bottleneck_capacity,
    augment_flow,
    max_flow,
    min_cut,
    run_max_flow,
)
from .stepping import StepPhase, StepState, begin_stepping, advance

__all__ = [
    'FlowEdge',
    'FlowGraph',
    'sample_flow_network',
    'PathStep',
    'FlowResult',
    'find_augmenting_path',
    'find_bottleneck_capacity',
    'augment_flow',
    'max_flow',
    'min_cut',
    'run_max_flow',
    'StepPhase',
    'StepState',
    'begin_stepping',
    'advance',
]
