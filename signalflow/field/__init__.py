"""
WiFi signal propagation: field superposition, metrics and heatmaps.
"""

from .simulation import compute_field, field_at
from .metrics import FieldMetrics, compute_metrics, signal_dbm, classify_interference

__all__ = [
    'compute_field',
    'field_at',
    'FieldMetrics',
    'compute_metrics',
    'signal_dbm',
    'classify_interference',
]
