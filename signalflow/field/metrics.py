"""Summary metrics derived from a computed field grid."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from signalflow import defaults
from signalflow.types import FieldGrid, WaveSource


@dataclass
class FieldMetrics:
    coverage_percent: float  # Cells stronger than STRONG_SIGNAL_DBM
    dead_zone_percent: float  # Cells weaker than DEAD_ZONE_DBM
    average_quality_dbm: float
    average_interference: float  # Mean over cells reached by at least one source


def signal_dbm(magnitude):
    """Field magnitude to a dBm-like display scale. Works on scalars and arrays."""
    return 20.0 * np.log10(np.asarray(magnitude, dtype=np.float64) + defaults.DBM_FLOOR_OFFSET) + defaults.DBM_REFERENCE


def compute_metrics(grid: FieldGrid) -> FieldMetrics:
    dbm = signal_dbm(grid.magnitude)
    total = dbm.size
    if total == 0:
        return FieldMetrics(0.0, 0.0, 0.0, 0.0)

    coverage = 100.0 * np.count_nonzero(dbm > defaults.STRONG_SIGNAL_DBM) / total
    dead = 100.0 * np.count_nonzero(dbm < defaults.DEAD_ZONE_DBM) / total

    if grid.contributing is not None:
        reached = grid.interference[grid.contributing]
    else:
        reached = grid.interference[grid.interference > 0]
    avg_interference = float(reached.mean()) if reached.size else 0.0

    return FieldMetrics(
        coverage_percent=float(coverage),
        dead_zone_percent=float(dead),
        average_quality_dbm=float(dbm.mean()),
        average_interference=avg_interference,
    )


def classify_interference(coefficient: float) -> str:
    """Label an interference coefficient as constructive, destructive or neutral."""
    if coefficient > defaults.CONSTRUCTIVE_THRESHOLD:
        return "constructive"
    if coefficient < defaults.DESTRUCTIVE_THRESHOLD:
        return "destructive"
    return "neutral"


def first_fresnel_radius(source: WaveSource, target: tuple[float, float]) -> float:
    """Maximum radius of the first Fresnel zone between source and target, in metres."""
    distance_m = math.hypot(target[0] - source.x, target[1] - source.y) / defaults.UNITS_PER_METER
    wavelength_m = defaults.SPEED_OF_LIGHT / (source.frequency * 1e9)
    return math.sqrt(wavelength_m * distance_m / 2.0)


def phase_relationship(a: WaveSource, b: WaveSource) -> tuple[float, bool]:
    """Phase difference in degrees and whether the pair is (nearly) in phase."""
    diff = abs(a.phase - b.phase)
    wrapped = diff % 360.0
    return diff, wrapped < 30.0 or wrapped > 330.0
