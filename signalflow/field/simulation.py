"""
WiFi field computation on the sampling grid.

Every cell is recomputed from scratch on each call: for each active source the
contribution is attenuated by distance (inverse square), by every wall crossing
the line of sight, and by knife-edge diffraction at the crossing walls' ends,
then summed as a phasor so sources interfere.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

import numba
import numpy as np

from signalflow import defaults
from signalflow.field.geometry import edge_diffraction, segments_intersect
from signalflow.materials import wall_attenuation_db
from signalflow.types import FieldGrid, FieldSettings, Wall, WaveSource

logger = logging.getLogger(__name__)

_UNITS_PER_METER = defaults.UNITS_PER_METER
_SINGULARITY_RADIUS = defaults.SINGULARITY_RADIUS
_MIN_DIFFRACTION = defaults.MIN_DIFFRACTION_FACTOR

# Source array columns
_SX, _SY, _POWER, _PHASE, _WAVELENGTH = range(5)


@numba.njit(cache=True)
def _field_kernel(
    rows: int,
    cols: int,
    grid_size: float,
    walls: np.ndarray,
    wall_db: np.ndarray,
    sources: np.ndarray,
    phase_offset: float,
):
    """
    Sweep the grid and superpose all sources at every cell centre.

    walls: (n_walls, 4) segment endpoints
    wall_db: (n_walls, n_sources) attenuation of each wall at each source's band
    sources: (n_sources, 5) x, y, power, phase [rad], wavelength [canvas units]

    Each cell only reads the inputs and writes its own outputs.
    """
    magnitude = np.zeros((rows, cols))
    interference = np.zeros((rows, cols))
    contributing = np.zeros((rows, cols), dtype=np.bool_)
    n_walls = walls.shape[0]
    n_sources = sources.shape[0]

    for gy in range(rows):
        y = (gy + 0.5) * grid_size
        for gx in range(cols):
            x = (gx + 0.5) * grid_size

            real_sum = 0.0
            imag_sum = 0.0
            incoherent_power = 0.0

            for k in range(n_sources):
                sx = sources[k, 0]
                sy = sources[k, 1]
                distance = math.sqrt((x - sx) ** 2 + (y - sy) ** 2)
                if distance < _SINGULARITY_RADIUS:
                    continue

                wavelength = sources[k, 4]
                wavelength_m = wavelength / _UNITS_PER_METER

                attenuation_db = 0.0
                diffraction = 1.0
                for w in range(n_walls):
                    wx1 = walls[w, 0]
                    wy1 = walls[w, 1]
                    wx2 = walls[w, 2]
                    wy2 = walls[w, 3]
                    if not segments_intersect(sx, sy, x, y, wx1, wy1, wx2, wy2):
                        continue
                    attenuation_db += wall_db[w, k]
                    diffraction *= edge_diffraction(sx, sy, x, y, wx1, wy1, wavelength_m, _UNITS_PER_METER)
                    diffraction *= edge_diffraction(sx, sy, x, y, wx2, wy2, wavelength_m, _UNITS_PER_METER)
                diffraction = max(diffraction, _MIN_DIFFRACTION)

                amplitude = (
                    math.sqrt(sources[k, 2])
                    / (distance / _UNITS_PER_METER) ** 2
                    * 10.0 ** (-attenuation_db / 20.0)
                )
                phase = sources[k, 3] + 2.0 * math.pi * distance / wavelength + phase_offset

                effective = amplitude * diffraction
                real_sum += effective * math.cos(phase)
                imag_sum += effective * math.sin(phase)
                incoherent_power += amplitude * amplitude

            total = math.sqrt(real_sum * real_sum + imag_sum * imag_sum)
            magnitude[gy, gx] = total
            if incoherent_power > 0.0:
                interference[gy, gx] = total / math.sqrt(incoherent_power)
                contributing[gy, gx] = True

    return magnitude, interference, contributing


def _pack_sources(sources: Sequence[WaveSource]) -> np.ndarray:
    packed = np.zeros((len(sources), 5), dtype=np.float64)
    for k, source in enumerate(sources):
        packed[k, _SX] = source.x
        packed[k, _SY] = source.y
        packed[k, _POWER] = source.power
        packed[k, _PHASE] = math.radians(source.phase)
        packed[k, _WAVELENGTH] = source.wavelength_cm
    return packed


def _pack_walls(walls: Sequence[Wall], sources: Sequence[WaveSource]) -> tuple[np.ndarray, np.ndarray]:
    segments = np.zeros((len(walls), 4), dtype=np.float64)
    wall_db = np.zeros((len(walls), len(sources)), dtype=np.float64)
    for w, wall in enumerate(walls):
        segments[w] = (wall.x1, wall.y1, wall.x2, wall.y2)
        for k, source in enumerate(sources):
            wall_db[w, k] = wall_attenuation_db(wall.material, wall.thickness, source.frequency)
    return segments, wall_db


def compute_field(
    walls: Sequence[Wall],
    sources: Sequence[WaveSource],
    time_step: int = 0,
    settings: FieldSettings | None = None,
) -> FieldGrid:
    """Compute field magnitude and interference coefficient for every cell.

    Args:
        walls: Obstacles; all walls are considered for every path
        sources: Transmitters; inactive ones are ignored
        time_step: Animation tick, advances every phase by settings.animation_rate
        settings: Grid extent and resolution (defaults to FieldSettings())

    Returns:
        FieldGrid with one sample per cell
    """
    settings = settings or FieldSettings()
    rows, cols = settings.shape
    active = [s for s in sources if s.active]

    packed_sources = _pack_sources(active)
    segments, wall_db = _pack_walls(walls, active)
    logger.debug(
        "Computing field: %dx%d cells, %d active sources, %d walls, t=%d",
        rows, cols, len(active), len(walls), time_step,
    )

    magnitude, interference, contributing = _field_kernel(
        rows,
        cols,
        float(settings.grid_size),
        segments,
        wall_db,
        packed_sources,
        time_step * settings.animation_rate,
    )
    return FieldGrid(
        magnitude=magnitude,
        interference=interference,
        grid_size=settings.grid_size,
        time_step=time_step,
        contributing=contributing,
    )


def field_at(
    x: float,
    y: float,
    walls: Sequence[Wall],
    sources: Sequence[WaveSource],
    time_step: int = 0,
    animation_rate: float = defaults.DEFAULT_ANIMATION_RATE,
) -> tuple[float, float]:
    """(magnitude, interference) at a single point, using the same kernel as the grid."""
    active = [s for s in sources if s.active]
    segments, wall_db = _pack_walls(walls, active)
    # A 1x1 grid of cell size 2 centred on (x, y) after shifting the scene
    shifted = _pack_sources(active)
    shifted[:, _SX] -= x - 1.0
    shifted[:, _SY] -= y - 1.0
    if len(segments):
        segments = segments - np.array([x - 1.0, y - 1.0, x - 1.0, y - 1.0])
    magnitude, interference, _ = _field_kernel(
        1, 1, 2.0, segments, wall_db, shifted, time_step * animation_rate,
    )
    return float(magnitude[0, 0]), float(interference[0, 0])
