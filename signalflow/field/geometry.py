"""
Geometry and knife-edge diffraction helpers for the field sweep.

All functions are numba-compiled so the per-cell kernel in
``signalflow.field.simulation`` can call them without leaving nopython mode.
They also work as ordinary Python callables for single evaluations.
"""

import math

import numba

from signalflow import defaults

_PARALLEL_EPSILON = defaults.PARALLEL_EPSILON
_STRONG_SHADOW = defaults.STRONG_SHADOW_THRESHOLD
_PARTIAL_FLOOR = defaults.PARTIAL_SHADOW_FLOOR


@numba.njit(cache=True)
def segments_intersect(
    x1: float, y1: float, x2: float, y2: float,
    x3: float, y3: float, x4: float, y4: float,
) -> bool:
    """
    Test whether segment (x1,y1)-(x2,y2) crosses segment (x3,y3)-(x4,y4).

    Parametric determinant method with inclusive bounds. Near-parallel
    segments (|det| below PARALLEL_EPSILON) never intersect.
    """
    denominator = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
    if abs(denominator) < _PARALLEL_EPSILON:
        return False
    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / denominator
    u = -((x1 - x2) * (y1 - y3) - (y1 - y2) * (x1 - x3)) / denominator
    return 0.0 <= t <= 1.0 and 0.0 <= u <= 1.0


@numba.njit(cache=True)
def clearance(sx: float, sy: float, tx: float, ty: float, ex: float, ey: float) -> float:
    """Perpendicular distance from point (ex, ey) to the line through s and t."""
    a = ty - sy
    b = sx - tx
    norm = math.sqrt(a * a + b * b)
    if norm == 0.0:
        return math.sqrt((ex - sx) ** 2 + (ey - sy) ** 2)
    c = tx * sy - sx * ty
    return abs(a * ex + b * ey + c) / norm


@numba.njit(cache=True)
def fresnel_parameter(h: float, d1: float, d2: float, wavelength: float) -> float:
    """
    Fresnel-Kirchhoff diffraction parameter v = h * sqrt(2 (d1 + d2) / (lambda d1 d2)).

    All lengths share one unit. An edge sitting on either path end gives v = 0.
    """
    if d1 <= 0.0 or d2 <= 0.0 or wavelength <= 0.0:
        return 0.0
    return h * math.sqrt(2.0 * (d1 + d2) / (wavelength * d1 * d2))


@numba.njit(cache=True)
def knife_edge_factor(v: float) -> float:
    """Amplitude factor for one diffracting edge.

    Partially shadowed (v <= STRONG_SHADOW_THRESHOLD):
        loss = 6.02 + 10.4 v dB, never below PARTIAL_SHADOW_FLOOR.
    Strongly shadowed:
        loss = 20 + 25 log10(v) dB.
    """
    if v > _STRONG_SHADOW:
        loss_db = 20.0 + 25.0 * math.log10(v)
        return 10.0 ** (-loss_db / 20.0)
    loss_db = 6.02 + 10.4 * max(v, 0.0)
    return max(_PARTIAL_FLOOR, 10.0 ** (-loss_db / 20.0))


@numba.njit(cache=True)
def edge_diffraction(
    sx: float, sy: float, tx: float, ty: float,
    ex: float, ey: float, wavelength_m: float, units_per_meter: float,
) -> float:
    """Knife-edge factor for wall endpoint (ex, ey) on the path s -> t (canvas units)."""
    d1 = math.sqrt((sx - ex) ** 2 + (sy - ey) ** 2) / units_per_meter
    d2 = math.sqrt((tx - ex) ** 2 + (ty - ey) ** 2) / units_per_meter
    h = clearance(sx, sy, tx, ty, ex, ey) / units_per_meter
    return knife_edge_factor(fresnel_parameter(h, d1, d2, wavelength_m))
