"""Heatmap rendering of a field grid to RGBA arrays / PNG."""

from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image
from scipy.ndimage import zoom

from signalflow import defaults
from signalflow.field.metrics import signal_dbm
from signalflow.types import FieldGrid


def upsample_to_canvas(cells: np.ndarray, grid_size: int, width: int, height: int) -> np.ndarray:
    """Replicate each cell over its grid_size x grid_size pixel block, cropped to the canvas."""
    if grid_size == 1:
        pixels = cells
    else:
        pixels = zoom(cells, grid_size, order=0, grid_mode=True, mode='nearest')
    return pixels[:height, :width]


def heatmap_rgba(grid: FieldGrid, width: int, height: int) -> np.ndarray:
    """Blue (weak) to red (strong) heatmap, transparent where the signal is negligible.

    Returns:
        (height, width, 4) uint8 array
    """
    dbm = upsample_to_canvas(signal_dbm(grid.magnitude), grid.grid_size, width, height)
    level = np.clip((dbm - defaults.HEATMAP_DBM_MIN) / defaults.HEATMAP_DBM_SPAN, 0.0, 1.0)
    visible = level > defaults.HEATMAP_VISIBLE_THRESHOLD

    rgba = np.zeros((*level.shape, 4), dtype=np.uint8)
    rgba[..., 0] = np.floor(255 * level)
    rgba[..., 1] = np.floor(255 * (1 - level) * 0.5)
    rgba[..., 2] = np.floor(255 * (1 - level))
    rgba[..., 3] = np.floor(128 * level)
    rgba[~visible] = 0
    return rgba


def save_heatmap(grid: FieldGrid, path: str | Path, width: int | None = None, height: int | None = None) -> Path:
    """Write the heatmap as a PNG. Canvas size defaults to the full grid extent."""
    rows, cols = grid.shape
    width = width or cols * grid.grid_size
    height = height or rows * grid.grid_size
    path = Path(path)
    Image.fromarray(heatmap_rgba(grid, width, height)).save(path)
    return path
