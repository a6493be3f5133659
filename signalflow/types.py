"""Core data types for the field simulation - framework-agnostic."""

from dataclasses import dataclass, field
import math

import numpy as np

from signalflow import defaults
from signalflow.materials import Material


@dataclass
class Wall:
    """Straight wall segment in canvas units (cm).

    Attributes:
        x1, y1, x2, y2: Segment endpoints
        material: Building material (drives per-band attenuation)
        thickness: Wall thickness in mm, normalised against 200 mm
        id: Unique ID assigned when added to the simulation
    """
    x1: float
    y1: float
    x2: float
    y2: float
    material: Material = Material.DRYWALL
    thickness: float = defaults.DEFAULT_WALL_THICKNESS_MM
    id: int | None = None

    @property
    def length(self) -> float:
        return math.hypot(self.x2 - self.x1, self.y2 - self.y1)


@dataclass
class WaveSource:
    """Point WiFi transmitter.

    Attributes:
        x, y: Position in canvas units (cm)
        frequency: Carrier frequency in GHz (2.4 or 5)
        power: Transmit power in mW
        phase: Phase offset in degrees, [0, 360)
        active: Inactive sources contribute nothing to the field
        id: Unique ID assigned when added to the simulation
    """
    x: float
    y: float
    frequency: float = defaults.DEFAULT_SOURCE_FREQUENCY_GHZ
    power: float = defaults.DEFAULT_SOURCE_POWER_MW
    phase: float = defaults.DEFAULT_SOURCE_PHASE_DEG
    active: bool = True
    id: int | None = None

    @property
    def wavelength_cm(self) -> float:
        """Free-space wavelength in canvas units."""
        return defaults.SPEED_OF_LIGHT / (self.frequency * 1e9) * defaults.UNITS_PER_METER


@dataclass
class FieldSettings:
    """Sampling grid configuration."""

    width: int = defaults.DEFAULT_CANVAS_SIZE[0]
    height: int = defaults.DEFAULT_CANVAS_SIZE[1]
    grid_size: int = defaults.DEFAULT_GRID_SIZE
    animation_rate: float = defaults.DEFAULT_ANIMATION_RATE

    @property
    def shape(self) -> tuple[int, int]:
        """Grid shape (rows, cols)."""
        return (
            math.ceil(self.height / self.grid_size),
            math.ceil(self.width / self.grid_size),
        )


@dataclass
class FieldGrid:
    """Result of one field computation.

    ``magnitude`` is the coherent field amplitude per cell and
    ``interference`` the ratio of coherent to incoherent sum
    (0 where no source contributed).
    """
    magnitude: np.ndarray
    interference: np.ndarray
    grid_size: int
    time_step: int = 0
    contributing: np.ndarray | None = field(default=None, repr=False)

    @property
    def shape(self) -> tuple[int, int]:
        return self.magnitude.shape

    def cell_index(self, x: float, y: float) -> tuple[int, int] | None:
        """Map a canvas position to its (row, col) cell, or None when outside."""
        gx = math.floor(x / self.grid_size)
        gy = math.floor(y / self.grid_size)
        rows, cols = self.shape
        if 0 <= gy < rows and 0 <= gx < cols:
            return gy, gx
        return None

    def sample(self, x: float, y: float) -> tuple[float, float] | None:
        """(magnitude, interference) at a canvas position."""
        idx = self.cell_index(x, y)
        if idx is None:
            return None
        return float(self.magnitude[idx]), float(self.interference[idx])
