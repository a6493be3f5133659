"""Wall materials and their attenuation per WiFi band."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from signalflow import defaults


class Material(str, enum.Enum):
    """Building materials a wall can be made of."""

    DRYWALL = "drywall"
    WOOD = "wood"
    BRICK = "brick"
    CONCRETE = "concrete"
    METAL = "metal"


@dataclass(frozen=True)
class MaterialProperties:
    """Attenuation in dB through a reference-thickness wall, per band."""
    attenuation_2_4ghz: float
    attenuation_5ghz: float
    color: str  # Display only

    def attenuation_db(self, frequency_ghz: float) -> float:
        return self.attenuation_2_4ghz if frequency_ghz == 2.4 else self.attenuation_5ghz


MATERIALS: dict[Material, MaterialProperties] = {
    Material.DRYWALL: MaterialProperties(3.5, 4.0, "#d4d4aa"),
    Material.WOOD: MaterialProperties(6.0, 8.0, "#8b4513"),
    Material.BRICK: MaterialProperties(12.0, 15.0, "#a0522d"),
    Material.CONCRETE: MaterialProperties(25.0, 30.0, "#808080"),
    Material.METAL: MaterialProperties(35.0, 40.0, "#c0c0c0"),
}


def wall_attenuation_db(material: Material, thickness_mm: float, frequency_ghz: float) -> float:
    """Attenuation of one wall crossing, scaled linearly by thickness."""
    base = MATERIALS[Material(material)].attenuation_db(frequency_ghz)
    return base * thickness_mm / defaults.REFERENCE_WALL_THICKNESS_MM
