"""
Conductor resistance lookup (NEC Chapter 9, Table 8 approximations).

Values are AC resistance in ohms per 1000 ft at 75 °C for copper and
aluminum. The table is built once at import and never mutated.
"""

from __future__ import annotations

import logging
from enum import Enum
from types import MappingProxyType
from typing import Mapping

logger = logging.getLogger(__name__)


class ConductorMaterial(str, Enum):
    COPPER = "Copper"
    ALUMINUM = "Aluminum"


class UnknownConductorSizeError(ValueError):
    """Raised when a conductor size cannot be resolved to a table entry."""

    def __init__(self, size: str) -> None:
        super().__init__(f"Unknown conductor size: {size}")
        self.size = size


# size -> (copper ohm/kft, aluminum ohm/kft)
CONDUCTOR_RESISTANCE: Mapping[str, tuple[float, float]] = MappingProxyType(
    {
        "18 AWG": (7.77, 12.8),
        "16 AWG": (4.89, 8.05),
        "14 AWG": (3.07, 5.06),
        "12 AWG": (1.93, 3.18),
        "10 AWG": (1.21, 2.00),
        "8 AWG": (0.764, 1.26),
        "6 AWG": (0.491, 0.808),
        "4 AWG": (0.308, 0.508),
        "3 AWG": (0.245, 0.403),
        "2 AWG": (0.194, 0.319),
        "1 AWG": (0.154, 0.253),
        "1/0 AWG": (0.122, 0.201),
        "2/0 AWG": (0.0967, 0.159),
        "3/0 AWG": (0.0766, 0.126),
        "4/0 AWG": (0.0608, 0.100),
        "250 MCM": (0.0515, 0.0847),
        "300 MCM": (0.0429, 0.0707),
        "350 MCM": (0.0367, 0.0605),
        "400 MCM": (0.0321, 0.0529),
        "500 MCM": (0.0258, 0.0424),
        "600 MCM": (0.0214, 0.0353),
        "750 MCM": (0.0171, 0.0282),
        "1000 MCM": (0.0129, 0.0212),
    }
)

# Largest first. Aluminum below 12 AWG is not used for power wiring.
COPPER_SIZES: tuple[str, ...] = (
    "1000 MCM",
    "750 MCM",
    "600 MCM",
    "500 MCM",
    "400 MCM",
    "350 MCM",
    "300 MCM",
    "250 MCM",
    "4/0 AWG",
    "3/0 AWG",
    "2/0 AWG",
    "1/0 AWG",
    "1 AWG",
    "2 AWG",
    "3 AWG",
    "4 AWG",
    "6 AWG",
    "8 AWG",
    "10 AWG",
    "12 AWG",
    "14 AWG",
    "16 AWG",
    "18 AWG",
)
ALUMINUM_SIZES: tuple[str, ...] = COPPER_SIZES[: COPPER_SIZES.index("12 AWG") + 1]

_MATERIAL_ALIASES = {
    "copper": ConductorMaterial.COPPER,
    "cu": ConductorMaterial.COPPER,
    "aluminum": ConductorMaterial.ALUMINUM,
    "al": ConductorMaterial.ALUMINUM,
}


def parse_material(text: str | ConductorMaterial | None) -> ConductorMaterial:
    """Resolve a material name; anything unrecognised falls back to copper."""
    if isinstance(text, ConductorMaterial):
        return text
    key = str(text or "").strip().lower()
    return _MATERIAL_ALIASES.get(key, ConductorMaterial.COPPER)


def standard_sizes(material: ConductorMaterial) -> tuple[str, ...]:
    if material == ConductorMaterial.ALUMINUM:
        return ALUMINUM_SIZES
    return COPPER_SIZES


def normalize_conductor_size(size: str) -> str:
    """
    Normalize a size string to table form.

    "#10" and "10" become "10 AWG"; strings already carrying AWG or MCM
    pass through upper-cased. Anything else is returned upper-cased and
    will miss the lookup unless it matches a key exactly.
    """
    size_upper = str(size).upper().strip()
    if "AWG" in size_upper or "MCM" in size_upper:
        return size_upper
    if "#" in size_upper:
        num = size_upper.replace("#", "").strip()
        return f"{num} AWG"
    if size_upper.isdigit():
        return f"{size_upper} AWG"
    return size_upper


def get_conductor_resistance(size: str, material: ConductorMaterial) -> float:
    key = normalize_conductor_size(size)
    pair = CONDUCTOR_RESISTANCE.get(key)
    if pair is None:
        logger.debug("conductor size %r normalized to %r: not in table", size, key)
        raise UnknownConductorSizeError(size)
    copper_r, aluminum_r = pair
    if material == ConductorMaterial.ALUMINUM:
        return aluminum_r
    return copper_r
