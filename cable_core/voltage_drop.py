"""
Voltage drop (NEC-style recommendations) and conductor selection.

VD = 2 * I * (L / 1000) * R * PF, where L is the one-way length in ft and
R the conductor resistance in ohm per 1000 ft. The factor 2 is the
out-and-back conductor length and is applied for every phase count.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum

from .conductors import (
    ConductorMaterial,
    UnknownConductorSizeError,
    get_conductor_resistance,
    standard_sizes,
)
from .models import SIGNAL_FUNCTIONS, POWER_FUNCTIONS, Cable

logger = logging.getLogger(__name__)

DEFAULT_POWER_FACTOR = 0.85
CIRCUIT_FACTOR = 2.0
GOOD_MAX_PCT = 3.0
WARNING_MAX_PCT = 5.0
SQRT3 = 1.732


class VoltageDropSeverity(str, Enum):
    GOOD = "Good"
    WARNING = "Warning"
    ERROR = "Error"


COMPLIANCE_MESSAGES = {
    VoltageDropSeverity.GOOD: "Compliant with NEC recommendations (≤3%)",
    VoltageDropSeverity.WARNING: "Acceptable but high (3-5%, consider larger conductor)",
    VoltageDropSeverity.ERROR: "Exceeds NEC recommendations (>5%, larger conductor required)",
}


class NoStandardSizeError(ValueError):
    """Even the largest standard conductor exceeds the voltage drop budget."""

    def __init__(self) -> None:
        super().__init__("No standard conductor size meets the voltage drop requirement")


@dataclass(frozen=True)
class VoltageDropCalculation:
    voltage: float
    current: float
    distance: float  # one-way, ft
    conductor_size: str
    material: ConductorMaterial = ConductorMaterial.COPPER
    power_factor: float = DEFAULT_POWER_FACTOR
    number_of_conductors: int = 2


@dataclass(frozen=True)
class VoltageDropResult:
    voltage_drop_volts: float
    voltage_drop_percentage: float
    line_to_line_voltage_drop: float
    severity: VoltageDropSeverity
    compliance_status: str


def _div(num: float, den: float) -> float:
    # IEEE semantics instead of ZeroDivisionError: x/0 -> ±inf, 0/0 -> nan.
    if den == 0:
        if num == 0 or math.isnan(num):
            return math.nan
        return math.copysign(math.inf, num) * math.copysign(1.0, den)
    return num / den


def classify_drop(drop_pct: float) -> VoltageDropSeverity:
    if drop_pct <= GOOD_MAX_PCT:
        return VoltageDropSeverity.GOOD
    if drop_pct <= WARNING_MAX_PCT:
        return VoltageDropSeverity.WARNING
    return VoltageDropSeverity.ERROR


def calc_drop_volts(current: float, distance_ft: float, resistance: float, power_factor: float) -> float:
    pf = power_factor if power_factor > 0 else DEFAULT_POWER_FACTOR
    return CIRCUIT_FACTOR * current * (distance_ft / 1000.0) * resistance * pf


def calculate_voltage_drop(calc: VoltageDropCalculation) -> VoltageDropResult:
    """
    Voltage drop for one run.

    Raises UnknownConductorSizeError when calc.conductor_size is not a
    standard size. A power factor <= 0 is replaced by 0.85. A zero nominal
    voltage gives an infinite (or NaN) percentage, classified as Error.
    """
    resistance = get_conductor_resistance(calc.conductor_size, calc.material)
    drop_v = calc_drop_volts(calc.current, calc.distance, resistance, calc.power_factor)
    drop_pct = _div(drop_v, calc.voltage) * 100.0
    severity = classify_drop(drop_pct)
    logger.debug(
        "voltage drop %s %s: %.4f V (%.3f%%) -> %s",
        calc.conductor_size,
        calc.material.value,
        drop_v,
        drop_pct,
        severity.value,
    )
    return VoltageDropResult(
        voltage_drop_volts=drop_v,
        voltage_drop_percentage=drop_pct,
        line_to_line_voltage_drop=drop_v,
        severity=severity,
        compliance_status=COMPLIANCE_MESSAGES[severity],
    )


def calculate_minimum_conductor_size(
    voltage: float,
    current: float,
    distance: float,
    material: ConductorMaterial,
    max_drop_percent: float,
    power_factor: float = DEFAULT_POWER_FACTOR,
) -> str:
    """
    Smallest standard size whose drop stays within voltage * max_drop_percent / 100.

    The material ladder is ordered largest to smallest; drop grows as the
    conductor shrinks, so the smallest adequate size is the last one of
    the ladder that still fits. Raises NoStandardSizeError when nothing fits.
    """
    max_drop_v = voltage * (max_drop_percent / 100.0)
    for size in reversed(standard_sizes(material)):
        calc = VoltageDropCalculation(
            voltage=voltage,
            current=current,
            distance=distance,
            conductor_size=size,
            material=material,
            power_factor=power_factor,
        )
        result = calculate_voltage_drop(calc)
        if result.voltage_drop_volts <= max_drop_v:
            logger.debug("minimum size for %.1f%% budget: %s", max_drop_percent, size)
            return size
    raise NoStandardSizeError()


def calculate_current_from_power(
    power_watts: float,
    voltage: float,
    power_factor: float = DEFAULT_POWER_FACTOR,
    phases: int = 1,
) -> float:
    """
    I = P / (V * PF) for single phase, P / (V * 1.732 * PF) for three phase.

    Other phase counts use the single-phase formula. Zero denominators
    return inf/nan rather than raising.
    """
    if phases == 3:
        return _div(power_watts, voltage * SQRT3 * power_factor)
    return _div(power_watts, voltage * power_factor)


# First matching substring wins, so "18" must be tested before "8".
_POWER_CURRENT_BY_SIZE = (
    ("18", 10.0),
    ("16", 13.0),
    ("14", 15.0),
    ("12", 20.0),
    ("10", 30.0),
    ("8", 40.0),
    ("6", 55.0),
    ("4", 70.0),
    ("2", 95.0),
)
_SIGNAL_CURRENT_BY_SIZE = (
    (("18", "20", "22"), 0.1),
    (("16",), 0.2),
    (("14",), 0.5),
)


def estimate_cable_current(function: str | None, size: str | None) -> float:
    """Rough load current from the cable function and conductor size (A)."""
    size_upper = str(size or "").upper()
    if function in POWER_FUNCTIONS:
        for needle, amps in _POWER_CURRENT_BY_SIZE:
            if needle in size_upper:
                return amps
        return 20.0
    if function in SIGNAL_FUNCTIONS:
        for needles, amps in _SIGNAL_CURRENT_BY_SIZE:
            if any(n in size_upper for n in needles):
                return amps
        return 0.1
    return 0.0


def calculate_cable_voltage_drop(
    cable: Cable,
    *,
    material: ConductorMaterial = ConductorMaterial.COPPER,
    power_factor: float = DEFAULT_POWER_FACTOR,
) -> VoltageDropResult | None:
    """
    Voltage drop for a schedule row, or None when it cannot be computed.

    Needs voltage, length and size. Uses cable.current when positive,
    otherwise the estimate from function and size.
    """
    if cable.voltage is None or cable.length is None or not cable.size:
        return None
    current = cable.current if cable.current and cable.current > 0 else None
    if current is None:
        current = estimate_cable_current(cable.function, cable.size)
    if current <= 0:
        return None
    calc = VoltageDropCalculation(
        voltage=cable.voltage,
        current=current,
        distance=cable.length,
        conductor_size=cable.size,
        material=material,
        power_factor=power_factor,
    )
    try:
        return calculate_voltage_drop(calc)
    except UnknownConductorSizeError as exc:
        logger.info("cable %s: voltage drop skipped (%s)", cable.tag, exc)
        return None
