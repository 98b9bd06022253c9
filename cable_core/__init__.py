"""
cable_core: computation core of the cable schedule tool.

- voltage drop, minimum conductor size and current from power
  (NEC Chapter 9 Table 8 resistances)
- cable validation: required tag, duplicate tags, value ranges and
  route-scoped segregation rules

Pure functions over cable rows: no storage, no UI, no shared mutable state.
"""

from .conductors import (
    ConductorMaterial,
    UnknownConductorSizeError,
    get_conductor_resistance,
    normalize_conductor_size,
    parse_material,
)
from .models import Cable
from .results import ValidationResult, ValidationSeverity, ValidationSummary, ValidationType
from .validation import (
    CableNotFoundError,
    check_duplicate_tag,
    validate_all_cables,
    validate_cable,
    validate_cable_by_id,
)
from .voltage_drop import (
    NoStandardSizeError,
    VoltageDropCalculation,
    VoltageDropResult,
    VoltageDropSeverity,
    calculate_cable_voltage_drop,
    calculate_current_from_power,
    calculate_minimum_conductor_size,
    calculate_voltage_drop,
    estimate_cable_current,
)

__all__ = [
    "Cable",
    "CableNotFoundError",
    "ConductorMaterial",
    "NoStandardSizeError",
    "UnknownConductorSizeError",
    "ValidationResult",
    "ValidationSeverity",
    "ValidationSummary",
    "ValidationType",
    "VoltageDropCalculation",
    "VoltageDropResult",
    "VoltageDropSeverity",
    "calculate_cable_voltage_drop",
    "calculate_current_from_power",
    "calculate_minimum_conductor_size",
    "calculate_voltage_drop",
    "check_duplicate_tag",
    "estimate_cable_current",
    "get_conductor_resistance",
    "normalize_conductor_size",
    "parse_material",
    "validate_all_cables",
    "validate_cable",
    "validate_cable_by_id",
]
