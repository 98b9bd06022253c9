from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable

Translator = Callable[..., str]

# English defaults; the UI passes its own translator with the same keys.
_VALIDATION_EN = {
    "validation.tag_required": "Cable tag is required",
    "validation.tag_required_fix": "Enter a unique cable tag (e.g., C-001)",
    "validation.duplicate_tag": "Duplicate cable tag '{tag}' found",
    "validation.duplicate_tag_fix": "Change to unique tag or use auto-numbering",
    "validation.voltage_range": "Voltage outside typical range (0-35kV)",
    "validation.voltage_range_fix": "Verify voltage rating is correct",
    "validation.length_negative": "Cable length cannot be negative",
    "validation.length_negative_fix": "Enter a positive length value",
    "validation.length_long": "Cable length is unusually long (>10,000 ft)",
    "validation.length_long_fix": "Verify length is correct",
    "validation.spare_range": "Spare percentage should be between 0-100%",
    "validation.spare_range_fix": "Enter percentage as 0-100 (e.g., 10 for 10%)",
    "validation.power_signal_same_route": "Power and signal cables in same route '{route}' (NEC 725.136)",
    "validation.power_signal_fix": "Separate power and signal cables into different conduits per NEC",
    "validation.voltage_levels_same_route": "Low voltage and high voltage cables in same route '{route}' (NEC 300.3)",
    "validation.voltage_levels_fix": "Separate low voltage (<50V) from high voltage (>600V) cables",
    "validation.class_conflict": "Incompatible segregation classes '{class1}' and '{class2}' in route '{route}'",
    "validation.class_conflict_fix": "Separate {class1} from {class2} cables",
    "validation.is_non_is_same_route": "Intrinsically safe and non-IS cables in same route '{route}' (NEC 504.30)",
    "validation.is_non_is_fix": "IS cables must be separated from all non-IS circuits",
}


def tr(translator: Translator | None, key: str, **kwargs: Any) -> str:
    if translator is None:
        raw = _VALIDATION_EN.get(key, key)
        return raw.format(**kwargs) if kwargs else raw
    return translator(key, **kwargs)


class ValidationSeverity(str, Enum):
    ERROR = "Error"  # blocks operations unless overridden
    WARNING = "Warning"
    INFO = "Info"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    ValidationSeverity.ERROR: 2,
    ValidationSeverity.WARNING: 1,
    ValidationSeverity.INFO: 0,
}


class ValidationType(str, Enum):
    DUPLICATE_TAG = "DuplicateTag"
    SEGREGATION_VIOLATION = "SegregationViolation"
    REQUIRED_FIELD = "RequiredField"
    INVALID_VALUE = "InvalidValue"
    NEC_COMPLIANCE = "NecCompliance"


@dataclass(frozen=True)
class ValidationResult:
    cable_id: int | None
    cable_tag: str
    severity: ValidationSeverity
    validation_type: ValidationType
    message: str
    field: str | None = None
    suggested_fix: str | None = None
    override_allowed: bool = False


@dataclass(frozen=True)
class ValidationSummary:
    total_cables: int
    error_count: int
    warning_count: int
    info_count: int
    results: list[ValidationResult] = field(default_factory=list)
    validation_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_results(cls, total_cables: int, results: list[ValidationResult]) -> "ValidationSummary":
        return cls(
            total_cables=total_cables,
            error_count=sum(1 for r in results if r.severity == ValidationSeverity.ERROR),
            warning_count=sum(1 for r in results if r.severity == ValidationSeverity.WARNING),
            info_count=sum(1 for r in results if r.severity == ValidationSeverity.INFO),
            results=list(results),
        )

    def counts(self) -> tuple[int, int, int]:
        return self.error_count, self.warning_count, self.info_count

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0

    @property
    def has_blocking_errors(self) -> bool:
        """Errors that cannot be overridden with a justification."""
        return any(
            r.severity == ValidationSeverity.ERROR and not r.override_allowed for r in self.results
        )

    def results_for(self, tag: str) -> list[ValidationResult]:
        needle = tag.casefold()
        return [r for r in self.results if r.cable_tag.casefold() == needle]
