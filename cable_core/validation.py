"""
Cable schedule validation.

Per-cable checks (required tag, duplicate tag, value ranges) plus the
project-level segregation pass from cable_core.segregation. Every rule
runs; findings are returned as data and never raised.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from .models import Cable
from .results import (
    Translator,
    ValidationResult,
    ValidationSeverity,
    ValidationSummary,
    ValidationType,
    tr,
)
from .segregation import RouteKey, route_text_key, validate_segregation_rules

logger = logging.getLogger(__name__)

MIN_VOLTAGE_V = 0.0
MAX_VOLTAGE_V = 35000.0
MAX_LENGTH_FT = 10000.0
MIN_SPARE_PCT = 0.0
MAX_SPARE_PCT = 100.0


class CableNotFoundError(LookupError):
    pass


def _result(
    cable: Cable,
    severity: ValidationSeverity,
    validation_type: ValidationType,
    message: str,
    field: str,
    suggested_fix: str,
    override_allowed: bool,
) -> ValidationResult:
    return ValidationResult(
        cable_id=cable.id,
        cable_tag=cable.tag,
        severity=severity,
        validation_type=validation_type,
        message=message,
        field=field,
        suggested_fix=suggested_fix,
        override_allowed=override_allowed,
    )


def _tag_is_blank(cable: Cable) -> bool:
    return not (cable.tag or "").strip()


def validate_required_fields(cable: Cable, *, translator: Translator | None = None) -> list[ValidationResult]:
    if not _tag_is_blank(cable):
        return []
    return [
        _result(
            cable,
            ValidationSeverity.ERROR,
            ValidationType.REQUIRED_FIELD,
            tr(translator, "validation.tag_required"),
            "tag",
            tr(translator, "validation.tag_required_fix"),
            override_allowed=False,
        )
    ]


def validate_duplicate_tag(
    cable: Cable, all_cables: Iterable[Cable], *, translator: Translator | None = None
) -> list[ValidationResult]:
    """One Error when another cable object carries the same tag (case-insensitive)."""
    if _tag_is_blank(cable):
        return []
    tag = cable.tag.casefold()
    duplicate = any(other is not cable and (other.tag or "").casefold() == tag for other in all_cables)
    if not duplicate:
        return []
    return [
        _result(
            cable,
            ValidationSeverity.ERROR,
            ValidationType.DUPLICATE_TAG,
            tr(translator, "validation.duplicate_tag", tag=cable.tag),
            "tag",
            tr(translator, "validation.duplicate_tag_fix"),
            override_allowed=True,
        )
    ]


def validate_field_formats(cable: Cable, *, translator: Translator | None = None) -> list[ValidationResult]:
    results: list[ValidationResult] = []

    if cable.voltage is not None and (cable.voltage < MIN_VOLTAGE_V or cable.voltage > MAX_VOLTAGE_V):
        results.append(
            _result(
                cable,
                ValidationSeverity.WARNING,
                ValidationType.INVALID_VALUE,
                tr(translator, "validation.voltage_range"),
                "voltage",
                tr(translator, "validation.voltage_range_fix"),
                override_allowed=True,
            )
        )

    if cable.length is not None:
        if cable.length < 0:
            results.append(
                _result(
                    cable,
                    ValidationSeverity.ERROR,
                    ValidationType.INVALID_VALUE,
                    tr(translator, "validation.length_negative"),
                    "length",
                    tr(translator, "validation.length_negative_fix"),
                    override_allowed=False,
                )
            )
        elif cable.length > MAX_LENGTH_FT:
            results.append(
                _result(
                    cable,
                    ValidationSeverity.WARNING,
                    ValidationType.INVALID_VALUE,
                    tr(translator, "validation.length_long"),
                    "length",
                    tr(translator, "validation.length_long_fix"),
                    override_allowed=True,
                )
            )

    spare = cable.spare_percentage
    if spare is not None and (spare < MIN_SPARE_PCT or spare > MAX_SPARE_PCT):
        results.append(
            _result(
                cable,
                ValidationSeverity.WARNING,
                ValidationType.INVALID_VALUE,
                tr(translator, "validation.spare_range"),
                "spare_percentage",
                tr(translator, "validation.spare_range_fix"),
                override_allowed=True,
            )
        )

    return results


def validate_cable(
    cable: Cable, all_cables: Sequence[Cable], *, translator: Translator | None = None
) -> list[ValidationResult]:
    results: list[ValidationResult] = []
    results.extend(validate_required_fields(cable, translator=translator))
    results.extend(validate_duplicate_tag(cable, all_cables, translator=translator))
    results.extend(validate_field_formats(cable, translator=translator))
    return results


def validate_cable_by_id(
    cable_id: int, cables: Sequence[Cable], *, translator: Translator | None = None
) -> list[ValidationResult]:
    for cable in cables:
        if cable.id == cable_id:
            return validate_cable(cable, cables, translator=translator)
    raise CableNotFoundError(f"Cable not found: {cable_id}")


def validate_all_cables(
    cables: Sequence[Cable],
    *,
    route_key: RouteKey = route_text_key,
    translator: Translator | None = None,
) -> ValidationSummary:
    """
    Full project pass: every cable against the whole list, then the
    route-scoped segregation rules. Results keep that order.
    """
    cables = list(cables)
    results: list[ValidationResult] = []
    for cable in cables:
        results.extend(validate_cable(cable, cables, translator=translator))
    results.extend(validate_segregation_rules(cables, key=route_key, translator=translator))

    summary = ValidationSummary.from_results(len(cables), results)
    logger.info(
        "validated %d cables: %d errors, %d warnings, %d info",
        summary.total_cables,
        summary.error_count,
        summary.warning_count,
        summary.info_count,
    )
    return summary


def check_duplicate_tag(tag: str, cables: Iterable[Cable], exclude_id: int | None = None) -> bool:
    """True when some cable other than exclude_id already uses tag."""
    needle = tag.casefold()
    return any(
        (c.tag or "").casefold() == needle and (exclude_id is None or c.id != exclude_id) for c in cables
    )
