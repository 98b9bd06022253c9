"""
Route-scoped segregation checks.

Cables sharing a route key are assumed to share a raceway. Four rules run
on every group of two or more cables and each may flag several cables:

- power/signal separation (NEC 725.136), Warning
- low vs high voltage separation (NEC 300.3), Error
- incompatible segregation classes, Error
- intrinsically safe vs non-IS (NEC 504.30), Error, never overridable
"""

from __future__ import annotations

from typing import Callable, Hashable, Iterable, Optional, Sequence

from .models import Cable
from .results import (
    Translator,
    ValidationResult,
    ValidationSeverity,
    ValidationType,
    tr,
)

RouteKey = Callable[[Cable], Optional[Hashable]]

VOLTAGE_CLASS_LOW = "LOW"  # <= 50 V
VOLTAGE_CLASS_MEDIUM = "MEDIUM"  # 50-600 V
VOLTAGE_CLASS_HIGH = "HIGH"  # 600-1000 V
VOLTAGE_CLASS_EXTRA_HIGH = "EXTRA_HIGH"  # > 1000 V

INCOMPATIBLE_CLASS_PAIRS: tuple[tuple[str, str], ...] = (
    ("IS Signal", "Non-IS Signal"),
    ("IS Signal", "Power 120VAC"),
    ("IS Signal", "Power 240VAC"),
    ("IS Signal", "Power 480VAC"),
    ("IS Signal", "Power 600VAC"),
    ("Control Power 24VDC", "Power 480VAC"),
    ("Control Power 24VDC", "Power 600VAC"),
)

IS_MARKER = "IS"


def route_text_key(cable: Cable) -> str | None:
    """Group by the raw route text; blank routes are not grouped."""
    route = cable.route
    if route is None or not route.strip():
        return None
    return route


def group_by_route(cables: Iterable[Cable], key: RouteKey = route_text_key) -> dict[Hashable, list[Cable]]:
    groups: dict[Hashable, list[Cable]] = {}
    for cable in cables:
        k = key(cable)
        if k is None:
            continue
        groups.setdefault(k, []).append(cable)
    return groups


def voltage_class(voltage: float) -> str:
    if voltage <= 50.0:
        return VOLTAGE_CLASS_LOW
    if voltage <= 600.0:
        return VOLTAGE_CLASS_MEDIUM
    if voltage <= 1000.0:
        return VOLTAGE_CLASS_HIGH
    return VOLTAGE_CLASS_EXTRA_HIGH


def is_intrinsically_safe(cable: Cable) -> bool:
    return cable.segregation_class is not None and IS_MARKER in cable.segregation_class


def _segregation_result(
    cable: Cable,
    *,
    severity: ValidationSeverity,
    message: str,
    field: str,
    suggested_fix: str,
    override_allowed: bool,
) -> ValidationResult:
    return ValidationResult(
        cable_id=cable.id,
        cable_tag=cable.tag,
        severity=severity,
        validation_type=ValidationType.SEGREGATION_VIOLATION,
        message=message,
        field=field,
        suggested_fix=suggested_fix,
        override_allowed=override_allowed,
    )


def check_power_signal_separation(
    route: object, cables: Sequence[Cable], *, translator: Translator | None = None
) -> list[ValidationResult]:
    power = [c for c in cables if c.is_power]
    signal = [c for c in cables if c.is_signal]
    if not power or not signal:
        return []
    message = tr(translator, "validation.power_signal_same_route", route=route)
    fix = tr(translator, "validation.power_signal_fix")
    return [
        _segregation_result(
            c,
            severity=ValidationSeverity.WARNING,
            message=message,
            field="route",
            suggested_fix=fix,
            override_allowed=True,
        )
        for c in power + signal
    ]


def check_voltage_level_separation(
    route: object, cables: Sequence[Cable], *, translator: Translator | None = None
) -> list[ValidationResult]:
    """
    Flags the whole group when it mixes <= 50 V with > 600 V cables.

    Other class combinations (e.g. 50-600 V with > 1000 V) are not flagged.
    """
    classes = {voltage_class(c.voltage) for c in cables if c.voltage is not None}
    has_low = VOLTAGE_CLASS_LOW in classes
    has_high = VOLTAGE_CLASS_HIGH in classes or VOLTAGE_CLASS_EXTRA_HIGH in classes
    if not (has_low and has_high):
        return []
    message = tr(translator, "validation.voltage_levels_same_route", route=route)
    fix = tr(translator, "validation.voltage_levels_fix")
    return [
        _segregation_result(
            c,
            severity=ValidationSeverity.ERROR,
            message=message,
            field="route",
            suggested_fix=fix,
            override_allowed=True,
        )
        for c in cables
    ]


def check_segregation_class_conflicts(
    route: object, cables: Sequence[Cable], *, translator: Translator | None = None
) -> list[ValidationResult]:
    by_class: dict[str, list[Cable]] = {}
    for c in cables:
        if c.segregation_class is not None:
            by_class.setdefault(c.segregation_class, []).append(c)

    results: list[ValidationResult] = []
    for class1, class2 in INCOMPATIBLE_CLASS_PAIRS:
        if class1 not in by_class or class2 not in by_class:
            continue
        message = tr(
            translator,
            "validation.class_conflict",
            class1=class1,
            class2=class2,
            route=route,
        )
        fix = tr(translator, "validation.class_conflict_fix", class1=class1, class2=class2)
        for c in by_class[class1] + by_class[class2]:
            results.append(
                _segregation_result(
                    c,
                    severity=ValidationSeverity.ERROR,
                    message=message,
                    field="segregation_class",
                    suggested_fix=fix,
                    override_allowed=True,
                )
            )
    return results


def check_intrinsic_safety_separation(
    route: object, cables: Sequence[Cable], *, translator: Translator | None = None
) -> list[ValidationResult]:
    # Substring match: "Non-IS Signal" contains "IS" and counts as IS here.
    is_cables = [c for c in cables if is_intrinsically_safe(c)]
    non_is_cables = [c for c in cables if not is_intrinsically_safe(c)]
    if not is_cables or not non_is_cables:
        return []
    message = tr(translator, "validation.is_non_is_same_route", route=route)
    fix = tr(translator, "validation.is_non_is_fix")
    return [
        _segregation_result(
            c,
            severity=ValidationSeverity.ERROR,
            message=message,
            field="segregation_class",
            suggested_fix=fix,
            override_allowed=False,
        )
        for c in is_cables + non_is_cables
    ]


ROUTE_RULES = (
    check_power_signal_separation,
    check_voltage_level_separation,
    check_segregation_class_conflicts,
    check_intrinsic_safety_separation,
)


def check_route_segregation(
    route: object, cables: Sequence[Cable], *, translator: Translator | None = None
) -> list[ValidationResult]:
    results: list[ValidationResult] = []
    for rule in ROUTE_RULES:
        results.extend(rule(route, cables, translator=translator))
    return results


def validate_segregation_rules(
    cables: Iterable[Cable],
    *,
    key: RouteKey = route_text_key,
    translator: Translator | None = None,
) -> list[ValidationResult]:
    results: list[ValidationResult] = []
    for route, group in group_by_route(cables, key).items():
        if len(group) > 1:
            results.extend(check_route_segregation(route, group, translator=translator))
    return results
