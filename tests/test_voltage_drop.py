from __future__ import annotations

import math
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from cable_core.conductors import (
    ALUMINUM_SIZES,
    COPPER_SIZES,
    ConductorMaterial,
    UnknownConductorSizeError,
)
from cable_core.models import Cable
from cable_core.voltage_drop import (
    COMPLIANCE_MESSAGES,
    NoStandardSizeError,
    VoltageDropCalculation,
    VoltageDropSeverity,
    calculate_cable_voltage_drop,
    calculate_current_from_power,
    calculate_minimum_conductor_size,
    calculate_voltage_drop,
    classify_drop,
    estimate_cable_current,
)


def _calc(**overrides) -> VoltageDropCalculation:
    base = dict(
        voltage=120.0,
        current=20.0,
        distance=100.0,
        conductor_size="12 AWG",
        material=ConductorMaterial.COPPER,
        power_factor=0.85,
    )
    base.update(overrides)
    return VoltageDropCalculation(**base)


def test_120v_20a_100ft_12awg_exceeds_five_percent() -> None:
    res = calculate_voltage_drop(_calc())
    expected_v = 2.0 * 20.0 * 0.1 * 1.93 * 0.85
    assert res.voltage_drop_volts == pytest.approx(expected_v)
    assert 6.0 < res.voltage_drop_volts < 7.0
    assert res.voltage_drop_percentage == pytest.approx(expected_v / 120.0 * 100.0)
    assert res.voltage_drop_percentage > 5.0
    assert res.severity is VoltageDropSeverity.ERROR
    assert res.compliance_status == COMPLIANCE_MESSAGES[VoltageDropSeverity.ERROR]
    assert res.line_to_line_voltage_drop == res.voltage_drop_volts


@pytest.mark.parametrize(
    ("pct", "expected"),
    [
        (0.0, VoltageDropSeverity.GOOD),
        (3.0, VoltageDropSeverity.GOOD),
        (3.0001, VoltageDropSeverity.WARNING),
        (5.0, VoltageDropSeverity.WARNING),
        (5.01, VoltageDropSeverity.ERROR),
        (math.inf, VoltageDropSeverity.ERROR),
        (math.nan, VoltageDropSeverity.ERROR),
    ],
)
def test_severity_thresholds(pct: float, expected: VoltageDropSeverity) -> None:
    assert classify_drop(pct) is expected


def test_non_positive_power_factor_uses_default() -> None:
    default = calculate_voltage_drop(_calc(power_factor=0.85))
    assert calculate_voltage_drop(_calc(power_factor=0.0)).voltage_drop_volts == pytest.approx(
        default.voltage_drop_volts
    )
    assert calculate_voltage_drop(_calc(power_factor=-1.0)).voltage_drop_volts == pytest.approx(
        default.voltage_drop_volts
    )


def test_power_factor_above_one_is_not_capped() -> None:
    res = calculate_voltage_drop(_calc(power_factor=1.2))
    assert res.voltage_drop_volts == pytest.approx(2.0 * 20.0 * 0.1 * 1.93 * 1.2)


def test_number_of_conductors_does_not_change_drop() -> None:
    two = calculate_voltage_drop(_calc(number_of_conductors=2))
    four = calculate_voltage_drop(_calc(number_of_conductors=4))
    assert two.voltage_drop_volts == four.voltage_drop_volts


def test_aluminum_drop_is_higher_than_copper() -> None:
    cu = calculate_voltage_drop(_calc(material=ConductorMaterial.COPPER))
    al = calculate_voltage_drop(_calc(material=ConductorMaterial.ALUMINUM))
    assert al.voltage_drop_volts > cu.voltage_drop_volts


def test_unknown_size_propagates() -> None:
    with pytest.raises(UnknownConductorSizeError):
        calculate_voltage_drop(_calc(conductor_size="13 AWG"))


def test_zero_nominal_voltage_reports_non_finite_percentage() -> None:
    res = calculate_voltage_drop(_calc(voltage=0.0))
    assert math.isinf(res.voltage_drop_percentage)
    assert res.severity is VoltageDropSeverity.ERROR

    res = calculate_voltage_drop(_calc(voltage=0.0, current=0.0))
    assert math.isnan(res.voltage_drop_percentage)
    assert res.severity is VoltageDropSeverity.ERROR


def test_drop_percent_monotonic_in_current_and_distance() -> None:
    for size in COPPER_SIZES:
        by_current = [
            calculate_voltage_drop(_calc(conductor_size=size, current=i)).voltage_drop_percentage
            for i in (1.0, 5.0, 20.0, 80.0)
        ]
        by_distance = [
            calculate_voltage_drop(_calc(conductor_size=size, distance=d)).voltage_drop_percentage
            for d in (10.0, 100.0, 500.0, 2000.0)
        ]
        assert by_current == sorted(by_current)
        assert by_distance == sorted(by_distance)
        assert len(set(by_current)) == len(by_current)
        assert len(set(by_distance)) == len(by_distance)


def test_min_size_for_scenario_is_larger_than_12_awg() -> None:
    size = calculate_minimum_conductor_size(120.0, 20.0, 100.0, ConductorMaterial.COPPER, 3.0, 0.85)
    assert size == "8 AWG"
    assert COPPER_SIZES.index(size) < COPPER_SIZES.index("12 AWG")
    res = calculate_voltage_drop(_calc(conductor_size=size))
    assert res.voltage_drop_percentage <= 3.0


@pytest.mark.parametrize("material", [ConductorMaterial.COPPER, ConductorMaterial.ALUMINUM])
@pytest.mark.parametrize(
    ("voltage", "current", "distance", "budget"),
    [
        (120.0, 20.0, 100.0, 3.0),
        (208.0, 45.0, 250.0, 2.0),
        (480.0, 150.0, 600.0, 3.0),
        (240.0, 8.0, 40.0, 5.0),
        (24.0, 2.0, 300.0, 1.5),
    ],
)
def test_min_size_fits_budget_and_is_smallest(
    material: ConductorMaterial, voltage: float, current: float, distance: float, budget: float
) -> None:
    ladder = COPPER_SIZES if material == ConductorMaterial.COPPER else ALUMINUM_SIZES
    size = calculate_minimum_conductor_size(voltage, current, distance, material, budget, 0.85)
    assert size in ladder

    def drop(s: str) -> float:
        return calculate_voltage_drop(
            VoltageDropCalculation(voltage, current, distance, s, material, 0.85)
        ).voltage_drop_volts

    limit = voltage * budget / 100.0
    assert drop(size) <= limit
    idx = ladder.index(size)
    if idx + 1 < len(ladder):
        assert drop(ladder[idx + 1]) > limit


@pytest.mark.parametrize("budget", [0.5, 1.0, 2.0, 3.0])
def test_min_size_round_trips_to_good(budget: float) -> None:
    size = calculate_minimum_conductor_size(277.0, 32.0, 180.0, ConductorMaterial.COPPER, budget)
    res = calculate_voltage_drop(
        VoltageDropCalculation(277.0, 32.0, 180.0, size, ConductorMaterial.COPPER)
    )
    assert res.severity is VoltageDropSeverity.GOOD


def test_min_size_small_load_hits_bottom_of_each_ladder() -> None:
    assert calculate_minimum_conductor_size(480.0, 0.1, 10.0, ConductorMaterial.COPPER, 3.0) == "18 AWG"
    assert calculate_minimum_conductor_size(480.0, 0.1, 10.0, ConductorMaterial.ALUMINUM, 3.0) == "12 AWG"


def test_min_size_exhausted_search() -> None:
    with pytest.raises(NoStandardSizeError, match="No standard conductor size"):
        calculate_minimum_conductor_size(120.0, 1000.0, 10000.0, ConductorMaterial.COPPER, 1.0)


def test_current_from_power_three_phase() -> None:
    amps = calculate_current_from_power(1000.0, 480.0, 0.85, 3)
    assert amps == pytest.approx(1000.0 / (480.0 * 1.732 * 0.85))
    assert amps == pytest.approx(1.415, abs=1e-3)


def test_current_from_power_single_phase_and_fallback() -> None:
    single = calculate_current_from_power(1000.0, 120.0, 0.85, 1)
    assert single == pytest.approx(1000.0 / (120.0 * 0.85))
    assert calculate_current_from_power(1000.0, 120.0, 0.85, 2) == single
    assert calculate_current_from_power(1000.0, 120.0, 0.85, 0) == single


def test_current_from_power_degenerate_inputs_are_non_finite() -> None:
    assert math.isinf(calculate_current_from_power(1000.0, 0.0, 0.85, 1))
    assert math.isinf(calculate_current_from_power(1000.0, 480.0, 0.0, 3))
    assert math.isnan(calculate_current_from_power(0.0, 0.0, 0.85, 1))


@pytest.mark.parametrize(
    ("function", "size", "expected"),
    [
        ("Power", "12 AWG", 20.0),
        ("Lighting", "18 AWG", 10.0),
        ("Power", "8 AWG", 40.0),
        ("Power", "500 MCM", 20.0),
        ("Signal", "18 AWG", 0.1),
        ("Control", "16 AWG", 0.2),
        ("Communication", "14 AWG", 0.5),
        ("Signal", "Cat6", 0.1),
        (None, "12 AWG", 0.0),
        ("Spare", "12 AWG", 0.0),
    ],
)
def test_estimate_cable_current(function, size, expected) -> None:
    assert estimate_cable_current(function, size) == expected


def test_cable_voltage_drop_uses_estimate_when_current_missing() -> None:
    cable = Cable(tag="C-1", function="Power", voltage=120.0, length=100.0, size="12 AWG")
    res = calculate_cable_voltage_drop(cable)
    assert res is not None
    assert res.voltage_drop_volts == pytest.approx(2.0 * 20.0 * 0.1 * 1.93 * 0.85)


def test_cable_voltage_drop_prefers_entered_current() -> None:
    cable = Cable(tag="C-1", function="Power", voltage=120.0, current=10.0, length=100.0, size="12 AWG")
    res = calculate_cable_voltage_drop(cable)
    assert res is not None
    assert res.voltage_drop_volts == pytest.approx(2.0 * 10.0 * 0.1 * 1.93 * 0.85)


@pytest.mark.parametrize(
    "cable",
    [
        Cable(tag="C-1", function="Power", length=100.0, size="12 AWG"),
        Cable(tag="C-1", function="Power", voltage=120.0, size="12 AWG"),
        Cable(tag="C-1", function="Power", voltage=120.0, length=100.0),
        Cable(tag="C-1", function=None, voltage=120.0, length=100.0, size="12 AWG"),
        Cable(tag="C-1", function="Power", voltage=120.0, length=100.0, size="2.5mm2"),
    ],
)
def test_cable_voltage_drop_returns_none_without_enough_data(cable: Cable) -> None:
    assert calculate_cable_voltage_drop(cable) is None
