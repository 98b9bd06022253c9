from __future__ import annotations

import streamlit as st

from app.i18n import t
from app.ui_components import severity_chip
from cable_core.conductors import COPPER_SIZES, parse_material
from cable_core.voltage_drop import (
    DEFAULT_POWER_FACTOR,
    VoltageDropCalculation,
    calculate_current_from_power,
    calculate_minimum_conductor_size,
    calculate_voltage_drop,
)

MATERIAL_OPTIONS = ["copper", "aluminum"]


def _material_label(value: str) -> str:
    return t("calculate.material_aluminum") if value == "aluminum" else t("calculate.material_copper")


def render(state: dict) -> None:
    st.header(t("calculate.header"))

    material_key = st.radio(
        t("calculate.material"),
        MATERIAL_OPTIONS,
        format_func=_material_label,
        horizontal=True,
        key="material",
    )
    material = parse_material(material_key)

    cols = st.columns(3)
    voltage = cols[0].number_input(t("calculate.voltage"), min_value=0.0, value=120.0, step=1.0)
    current = cols[1].number_input(t("calculate.current"), min_value=0.0, value=20.0, step=1.0)
    distance = cols[2].number_input(t("calculate.distance"), min_value=0.0, value=100.0, step=10.0)
    cols = st.columns(2)
    size = cols[0].selectbox(
        t("calculate.size"),
        list(reversed(COPPER_SIZES)),
        index=list(reversed(COPPER_SIZES)).index("12 AWG"),
    )
    power_factor = cols[1].number_input(
        t("calculate.power_factor"),
        min_value=0.0,
        max_value=1.0,
        value=DEFAULT_POWER_FACTOR,
        step=0.01,
    )

    st.subheader(t("calculate.run_vd"))
    if st.button(t("calculate.run_vd_btn")):
        try:
            result = calculate_voltage_drop(
                VoltageDropCalculation(
                    voltage=voltage,
                    current=current,
                    distance=distance,
                    conductor_size=size,
                    material=material,
                    power_factor=power_factor,
                )
            )
            mcols = st.columns(2)
            mcols[0].metric(t("calculate.drop_v"), f"{result.voltage_drop_volts:.2f} V")
            mcols[1].metric(t("calculate.drop_pct"), f"{result.voltage_drop_percentage:.2f}%")
            severity_chip(
                t("chips.vd"),
                result.severity.name,
                detail=result.compliance_status,
                t=t,
            )
        except ValueError as exc:
            st.error(t("errors.vd_failed", exc=exc))

    st.subheader(t("calculate.run_min_size"))
    max_drop_pct = st.number_input(
        t("calculate.max_drop_pct"),
        min_value=0.1,
        max_value=20.0,
        step=0.5,
        key="max_drop_pct",
    )
    if st.button(t("calculate.run_min_size_btn")):
        try:
            min_size = calculate_minimum_conductor_size(
                voltage, current, distance, material, max_drop_pct, power_factor
            )
            st.success(t("calculate.min_size_result", size=min_size))
        except ValueError as exc:
            st.error(t("errors.min_size_failed", exc=exc))

    st.subheader(t("calculate.run_current"))
    cols = st.columns(2)
    power_w = cols[0].number_input(t("calculate.power_w"), min_value=0.0, value=1000.0, step=100.0)
    phases = cols[1].radio(t("calculate.phases"), [1, 3], horizontal=True)
    if st.button(t("calculate.run_current_btn")):
        amps = calculate_current_from_power(power_w, voltage, power_factor, phases)
        st.metric(t("calculate.current_result"), f"{amps:.3f} A")
