from __future__ import annotations

import streamlit as st

from app.i18n import t
from app.ui_components import severity_chip
from app.validation import FUNCTION_OPTIONS, cables_from_dataframe, results_to_dataframe
from cable_core.validation import check_duplicate_tag, validate_all_cables
from cable_core.voltage_drop import calculate_cable_voltage_drop


def render(state: dict) -> None:
    st.header(t("validation.header"))
    st.caption(t("validation.caption"))

    col_config = {
        "id": st.column_config.NumberColumn(t("cables.col_id"), disabled=True),
        "tag": st.column_config.TextColumn(t("cables.col_tag")),
        "function": st.column_config.SelectboxColumn(
            t("cables.col_function"), options=FUNCTION_OPTIONS, required=False
        ),
        "voltage": st.column_config.NumberColumn(t("cables.col_voltage"), format="%.0f"),
        "current": st.column_config.NumberColumn(t("cables.col_current"), format="%.1f"),
        "length": st.column_config.NumberColumn(t("cables.col_length"), format="%.0f"),
        "size": st.column_config.TextColumn(t("cables.col_size")),
        "segregation_class": st.column_config.TextColumn(t("cables.col_segregation_class")),
        "route": st.column_config.TextColumn(t("cables.col_route")),
        "spare_percentage": st.column_config.NumberColumn(t("cables.col_spare"), format="%.0f"),
    }
    edited = st.data_editor(
        state["cables_df"],
        column_config=col_config,
        num_rows="dynamic",
        use_container_width=True,
        key="cables_editor",
    )
    cables = cables_from_dataframe(edited)

    with st.expander(t("validation.tag_probe"), expanded=False):
        probe = st.text_input(t("validation.tag_probe_input"))
        if probe:
            if check_duplicate_tag(probe, cables):
                st.warning(t("validation.tag_taken", tag=probe))
            else:
                st.success(t("validation.tag_free", tag=probe))

    if not st.button(t("validation.run_btn")):
        return

    state["cables_df"] = edited
    summary = validate_all_cables(cables, translator=t)

    cols = st.columns(4)
    cols[0].metric(t("validation.total_cables"), summary.total_cables)
    cols[1].metric(t("validation.errors"), summary.error_count)
    cols[2].metric(t("validation.warnings"), summary.warning_count)
    cols[3].metric(t("validation.infos"), summary.info_count)
    st.caption(t("validation.run_at", at=summary.validation_time.isoformat(timespec="seconds")))

    if summary.has_blocking_errors:
        severity_chip(t("chips.validation"), "ERROR", detail=t("validation.blocking"), t=t)
    elif summary.has_errors or summary.warning_count:
        severity_chip(t("chips.validation"), "WARNING", t=t)
    else:
        severity_chip(t("chips.validation"), "GOOD", t=t)
        st.success(t("validation.clean"))

    if summary.results:
        st.dataframe(results_to_dataframe(summary.results), use_container_width=True)

    st.subheader(t("validation.vd_section"))
    vd_rows = []
    for cable in cables:
        result = calculate_cable_voltage_drop(cable)
        if result is None:
            continue
        vd_rows.append(
            {
                t("cables.col_tag"): cable.tag,
                t("calculate.drop_v"): round(result.voltage_drop_volts, 3),
                t("calculate.drop_pct"): round(result.voltage_drop_percentage, 2),
                t("chips.vd"): result.severity.value,
            }
        )
    if vd_rows:
        st.dataframe(vd_rows, use_container_width=True)
    else:
        st.info(t("validation.vd_none"))
