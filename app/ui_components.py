from __future__ import annotations

from typing import Callable

import streamlit as st

_SEVERITY_KEYS = {
    "GOOD": "severity.good",
    "WARNING": "severity.warning",
    "ERROR": "severity.error",
    "INFO": "severity.info",
}


def _severity_style(severity: str) -> tuple[str, str]:
    """
    Returns (bg_color, fg_color) for a severity pill.
    Colors are chosen to be readable in both Streamlit light/dark themes.
    """
    s = (severity or "").upper().strip()
    if s == "GOOD":
        return "#1f7a3a", "white"
    if s == "WARNING":
        return "#b45309", "white"
    if s == "ERROR":
        return "#b91c1c", "white"
    if s == "INFO":
        return "#6b7280", "white"
    return "#374151", "white"


def severity_chip(
    label: str,
    severity: str,
    *,
    detail: str | None = None,
    t: Callable[..., str] | None = None,
) -> None:
    """
    Compact severity pill: Good/Warning/Error for voltage drop,
    Error/Warning/Info for validation counts. Localized when t is given.
    """
    bg, fg = _severity_style(severity)
    key = _SEVERITY_KEYS.get((severity or "").upper().strip())
    severity_label = t(key) if t and key else severity
    title = (detail or "").replace('"', "'")
    st.markdown(
        f"""
        <span title="{title}" style="
          display:inline-block;
          padding:0.15rem 0.55rem;
          border-radius:999px;
          background:{bg};
          color:{fg};
          font-weight:600;
          font-size:0.85rem;
          line-height:1.4;
          white-space:nowrap;
        ">{label}: {severity_label}</span>
        """,
        unsafe_allow_html=True,
    )
