from __future__ import annotations

import logging
import sys
from pathlib import Path

import streamlit as st

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.i18n import t  # noqa: E402
from app.validation import demo_cables_dataframe  # noqa: E402
from app.views import calculate, validation  # noqa: E402


def _init_state() -> None:
    state = st.session_state
    state.setdefault("lang", "EN")
    state.setdefault("material", "copper")
    state.setdefault("max_drop_pct", 3.0)
    if "cables_df" not in state:
        state["cables_df"] = demo_cables_dataframe()


def main() -> None:
    st.set_page_config(page_title="Cable Schedule", layout="wide")
    logging.basicConfig(level=logging.INFO)
    _init_state()
    state = st.session_state

    with st.sidebar:
        st.title(t("app.title"))
        st.radio(t("sidebar.language"), ["EN", "RU"], key="lang", horizontal=True)
        page = st.radio(
            t("sidebar.navigation"),
            ["validation", "calculate"],
            format_func=lambda p: t(f"nav.{p}"),
        )

    pages = {
        "validation": validation,
        "calculate": calculate,
    }
    pages[page].render(state)


if __name__ == "__main__":
    main()
