from __future__ import annotations

import math
from dataclasses import asdict
from pathlib import Path
from typing import Any, Iterable

import pandas as pd

from cable_core.models import Cable
from cable_core.results import ValidationResult

CABLE_COLUMNS = [
    "id",
    "tag",
    "function",
    "voltage",
    "current",
    "length",
    "size",
    "segregation_class",
    "route",
    "spare_percentage",
]

RESULT_COLUMNS = [
    "cable_id",
    "cable_tag",
    "severity",
    "validation_type",
    "message",
    "field",
    "suggested_fix",
    "override_allowed",
]

FUNCTION_OPTIONS = ["", "Power", "Lighting", "Signal", "Control", "Communication"]


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _opt_float(value: Any) -> float | None:
    """Number or None; unparseable cells are treated as not entered."""
    if _is_missing(value):
        return None
    try:
        num = float(value)
    except (TypeError, ValueError):
        return None
    return num if math.isfinite(num) else None


def _opt_int(value: Any) -> int | None:
    num = _opt_float(value)
    if num is None or not num.is_integer():
        return None
    return int(num)


def _as_text(value: Any) -> str:
    # Text columns read without dtype come back as floats ("12" -> 12.0).
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _opt_str(value: Any) -> str | None:
    if _is_missing(value):
        return None
    return _as_text(value).strip()


def cables_from_dataframe(df: pd.DataFrame) -> list[Cable]:
    """
    Build Cable rows from the cable table shown in the UI.

    Missing columns are treated as empty. Empty and non-numeric cells
    become None so the engines skip the rules that need them.
    """
    cables: list[Cable] = []
    for _, row in df.iterrows():
        cables.append(
            Cable(
                id=_opt_int(row.get("id")),
                tag="" if _is_missing(row.get("tag")) else _as_text(row.get("tag")),
                function=_opt_str(row.get("function")),
                voltage=_opt_float(row.get("voltage")),
                current=_opt_float(row.get("current")),
                length=_opt_float(row.get("length")),
                size=_opt_str(row.get("size")),
                segregation_class=_opt_str(row.get("segregation_class")),
                route=_opt_str(row.get("route")),
                spare_percentage=_opt_float(row.get("spare_percentage")),
            )
        )
    return cables


def read_cables_csv(path: str | Path) -> pd.DataFrame:
    """Cable schedule CSV with every cell kept as text ("001" and "1" stay distinct)."""
    return pd.read_csv(path, dtype=str, keep_default_na=False)


def results_to_dataframe(results: Iterable[ValidationResult]) -> pd.DataFrame:
    rows = []
    for res in results:
        row = asdict(res)
        row["severity"] = res.severity.value
        row["validation_type"] = res.validation_type.value
        rows.append(row)
    return pd.DataFrame(rows, columns=RESULT_COLUMNS)


def demo_cables_dataframe() -> pd.DataFrame:
    """Small schedule that trips each segregation rule once."""
    rows = [
        (1, "C-001", "Power", 480.0, 30.0, 250.0, "10 AWG", "Power 480VAC", "CT-01", 10.0),
        (2, "C-002", "Signal", 24.0, None, 250.0, "16 AWG", "IS Signal", "CT-01", 10.0),
        (3, "C-003", "Control", 24.0, None, 120.0, "14 AWG", "Control Power 24VDC", "CD-02", 20.0),
        (4, "C-004", "Lighting", 120.0, 16.0, 180.0, "12 AWG", "Power 120VAC", "CD-03", 0.0),
    ]
    return pd.DataFrame(rows, columns=CABLE_COLUMNS)
