from __future__ import annotations

import math
from typing import Any

import pandas as pd

from .field_validator import INPUT_FIELDS
from .flow_calculator import calc_q
from .unit_converter import ParseError

RESULT_COLUMNS = ("q_lpm", "q_m3s", "error")


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return str(value)
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        # pandas widens integer columns with gaps to float64
        return str(int(value))
    return str(value)


def compute_frame(df: pd.DataFrame) -> pd.DataFrame:
    """
    Row-wise Q calculation over a table of raw inputs.

    Expects columns piston_diameter, rod_diameter, amplitude, frequency.
    Returns a copy with q_lpm, q_m3s (NaN on failure) and error
    (failing field id, "" when the row computed).
    """
    missing = [c for c in INPUT_FIELDS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing input columns: {', '.join(missing)}")

    q_lpm: list[float] = []
    q_m3s: list[float] = []
    errors: list[str] = []

    for _, row in df.iterrows():
        raw = [_cell_text(row.get(c)) for c in INPUT_FIELDS]
        try:
            res = calc_q(*raw)
        except ParseError as exc:
            q_lpm.append(math.nan)
            q_m3s.append(math.nan)
            errors.append(exc.field)
            continue
        q_lpm.append(res.q_lpm)
        q_m3s.append(res.q_m3s)
        errors.append("")

    out = df.copy()
    out["q_lpm"] = q_lpm
    out["q_m3s"] = q_m3s
    out["error"] = errors
    return out
