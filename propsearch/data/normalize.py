"""
Column renaming and text → number/list coercion for raw table frames.
"""
from __future__ import annotations

import json

import numpy as np
import pandas as pd


# ---------------------------------------------------------------------------
# Column normalisation
# ---------------------------------------------------------------------------

def normalize_columns(df: pd.DataFrame, column_map: dict[str, str]) -> pd.DataFrame:
    """Keep only mapped columns and rename them to internal names."""
    return df[list(column_map)].rename(columns=column_map)


def dedupe_lookup(df: pd.DataFrame, key: str) -> pd.DataFrame:
    """Collapse a table to one row per key. Later rows win."""
    return df.drop_duplicates(subset=[key], keep="last")


# ---------------------------------------------------------------------------
# Numeric coercion
# ---------------------------------------------------------------------------

_LEADING_INT_RE = r"^\+?(\d+)"
_INT64_MAX = int(np.iinfo(np.int64).max)


def _digits_to_int(digits) -> int | None:
    if not isinstance(digits, str):
        return None
    value = int(digits)
    return value if value <= _INT64_MAX else None


def parse_int_column(series: pd.Series) -> tuple[pd.Series, int]:
    """Parse leading integer digits ("1200000", "12.5", "3 baths"), default 0.

    Thousands separators are stripped first. Negative, non-numeric, or
    beyond-int64 text becomes 0. Returns (values, number of values that
    fell back to 0).
    """
    cleaned = series.fillna("").astype(str).str.replace(",", "", regex=False).str.strip()
    digits = cleaned.str.extract(_LEADING_INT_RE, expand=False)
    # int() per value: no float round-trip, no int64 wraparound
    parsed = [_digits_to_int(d) for d in digits]
    coerced = sum(v is None for v in parsed)
    values = pd.Series([0 if v is None else v for v in parsed], index=series.index, dtype=np.int64)
    return values, coerced


# ---------------------------------------------------------------------------
# Image list
# ---------------------------------------------------------------------------

def parse_image_list(raw: str | None) -> tuple[tuple[str, ...], bool]:
    """Decode a JSON array of image references.

    Returns (images, ok). Empty input is ok and yields no images; malformed
    JSON or a non-array payload yields no images and ok=False.
    """
    if raw is None or pd.isna(raw) or not str(raw).strip():
        return (), True
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        return (), False
    if not isinstance(parsed, list):
        return (), False
    return tuple(str(item) for item in parsed if item is not None), True
