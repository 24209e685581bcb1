"""Cell-level cleaning: numeric values with unit suffixes, and timestamps.

Every function here is total: bad input yields NaN / None, never an exception.
Row-level decisions (keep or drop) are made by the caller. The ``*_series``
variants work on a whole column at once; the scalar functions are the
one-cell case of the same rules.
"""

from __future__ import annotations

import math
import re
from functools import lru_cache
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd

from rf_report_builder.ingest.config import DEFAULT_CONFIG, IngestConfig


_NUMBER_PATTERN = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
_RE_NUMBER = re.compile(rf"^{_NUMBER_PATTERN}$")

_EPOCH = pd.Timestamp(0, tz="UTC")
_ONE_MS = pd.Timedelta(milliseconds=1)


@lru_cache(maxsize=32)
def _suffix_regex(suffixes: Tuple[str, ...]) -> re.Pattern:
    # longest first so that "mhz" wins over "hz"
    ordered = sorted(suffixes, key=len, reverse=True)
    return re.compile("(?:" + "|".join(re.escape(s) for s in ordered) + r")$", flags=re.IGNORECASE)


def is_numeric_like(value: Optional[str]) -> bool:
    """True if *value* is a finite decimal number once thousands separators are removed.

    Examples
    --------
    >>> is_numeric_like("1,575.42")
    True
    >>> is_numeric_like("Power(dBm)")
    False
    """
    if value is None:
        return False
    s = str(value).strip().replace(",", "")
    if not s or not _RE_NUMBER.match(s):
        return False
    return math.isfinite(float(s))


def _strip_units(value: str, config: IngestConfig) -> str:
    s = value.strip().replace(",", "")
    if config.unit_suffixes:
        s = _suffix_regex(tuple(config.unit_suffixes)).sub("", s, count=1)
    return s.strip()


def clean_numeric(value: Optional[str], config: IngestConfig = DEFAULT_CONFIG) -> float:
    """
    Parse one numeric cell.

    Trims, drops thousands separators, removes one trailing unit suffix
    (``MHz``, ``dBm``, ...) and parses the rest. Returns NaN for anything that
    is not a finite number.

    Examples
    --------
    >>> clean_numeric(" 2,412 MHz ")
    2412.0
    >>> clean_numeric("-70dBm")
    -70.0
    """
    if value is None:
        return float("nan")
    s = _strip_units(str(value), config)
    if not s or not _RE_NUMBER.match(s):
        return float("nan")
    x = float(s)
    return x if math.isfinite(x) else float("nan")


def _as_text(values: pd.Series) -> pd.Series:
    return values.astype(object).where(values.notna(), "").astype(str).str.strip()


def clean_numeric_series(values: pd.Series, config: IngestConfig = DEFAULT_CONFIG) -> pd.Series:
    """:func:`clean_numeric` over a column of raw cells (float64, NaN on failure)."""
    s = _as_text(values).str.replace(",", "", regex=False)
    if config.unit_suffixes:
        s = s.str.replace(_suffix_regex(tuple(config.unit_suffixes)), "", regex=True).str.strip()
    is_num = s.str.fullmatch(_NUMBER_PATTERN).fillna(False).astype(bool)
    out = pd.to_numeric(s.where(is_num), errors="coerce").astype(np.float64)
    return out.where(np.isfinite(out))


def parse_timestamp_series(values: pd.Series, config: IngestConfig = DEFAULT_CONFIG) -> List[Optional[int]]:
    """
    Parse a column of timestamp cells into Unix epoch milliseconds.

    Numeric cells are epoch values: above ``config.epoch_ms_threshold`` they are
    taken as milliseconds, otherwise as seconds. This magnitude rule is
    approximate (a millisecond value from early 1970 reads as seconds).

    Other cells containing at least one digit are parsed as calendar / ISO-8601
    strings in a single ``pd.to_datetime`` call; strings without an offset are
    interpreted as UTC. Cells that parse to nothing, or to an instant outside
    the representable range, come back as None.
    """
    s = _as_text(values)
    compact = s.str.replace(",", "", regex=False)
    is_num = compact.str.fullmatch(_NUMBER_PATTERN).fillna(False).astype(bool)

    num = pd.to_numeric(compact.where(is_num), errors="coerce").astype(np.float64)
    ms = num.where(num > config.epoch_ms_threshold, num * 1000.0)

    # words like "Time" or "Mon" are never timestamps in a data cell
    is_date = ~is_num & s.str.contains(r"\d", regex=True).fillna(False).astype(bool)
    if is_date.any():
        ms = ms.copy()
        ms.loc[is_date] = _datetime_ms(s[is_date])

    out = ms.to_numpy(dtype=np.float64)
    return [int(round(v)) if math.isfinite(v) else None for v in out]


def _datetime_ms(text: pd.Series) -> pd.Series:
    parsed = pd.to_datetime(text, utc=True, errors="coerce", format="mixed")
    try:
        return ((parsed - _EPOCH) // _ONE_MS).astype(np.float64)
    except (ValueError, OverflowError):
        # some instant lies outside the nanosecond range; convert one by one
        return parsed.map(_one_datetime_ms).astype(np.float64)


def _one_datetime_ms(ts) -> float:
    if pd.isna(ts):
        return float("nan")
    try:
        return float((ts - _EPOCH) // _ONE_MS)
    except (ValueError, OverflowError):
        return float("nan")


def parse_timestamp(value: Optional[str], config: IngestConfig = DEFAULT_CONFIG) -> Optional[int]:
    """
    Parse one timestamp cell into Unix epoch milliseconds (see :func:`parse_timestamp_series`).

    Examples
    --------
    >>> parse_timestamp("1700000000")
    1700000000000
    >>> parse_timestamp("1700000000000")
    1700000000000
    >>> parse_timestamp("2023-11-14T22:13:20Z")
    1700000000000
    """
    if value is None:
        return None
    return parse_timestamp_series(pd.Series([value], dtype=object), config)[0]


def is_timestamp_like(value: Optional[str], config: IngestConfig = DEFAULT_CONFIG) -> bool:
    return parse_timestamp(value, config) is not None
