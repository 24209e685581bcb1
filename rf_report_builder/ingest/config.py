"""Ingestion configuration -- keyword tables, unit suffixes and thresholds.

All calibration data used by the pipeline lives in one frozen dataclass that is
handed to :class:`~rf_report_builder.builder.ReportBuilder` at construction time.
Tests (or callers with unusual exports) substitute alternate tables with
``dataclasses.replace()`` without touching the algorithm.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Tuple


FREQUENCY_KEYWORDS: Tuple[str, ...] = (
    "freq", "frequency", "mhz", "khz", "ghz", "hertz", "hz", "channel", "band", "freq.", "f(mhz)",
)
POWER_KEYWORDS: Tuple[str, ...] = (
    "power", "dbm", "db", "level", "amplitude", "rssi", "signal", "strength", "intensity", "sig_str", "pwr",
)
TIME_KEYWORDS: Tuple[str, ...] = ("time", "timestamp", "date", "datetime", "epoch")

# Matched case-insensitively at the end of a cell; longer suffixes must come first.
UNIT_SUFFIXES: Tuple[str, ...] = ("mhz", "khz", "ghz", "hz", "dbm", "db", "mw", "pwr")


@dataclass(frozen=True)
class IngestConfig:
    """Frozen configuration for the tabular ingestion pipeline.

    Keyword tables
    --------------
    frequency_keywords, power_keywords, time_keywords : tuple of str
        Lower-case header keywords. An exact match scores ``exact_match_bonus``;
        otherwise every keyword contained in the header adds one point.
    unit_suffixes : tuple of str
        Trailing unit tokens stripped from numeric cells (case-insensitive).

    Delimiter detection
    -------------------
    delimiters : tuple of str
        Candidate separators in preference order.
    delimiter_sample_lines : int
        Number of leading non-blank lines examined.
    delimiter_min_multi_field_fraction : float
        A candidate is discarded unless at least this fraction of the sampled
        lines split into more than one field.
    delimiter_max_stddev : float
        Maximum standard deviation of the field count for a candidate to win.

    Structure / parsing
    -------------------
    header_scan_lines : int
        Lines scanned for the first numeric-looking data row.
    headerless_pair_fallback : bool
        Read a headerless two-column table as (frequency, power) instead of
        asking for manual column selection.
    epoch_ms_threshold : float
        Numeric timestamps above this are milliseconds; smaller ones are seconds.
    sample_size : int
        Length of each report sample (first / last / peak power).
    failure_sample_rows : int
        Raw rows attached to a column-detection failure.
    """

    frequency_keywords: Tuple[str, ...] = FREQUENCY_KEYWORDS
    power_keywords: Tuple[str, ...] = POWER_KEYWORDS
    time_keywords: Tuple[str, ...] = TIME_KEYWORDS
    unit_suffixes: Tuple[str, ...] = UNIT_SUFFIXES
    exact_match_bonus: int = 10

    delimiters: Tuple[str, ...] = (",", ";", "\t")
    delimiter_sample_lines: int = 50
    delimiter_min_multi_field_fraction: float = 0.5
    delimiter_max_stddev: float = 0.5

    header_scan_lines: int = 10
    headerless_pair_fallback: bool = True
    epoch_ms_threshold: float = 1e12
    sample_size: int = 10
    failure_sample_rows: int = 5

    def __post_init__(self) -> None:
        if self.sample_size <= 0:
            raise ValueError("sample_size must be > 0")
        if self.delimiter_sample_lines <= 0 or self.header_scan_lines <= 0:
            raise ValueError("scan windows must be > 0")
        if not self.delimiters:
            raise ValueError("at least one candidate delimiter is required")

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dict (tuples become lists)."""
        d = asdict(self)
        for k, v in d.items():
            if isinstance(v, tuple):
                d[k] = list(v)
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> IngestConfig:
        """Reconstruct from a dict produced by :meth:`to_dict`.

        Unknown keys are ignored so that configs written by newer versions still load.
        """
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for k, v in d.items():
            if k not in known:
                continue
            kwargs[k] = tuple(v) if isinstance(v, list) else v
        return cls(**kwargs)


DEFAULT_CONFIG = IngestConfig()
