from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class ParseOptions:
    """Explicit column assignment override.

    Set individual fields to ``None`` (the default) to fall back to
    automatic detection for that column.  When ``frequency_col`` *and*
    ``power_col`` are both set, header scoring is skipped entirely and
    ``time_col`` is used as given (``None`` meaning no timestamp column).
    """

    frequency_col: Optional[int] = None
    power_col: Optional[int] = None
    time_col: Optional[int] = None

    def __post_init__(self) -> None:
        given = [c for c in (self.frequency_col, self.power_col, self.time_col) if c is not None]
        for c in given:
            if int(c) < 0:
                raise ValueError(f"column indices are zero-based and must be >= 0, got {c}")
        if len(set(given)) != len(given):
            raise ValueError(f"column indices must be distinct, got {given}")

    @property
    def is_explicit(self) -> bool:
        return self.frequency_col is not None and self.power_col is not None


@dataclass(frozen=True)
class DataRecord:
    """
    One validated row.

    frequency: MHz (as found in the file, no unit conversion)
    power: dBm
    timestamp: Unix epoch milliseconds, or None if the row had no parseable timestamp
    """
    frequency: float
    power: float
    timestamp: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"frequency": self.frequency, "power": self.power}
        if self.timestamp is not None:
            d["timestamp"] = self.timestamp
        return d


@dataclass(frozen=True)
class FrequencyStats:
    min: float
    max: float


@dataclass(frozen=True)
class PowerStats:
    min: float
    max: float
    avg: float


@dataclass(frozen=True)
class ReportStats:
    frequency: FrequencyStats
    power: PowerStats


@dataclass(frozen=True)
class ReportSamples:
    """Bounded row samples, all drawn from the same set of retained records.

    Attributes
    ----------
    first_rows, last_rows:
        Up to ``sample_size`` records from the start / end of the file, in file order.
    peak_power_rows:
        Up to ``sample_size`` records sorted by descending power; ties keep file order.
    """

    first_rows: Tuple[DataRecord, ...]
    last_rows: Tuple[DataRecord, ...]
    peak_power_rows: Tuple[DataRecord, ...]


@dataclass(frozen=True)
class TimeStats:
    start: int
    end: int
    duration_seconds: float


@dataclass(frozen=True)
class AnalysisReport:
    """
    Bounded statistical digest of one ingested file.

    Notes
    - row_count counts every line of the data section, including rows that were
      later dropped because frequency or power did not parse.
    - record_count is the number of retained DataRecords; stats and samples are
      computed over exactly those records.
    - time_stats is None when no retained record carries a timestamp, and is then
      omitted from ``to_dict()``.
    - warnings are diagnostic messages (delimiter, header decision, column map, drops).
    """
    file_name: str
    row_count: int
    column_count: int
    headers: Tuple[str, ...]
    stats: ReportStats
    samples: ReportSamples
    record_count: int
    frequency_col: int
    power_col: int
    time_col: Optional[int] = None
    delimiter: str = ","
    has_header: bool = True
    time_stats: Optional[TimeStats] = None
    warnings: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON-friendly host contract (camelCase keys)."""
        d: Dict[str, Any] = {
            "fileName": self.file_name,
            "rowCount": self.row_count,
            "columnCount": self.column_count,
            "headers": list(self.headers),
            "stats": {
                "frequency": {"min": self.stats.frequency.min, "max": self.stats.frequency.max},
                "power": {
                    "min": self.stats.power.min,
                    "max": self.stats.power.max,
                    "avg": self.stats.power.avg,
                },
            },
            "samples": {
                "firstRows": [r.to_dict() for r in self.samples.first_rows],
                "lastRows": [r.to_dict() for r in self.samples.last_rows],
                "peakPowerRows": [r.to_dict() for r in self.samples.peak_power_rows],
            },
        }
        if self.time_stats is not None:
            d["timeStats"] = {
                "start": self.time_stats.start,
                "end": self.time_stats.end,
                "durationSeconds": self.time_stats.duration_seconds,
            }
        return d
