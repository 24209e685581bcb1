from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np

from rf_report_builder.models.records import (
    DataRecord,
    FrequencyStats,
    PowerStats,
    ReportSamples,
    ReportStats,
    TimeStats,
)


def compute_stats(records: Sequence[DataRecord]) -> ReportStats:
    """Min/max frequency and min/max/mean power over *records* (must be non-empty)."""
    if not records:
        raise ValueError("compute_stats needs at least one record")
    freq = np.fromiter((r.frequency for r in records), dtype=np.float64, count=len(records))
    power = np.fromiter((r.power for r in records), dtype=np.float64, count=len(records))
    return ReportStats(
        frequency=FrequencyStats(min=float(freq.min()), max=float(freq.max())),
        power=PowerStats(min=float(power.min()), max=float(power.max()), avg=float(power.sum() / power.size)),
    )


def compute_time_stats(records: Sequence[DataRecord]) -> Optional[TimeStats]:
    """Earliest / latest timestamp and their span, or None if no record has a timestamp."""
    ts = [r.timestamp for r in records if r.timestamp is not None]
    if not ts:
        return None
    start, end = min(ts), max(ts)
    return TimeStats(start=int(start), end=int(end), duration_seconds=(end - start) / 1000.0)


def select_samples(records: Sequence[DataRecord], *, size: int = 10) -> ReportSamples:
    """First, last and highest-power records.

    The peak sample uses a stable sort on descending power, so records with equal
    power appear in file order.
    """
    n = int(size)
    power = np.fromiter((r.power for r in records), dtype=np.float64, count=len(records))
    order = np.argsort(-power, kind="stable")[:n]
    return ReportSamples(
        first_rows=tuple(records[:n]),
        last_rows=tuple(records[-n:]) if records else (),
        peak_power_rows=tuple(records[int(i)] for i in order),
    )


def aggregate(
    records: Sequence[DataRecord],
    *,
    sample_size: int = 10,
) -> Tuple[ReportStats, ReportSamples, Optional[TimeStats]]:
    """Reduce the retained records to stats, samples and optional time span.

    All three are computed over the same *records*.
    """
    records = list(records)
    return compute_stats(records), select_samples(records, size=sample_size), compute_time_stats(records)
