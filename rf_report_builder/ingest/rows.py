from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from rf_report_builder.ingest.cleaning import clean_numeric_series, parse_timestamp_series
from rf_report_builder.ingest.column_detect import ColumnAssignment
from rf_report_builder.ingest.config import DEFAULT_CONFIG, IngestConfig
from rf_report_builder.ingest.delimiter import split_row
from rf_report_builder.models.records import DataRecord


def parse_records(
    data_lines: Sequence[str],
    delimiter: str,
    columns: ColumnAssignment,
    *,
    config: IngestConfig = DEFAULT_CONFIG,
) -> Tuple[List[DataRecord], List[str]]:
    """
    Turn data-section lines into DataRecords, in file order.

    A row is kept only if both the frequency and the power cell parse to finite
    numbers; rows too short to hold either column are skipped. An unparseable
    timestamp only clears the record's timestamp.

    Returns (records, warnings).
    """
    warnings: List[str] = []
    rows = [split_row(line, delimiter) for line in data_lines]

    need = max(columns.frequency_col, columns.power_col)
    usable = [r for r in rows if len(r) > need]
    short = len(rows) - len(usable)
    if short:
        warnings.append(f"{short} row(s) have fewer than {need + 1} fields; skipped")

    cells = pd.DataFrame(
        {
            "frequency": pd.Series([r[columns.frequency_col] for r in usable], dtype=object),
            "power": pd.Series([r[columns.power_col] for r in usable], dtype=object),
        }
    )
    freq = clean_numeric_series(cells["frequency"], config).to_numpy(dtype=np.float64)
    power = clean_numeric_series(cells["power"], config).to_numpy(dtype=np.float64)
    keep = np.isfinite(freq) & np.isfinite(power)

    t_col = columns.time_col
    kept = np.flatnonzero(keep)
    stamps: List[Optional[int]] = [None] * kept.size
    n_bad_time = 0
    if t_col is not None and kept.size:
        time_cells = pd.Series(
            [usable[int(i)][t_col] if t_col < len(usable[int(i)]) else None for i in kept],
            dtype=object,
        )
        stamps = parse_timestamp_series(time_cells, config)
        n_bad_time = sum(1 for cell, ts in zip(time_cells, stamps) if cell is not None and ts is None)

    records = [
        DataRecord(frequency=float(freq[i]), power=float(power[i]), timestamp=ts)
        for i, ts in zip(kept, stamps)
    ]

    n_invalid = int((~keep).sum())
    if n_invalid:
        warnings.append(f"dropped {n_invalid} row(s) with non-numeric frequency or power")
    if n_bad_time:
        warnings.append(f"{n_bad_time} retained row(s) have no parseable timestamp")
    return records, warnings
