"""Header / data-row boundary detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from rf_report_builder.ingest.cleaning import is_numeric_like, is_timestamp_like
from rf_report_builder.ingest.config import DEFAULT_CONFIG, IngestConfig
from rf_report_builder.ingest.delimiter import split_row


@dataclass(frozen=True)
class TableStructure:
    """
    Where the table starts and what its columns are called.

    start_line: index (into the non-blank lines) of the header, or of the first data row
    has_header: False when headers were synthesized as "Column 1", "Column 2", ...
    headers: header names, one per column of the first table line
    data_lines: the raw data-section lines, header excluded
    """
    start_line: int
    has_header: bool
    headers: Tuple[str, ...]
    data_lines: Tuple[str, ...]

    @property
    def column_count(self) -> int:
        return len(self.headers)


def synthesize_headers(n_columns: int) -> Tuple[str, ...]:
    return tuple(f"Column {i + 1}" for i in range(n_columns))


def _looks_like_data(cells: Sequence[str], config: IngestConfig) -> bool:
    if len(cells) < 2:
        return False
    first = cells[0]
    return is_numeric_like(first) or is_timestamp_like(first, config)


def _is_label(cell: str, config: IngestConfig) -> bool:
    return cell != "" and not is_numeric_like(cell) and not is_timestamp_like(cell, config)


def find_data_start(
    lines: Sequence[str],
    delimiter: str,
    *,
    config: IngestConfig = DEFAULT_CONFIG,
) -> int:
    """Index of the table's first line (header candidate or first data row).

    Scans the first ``config.header_scan_lines`` lines for a row whose first cell
    is numeric or a timestamp. If the line right before it has the same number of
    fields and at least one non-numeric cell, that line is returned instead (it is
    the header). Returns 0 when no data-looking row is found.
    """
    for i in range(min(config.header_scan_lines, len(lines))):
        cells = split_row(lines[i], delimiter)
        if not _looks_like_data(cells, config):
            continue
        if i > 0:
            prev = split_row(lines[i - 1], delimiter)
            if len(prev) == len(cells) and any(not is_numeric_like(c) for c in prev):
                return i - 1
        return i
    return 0


def detect_structure(
    lines: Sequence[str],
    delimiter: str,
    *,
    config: IngestConfig = DEFAULT_CONFIG,
) -> Tuple[TableStructure, List[str]]:
    """Split *lines* into headers and data lines.

    Lines before the table start (titles, free-text preambles) are discarded.
    The first table line is a header only if it holds at least one non-empty
    cell that is neither numeric nor a timestamp.

    Returns
    -------
    structure : TableStructure
    warnings : list of str
    """
    warnings: List[str] = []
    if not lines:
        return TableStructure(start_line=0, has_header=False, headers=(), data_lines=()), warnings

    start = find_data_start(lines, delimiter, config=config)
    if start > 0:
        warnings.append(f"skipped {start} preamble line(s) before the table")

    relevant = list(lines[start:])
    first = split_row(relevant[0], delimiter)
    has_header = any(_is_label(c, config) for c in first)

    if has_header:
        headers = tuple(first)
        data_lines = tuple(relevant[1:])
        warnings.append(f"header detected at line {start}: {list(headers)}")
    else:
        headers = synthesize_headers(len(first))
        data_lines = tuple(relevant)
        warnings.append(f"no header row; synthesized {len(headers)} column names")

    return TableStructure(start_line=start, has_header=has_header, headers=headers, data_lines=data_lines), warnings
