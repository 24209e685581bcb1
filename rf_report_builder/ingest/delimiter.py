"""Field separator detection and row splitting.

A real tabular export has the same number of fields on every line, so the
separator whose per-line field count varies least is taken as the delimiter.
"""

from __future__ import annotations

import re
from typing import List, Sequence, Tuple

import numpy as np

from rf_report_builder.ingest.config import DEFAULT_CONFIG, IngestConfig


# Sentinel for "split on runs of whitespace".
WHITESPACE = " "

_RE_WS = re.compile(r"\s+")

_DELIMITER_NAMES = {",": "comma", ";": "semicolon", "\t": "tab", WHITESPACE: "whitespace"}


def delimiter_name(delimiter: str) -> str:
    return _DELIMITER_NAMES.get(delimiter, repr(delimiter))


def split_row(line: str, delimiter: str) -> List[str]:
    """Split one line into trimmed cells.

    Examples
    --------
    >>> split_row(" 100 , -70 ", ",")
    ['100', '-70']
    >>> split_row("  1575.42   -75 ", WHITESPACE)
    ['1575.42', '-75']
    """
    if delimiter == WHITESPACE:
        return _RE_WS.split(line.strip())
    return [cell.strip() for cell in line.split(delimiter)]


def detect_delimiter(
    lines: Sequence[str],
    *,
    config: IngestConfig = DEFAULT_CONFIG,
) -> Tuple[str, List[str]]:
    """Pick the delimiter with the most consistent field count.

    Parameters
    ----------
    lines : sequence of str
        Non-blank input lines; only the first ``config.delimiter_sample_lines`` are used.
    config : IngestConfig
        Candidate delimiters (in preference order) and thresholds.

    Returns
    -------
    delimiter : str
        One of ``config.delimiters``, or :data:`WHITESPACE` when none qualifies.
    warnings : list of str
        Per-candidate field-count statistics.
    """
    warnings: List[str] = []
    sample = list(lines[: config.delimiter_sample_lines])
    if not sample:
        warnings.append("no lines to sample; using whitespace splitting")
        return WHITESPACE, warnings

    min_lines = config.delimiter_min_multi_field_fraction * len(sample)
    scored: List[Tuple[float, int, int, str]] = []
    for rank, d in enumerate(config.delimiters):
        counts = np.array([len(line.split(d)) for line in sample], dtype=np.float64)
        multi = counts[counts > 1]
        if multi.size == 0 or multi.size < min_lines:
            warnings.append(f"{delimiter_name(d)}: split {multi.size}/{len(sample)} lines, rejected")
            continue
        mean = float(multi.mean())
        std = float(multi.std())
        warnings.append(f"{delimiter_name(d)}: fields mean={mean:.3g} std={std:.3g} over {multi.size} lines")
        if std < config.delimiter_max_stddev:
            scored.append((std, -int(multi.size), rank, d))

    if not scored:
        warnings.append("no consistent delimiter; using whitespace splitting")
        return WHITESPACE, warnings

    # lowest stddev; tie-breakers: more lines split, then preference order
    best = min(scored)[-1]
    warnings.append(f"selected delimiter: {delimiter_name(best)}")
    return best, warnings
