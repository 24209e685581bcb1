"""Column-role inference from header keywords.

Scores every header against the frequency / power / time keyword tables of an
:class:`~rf_report_builder.ingest.config.IngestConfig` and assigns one column to
each role. :class:`~rf_report_builder.models.records.ParseOptions` bypasses the
heuristic when the operator knows the file layout.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from rf_report_builder.ingest.config import DEFAULT_CONFIG, IngestConfig
from rf_report_builder.models.records import ParseOptions


@dataclass(frozen=True)
class ColumnCandidate:
    """Keyword scores of one column (all >= 0)."""

    index: int
    frequency_score: int
    power_score: int
    time_score: int


@dataclass(frozen=True)
class ColumnAssignment:
    frequency_col: int
    power_col: int
    time_col: Optional[int] = None
    explicit: bool = False


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------


def score_header(header: str, keywords: Sequence[str], *, exact_match_bonus: int = 10) -> int:
    """Score one lower-cased header against a keyword table.

    An exact match scores ``exact_match_bonus``; otherwise each keyword contained
    in the header adds one point.

    Examples
    --------
    >>> score_header("frequency", ["freq", "frequency"])
    10
    >>> score_header("frequency(mhz)", ["freq", "frequency", "mhz", "hz"])
    4
    """
    if header in keywords:
        return int(exact_match_bonus)
    return sum(1 for kw in keywords if kw in header)


def score_headers(headers: Sequence[str], *, config: IngestConfig = DEFAULT_CONFIG) -> List[ColumnCandidate]:
    out: List[ColumnCandidate] = []
    for i, h in enumerate(headers):
        hl = str(h).strip().lower()
        out.append(
            ColumnCandidate(
                index=i,
                frequency_score=score_header(hl, config.frequency_keywords, exact_match_bonus=config.exact_match_bonus),
                power_score=score_header(hl, config.power_keywords, exact_match_bonus=config.exact_match_bonus),
                time_score=score_header(hl, config.time_keywords, exact_match_bonus=config.exact_match_bonus),
            )
        )
    return out


def rank_candidates(candidates: Iterable[ColumnCandidate], role: str) -> List[int]:
    """Column indices with a positive score for *role*, best first.

    The sort is stable, so equal scores keep column order.
    """
    attr = f"{role}_score"
    positive = [c for c in candidates if getattr(c, attr) > 0]
    positive.sort(key=lambda c: -getattr(c, attr))
    return [c.index for c in positive]


def _first_free(ranked: Sequence[int], *taken: Optional[int]) -> Optional[int]:
    for idx in ranked:
        if idx not in taken:
            return idx
    return None


# ---------------------------------------------------------------------------
# Assignment
# ---------------------------------------------------------------------------


def assign_columns(
    headers: Sequence[str],
    *,
    options: Optional[ParseOptions] = None,
    has_header: bool = True,
    config: IngestConfig = DEFAULT_CONFIG,
) -> Tuple[Optional[ColumnAssignment], List[str]]:
    """Assign (or accept) the frequency, power and timestamp columns.

    Parameters
    ----------
    headers : sequence of str
        Header names (detected or synthesized).
    options : ParseOptions, optional
        When both ``frequency_col`` and ``power_col`` are set, those columns are
        used directly and ``time_col`` is taken as given. A single pinned index is
        honoured and the remaining roles are inferred around it.
    has_header : bool
        False when *headers* were synthesized. A headerless table of exactly two
        columns is read as (frequency, power) if keyword scoring finds nothing and
        ``config.headerless_pair_fallback`` is set.
    config : IngestConfig
        Keyword tables.

    Returns
    -------
    assignment : ColumnAssignment or None
        None when frequency or power could not be placed.
    warnings : list of str
    """
    warnings: List[str] = []
    options = options or ParseOptions()

    # --- explicit override ---
    if options.frequency_col is not None and options.power_col is not None:
        a = ColumnAssignment(
            frequency_col=int(options.frequency_col),
            power_col=int(options.power_col),
            time_col=None if options.time_col is None else int(options.time_col),
            explicit=True,
        )
        warnings.append(f"explicit column mapping: frequency=col{a.frequency_col}, power=col{a.power_col}, time={_fmt(a.time_col)}")
        return a, warnings

    # --- auto-detect from header keywords ---
    candidates = score_headers(headers, config=config)
    freq_ranked = rank_candidates(candidates, "frequency")
    power_ranked = rank_candidates(candidates, "power")
    time_ranked = rank_candidates(candidates, "time")

    freq_pinned = options.frequency_col
    power_pinned = options.power_col
    time_pinned = options.time_col

    freq = freq_pinned if freq_pinned is not None else _first_free(freq_ranked, power_pinned, time_pinned)
    power = power_pinned if power_pinned is not None else _first_free(power_ranked, freq, time_pinned)
    if power is None and freq_pinned is None:
        # frequency took the only power candidate: place power first, then frequency
        power = _first_free(power_ranked, time_pinned)
        freq = _first_free(freq_ranked, power, time_pinned)
        if power is not None:
            warnings.append("frequency/power keyword conflict resolved by placing power first")

    if time_pinned is not None:
        time: Optional[int] = int(time_pinned)
    else:
        time = _first_free(time_ranked, freq, power)

    rank_txt = ", ".join(
        f"col{c.index}:f{c.frequency_score}/p{c.power_score}/t{c.time_score}"
        for c in candidates
        if c.frequency_score or c.power_score or c.time_score
    )
    warnings.append(f"header keyword scores: {rank_txt or '<none>'}")

    if freq is None or power is None:
        if (
            not has_header
            and len(headers) == 2
            and config.headerless_pair_fallback
            and freq_pinned is None
            and power_pinned is None
            and time_pinned is None
        ):
            warnings.append("headerless two-column table: assumed frequency=col0, power=col1")
            return ColumnAssignment(frequency_col=0, power_col=1), warnings
        warnings.append(f"column detection failed: frequency={_fmt(freq)}, power={_fmt(power)}")
        return None, warnings

    warnings.append(f"column map: frequency=col{freq}, power=col{power}, time={_fmt(time)}")
    return ColumnAssignment(frequency_col=freq, power_col=power, time_col=time), warnings


def _fmt(idx: Optional[int]) -> str:
    return "none" if idx is None else f"col{idx}"
