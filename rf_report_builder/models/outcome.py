"""Ingestion outcomes.

A call to the report builder ends in exactly one of three ways:

- ``ok``: an :class:`~rf_report_builder.models.records.AnalysisReport`
- ``ambiguous``: a :class:`ColumnDetectionFailure` -- the headers could not be
  mapped to frequency/power; the caller should ask for explicit column indices
  and re-run the whole pipeline with :class:`ParseOptions`
- ``error``: an :class:`IngestError` -- the input itself is unusable

The ambiguous branch is an expected outcome, so it is returned as a value
rather than raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Tuple, cast

from rf_report_builder.models.records import AnalysisReport


ErrorKind = Literal["empty", "no_data_rows", "no_valid_records", "too_large"]
Status = Literal["ok", "ambiguous", "error"]


class IngestError(ValueError):
    """Fatal ingestion failure. Retrying only makes sense with different input."""

    def __init__(self, message: str, *, kind: ErrorKind) -> None:
        super().__init__(message)
        self.kind = kind


@dataclass(frozen=True)
class ColumnDetectionFailure:
    """
    Automatic column-role inference could not place frequency and power.

    headers: inferred (or synthesized) header names, in column order
    sample_rows: up to a few raw data rows, already split into cells
    """
    message: str
    headers: Tuple[str, ...]
    sample_rows: Tuple[Tuple[str, ...], ...]


class ColumnSelectionRequired(Exception):
    """Raised by :meth:`IngestResult.unwrap` for an ambiguous result."""

    def __init__(self, failure: ColumnDetectionFailure) -> None:
        super().__init__(failure.message)
        self.failure = failure


@dataclass(frozen=True)
class IngestResult:
    """Tagged result of one ingestion call. Exactly one payload field is set."""

    status: Status
    report: Optional[AnalysisReport] = None
    failure: Optional[ColumnDetectionFailure] = None
    error: Optional[IngestError] = None

    def __post_init__(self) -> None:
        payload = {"ok": self.report, "ambiguous": self.failure, "error": self.error}
        if self.status not in payload:
            raise ValueError(f"unknown status {self.status!r}")
        n_set = sum(v is not None for v in payload.values())
        if payload[self.status] is None or n_set != 1:
            raise ValueError(f"IngestResult(status={self.status!r}) must carry exactly its own payload")

    @classmethod
    def success(cls, report: AnalysisReport) -> IngestResult:
        return cls(status="ok", report=report)

    @classmethod
    def ambiguous(cls, failure: ColumnDetectionFailure) -> IngestResult:
        return cls(status="ambiguous", failure=failure)

    @classmethod
    def fatal(cls, error: IngestError) -> IngestResult:
        return cls(status="error", error=error)

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def needs_columns(self) -> bool:
        return self.status == "ambiguous"

    def unwrap(self) -> AnalysisReport:
        """Return the report, or raise the stored error / :class:`ColumnSelectionRequired`."""
        if self.report is not None:
            return self.report
        if self.failure is not None:
            raise ColumnSelectionRequired(self.failure)
        raise cast(IngestError, self.error)
