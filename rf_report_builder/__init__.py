"""RF Report Builder -- schema-free ingestion of tabular RF spectrum measurements.

Takes the text of an arbitrary delimited file (comma, semicolon, tab or
whitespace separated, with or without a header) and reduces it to a bounded
statistical digest: frequency / power ranges, mean power, first / last /
peak-power samples and, when a timestamp column exists, the time span.

Key principles:
- No schema required: delimiter, header and column roles are inferred
- Ambiguity is an answer, not a crash: the caller gets the headers and sample
  rows back and re-runs with explicit column indices
- Deterministic: the same text and options always give the same report

Main subpackages:
- ingest: delimiter / header / column detection, cell cleaning, input segments
- analysis: stats and sampling over retained records
- models: DataRecord, AnalysisReport, ParseOptions, IngestResult
- util: logging setup
"""

from rf_report_builder.builder import ReportBuilder, build_report
from rf_report_builder.ingest.config import DEFAULT_CONFIG, IngestConfig
from rf_report_builder.models import (
    AnalysisReport,
    ColumnDetectionFailure,
    ColumnSelectionRequired,
    DataRecord,
    IngestError,
    IngestResult,
    ParseOptions,
)

__all__ = [
    "AnalysisReport",
    "ColumnDetectionFailure",
    "ColumnSelectionRequired",
    "DataRecord",
    "DEFAULT_CONFIG",
    "IngestConfig",
    "IngestError",
    "IngestResult",
    "ParseOptions",
    "ReportBuilder",
    "build_report",
]
