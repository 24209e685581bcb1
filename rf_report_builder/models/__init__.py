from .outcome import ColumnDetectionFailure, ColumnSelectionRequired, IngestError, IngestResult
from .records import (
    AnalysisReport,
    DataRecord,
    FrequencyStats,
    ParseOptions,
    PowerStats,
    ReportSamples,
    ReportStats,
    TimeStats,
)

__all__ = [
    "AnalysisReport",
    "ColumnDetectionFailure",
    "ColumnSelectionRequired",
    "DataRecord",
    "FrequencyStats",
    "IngestError",
    "IngestResult",
    "ParseOptions",
    "PowerStats",
    "ReportSamples",
    "ReportStats",
    "TimeStats",
]
