"""Tabular RF report builder -- the complete ingestion pipeline.

One call takes the text of a delimited file and returns an
:class:`~rf_report_builder.models.outcome.IngestResult`:

1) split into non-blank lines
2) detect the delimiter (comma / semicolon / tab, else whitespace)
3) find the header and the first data row (synthesize headers if absent)
4) assign frequency / power / timestamp columns (or take them from ParseOptions)
5) parse and clean every data row, dropping rows without finite frequency and power
6) aggregate stats and bounded samples over the retained records

Nothing is kept between calls. After an ``ambiguous`` result the caller re-runs
the whole pipeline with explicit :class:`ParseOptions`; detection is deterministic,
so steps 1-3 give the same answer the second time.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional

from rf_report_builder.analysis.aggregate import aggregate
from rf_report_builder.ingest.column_detect import assign_columns
from rf_report_builder.ingest.config import DEFAULT_CONFIG, IngestConfig
from rf_report_builder.ingest.delimiter import delimiter_name, detect_delimiter, split_row
from rf_report_builder.ingest.rows import parse_records
from rf_report_builder.ingest.source import Segment, SourceConfig, read_source
from rf_report_builder.ingest.structure import detect_structure
from rf_report_builder.models.outcome import ColumnDetectionFailure, IngestError, IngestResult
from rf_report_builder.models.records import AnalysisReport, ParseOptions
from rf_report_builder.util.logging import get_logger


logger = get_logger(__name__)

_RE_NEWLINE = re.compile(r"\r\n?|\n")

DEFAULT_FILE_NAME = "File Segment"


def split_lines(text: str) -> List[str]:
    """Non-blank lines of *text* (CRLF, CR and LF all end a line)."""
    return [line for line in _RE_NEWLINE.split(text.strip()) if line.strip()]


class ReportBuilder:
    """Builds one :class:`AnalysisReport` per call from raw delimited text.

    Parameters
    ----------
    config : IngestConfig, optional
        Keyword tables, unit suffixes and thresholds. Defaults to :data:`DEFAULT_CONFIG`.
    """

    def __init__(self, config: Optional[IngestConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def build(
        self,
        text: Optional[str],
        *,
        file_name: str = DEFAULT_FILE_NAME,
        options: Optional[ParseOptions] = None,
    ) -> IngestResult:
        """Run the full pipeline. Never raises for bad input; see :class:`IngestResult`."""
        try:
            result = self._build(text, file_name=file_name, options=options)
        except IngestError as exc:
            logger.warning("%s: %s", file_name, exc, extra={"file_name": file_name, "status": "error", "error_kind": exc.kind})
            return IngestResult.fatal(exc)

        if result.needs_columns:
            logger.info(
                "%s: frequency/power columns not detected; manual selection needed",
                file_name,
                extra={"file_name": file_name, "status": "ambiguous"},
            )
        elif result.report is not None:
            logger.info(
                "%s: %d of %d rows retained",
                file_name,
                result.report.record_count,
                result.report.row_count,
                extra={
                    "file_name": file_name,
                    "status": "ok",
                    "row_count": result.report.row_count,
                    "record_count": result.report.record_count,
                    "delimiter": delimiter_name(result.report.delimiter),
                },
            )
        return result

    def build_file(
        self,
        path: str | Path,
        *,
        options: Optional[ParseOptions] = None,
        segment: Optional[Segment] = None,
        source_config: Optional[SourceConfig] = None,
    ) -> IngestResult:
        """Read *path* (or one segment of it) and run :meth:`build` on its text."""
        try:
            src = read_source(path, segment=segment, config=source_config)
        except IngestError as exc:
            logger.warning("%s: %s", path, exc, extra={"status": "error", "error_kind": exc.kind})
            return IngestResult.fatal(exc)
        return self.build(src.text, file_name=src.name, options=options)

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _build(self, text: Optional[str], *, file_name: str, options: Optional[ParseOptions]) -> IngestResult:
        cfg = self.config
        if not text:
            raise IngestError("File is empty or could not be read.", kind="empty")
        lines = split_lines(text)
        if not lines:
            raise IngestError("File contains no non-blank lines.", kind="empty")

        warnings: List[str] = []

        delimiter, w = detect_delimiter(lines, config=cfg)
        warnings.extend(w)

        structure, w = detect_structure(lines, delimiter, config=cfg)
        warnings.extend(w)
        if not structure.data_lines:
            raise IngestError("File contains a header but no data rows.", kind="no_data_rows")

        columns, w = assign_columns(structure.headers, options=options, has_header=structure.has_header, config=cfg)
        warnings.extend(w)
        if columns is None:
            sample = tuple(
                tuple(split_row(line, delimiter)) for line in structure.data_lines[: cfg.failure_sample_rows]
            )
            return IngestResult.ambiguous(
                ColumnDetectionFailure(
                    message="Could not automatically detect Frequency and Power columns.",
                    headers=structure.headers,
                    sample_rows=sample,
                )
            )

        records, w = parse_records(structure.data_lines, delimiter, columns, config=cfg)
        warnings.extend(w)
        if not records:
            raise IngestError(
                f"No valid numerical data found in {len(structure.data_lines)} data row(s). "
                "Check that the frequency and power columns hold numbers and that the file "
                "is delimited by commas, semicolons, tabs or whitespace.",
                kind="no_valid_records",
            )
        logger.debug("%s: %s", file_name, "; ".join(warnings))

        stats, samples, time_stats = aggregate(records, sample_size=cfg.sample_size)

        report = AnalysisReport(
            file_name=file_name,
            row_count=len(structure.data_lines),
            column_count=structure.column_count,
            headers=structure.headers,
            stats=stats,
            samples=samples,
            record_count=len(records),
            frequency_col=columns.frequency_col,
            power_col=columns.power_col,
            time_col=columns.time_col,
            delimiter=delimiter,
            has_header=structure.has_header,
            time_stats=time_stats,
            warnings=tuple(warnings),
        )
        return IngestResult.success(report)


def build_report(
    text: Optional[str],
    *,
    file_name: str = DEFAULT_FILE_NAME,
    options: Optional[ParseOptions] = None,
    config: Optional[IngestConfig] = None,
) -> IngestResult:
    """Convenience wrapper: ``ReportBuilder(config).build(text, ...)``."""
    return ReportBuilder(config).build(text, file_name=file_name, options=options)
