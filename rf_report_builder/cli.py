"""Command-line host for the report builder.

Exit codes: 0 report built, 1 fatal ingestion error, 2 column selection needed.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Optional, Sequence

from rf_report_builder.builder import ReportBuilder
from rf_report_builder.ingest.delimiter import delimiter_name
from rf_report_builder.ingest.source import MAX_INPUT_BYTES, SEGMENTS, SourceConfig
from rf_report_builder.models.outcome import ColumnDetectionFailure
from rf_report_builder.models.records import AnalysisReport, DataRecord, ParseOptions
from rf_report_builder.util.logging import configure_logging


EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NEEDS_COLUMNS = 2


def _fmt_ts(ms: int) -> str:
    return datetime.fromtimestamp(ms / 1000.0, tz=timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _fmt_record(r: DataRecord) -> str:
    s = f"{r.frequency:>12.6g} MHz  {r.power:>8.2f} dBm"
    if r.timestamp is not None:
        s += f"  {_fmt_ts(r.timestamp)}"
    return s


def format_report(report: AnalysisReport) -> str:
    """Compact human-readable summary of a report."""
    st = report.stats
    out = [
        f"File: {report.file_name}",
        f"Rows: {report.row_count} ({report.record_count} valid), columns: {report.column_count}, "
        f"delimiter: {delimiter_name(report.delimiter)}",
        f"Headers: {', '.join(f'[{i}] {h}' for i, h in enumerate(report.headers))}",
        f"Frequency: min={st.frequency.min:.6g} max={st.frequency.max:.6g} MHz",
        f"Power: min={st.power.min:.2f} max={st.power.max:.2f} avg={st.power.avg:.2f} dBm",
    ]
    if report.time_stats is not None:
        ts = report.time_stats
        out.append(f"Time: {_fmt_ts(ts.start)} .. {_fmt_ts(ts.end)} ({ts.duration_seconds:.3f} s)")
    for title, rows in (
        ("Peak power rows", report.samples.peak_power_rows),
        ("First rows", report.samples.first_rows),
        ("Last rows", report.samples.last_rows),
    ):
        out.append(f"{title}:")
        out.extend(f"  {_fmt_record(r)}" for r in rows)
    return "\n".join(out)


def format_failure(failure: ColumnDetectionFailure) -> str:
    out = [failure.message, "Columns:"]
    out.extend(f"  [{i}] {h}" for i, h in enumerate(failure.headers))
    if failure.sample_rows:
        out.append("Sample rows:")
        out.extend("  " + " | ".join(row) for row in failure.sample_rows)
    out.append("Re-run with --freq-col N --power-col N [--time-col N].")
    return "\n".join(out)


def main(argv: Optional[Sequence[str]] = None) -> int:
    import argparse
    import textwrap

    p = argparse.ArgumentParser(
        prog="python -m rf_report_builder.cli",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=textwrap.dedent(
            """\
            Build a statistical summary of a delimited RF measurement file.

            Delimiter, header row and the frequency / power / timestamp columns are
            detected automatically. If the columns cannot be detected, the headers and
            a few sample rows are printed; re-run with explicit column indices.
            """
        ),
    )
    p.add_argument("file", help="Delimited text file (comma, semicolon, tab or whitespace separated)")
    p.add_argument("--freq-col", type=int, default=None, help="Zero-based frequency column index")
    p.add_argument("--power-col", type=int, default=None, help="Zero-based power column index")
    p.add_argument("--time-col", type=int, default=None, help="Zero-based timestamp column index")
    p.add_argument("--segment", choices=SEGMENTS, default=None, help="Analyze only this part of a large file")
    p.add_argument("--max-bytes", type=int, default=MAX_INPUT_BYTES, help="Size ceiling / segment size in bytes")
    p.add_argument("--json", action="store_true", help="Print the report as JSON")
    p.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    p.add_argument("--log-json", default=None, help="Append JSON-lines logs to this file")

    ns = p.parse_args(list(argv) if argv is not None else None)

    configure_logging(level=ns.log_level, json_file=ns.log_json)

    try:
        options = ParseOptions(frequency_col=ns.freq_col, power_col=ns.power_col, time_col=ns.time_col)
        source_config = SourceConfig(max_bytes=ns.max_bytes)
    except ValueError as exc:
        p.error(str(exc))

    try:
        result = ReportBuilder().build_file(ns.file, options=options, segment=ns.segment, source_config=source_config)
    except FileNotFoundError as exc:
        print(f"[error] file not found: {exc}")
        return EXIT_ERROR

    if result.failure is not None:
        print(format_failure(result.failure))
        return EXIT_NEEDS_COLUMNS
    if result.error is not None:
        print(f"[error] {result.error}")
        return EXIT_ERROR

    report = result.unwrap()
    if ns.json:
        print(json.dumps(report.to_dict(), sort_keys=True, indent=2))
    else:
        print(format_report(report))
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
