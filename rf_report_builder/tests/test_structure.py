from __future__ import annotations

from rf_report_builder.ingest.delimiter import WHITESPACE
from rf_report_builder.ingest.structure import detect_structure, find_data_start, synthesize_headers


def test_header_then_data() -> None:
    lines = ["Frequency(MHz),Power(dBm)", "100,-70", "200,-65"]
    s, w = detect_structure(lines, ",")
    assert s.has_header
    assert s.start_line == 0
    assert s.headers == ("Frequency(MHz)", "Power(dBm)")
    assert s.data_lines == ("100,-70", "200,-65")
    assert s.column_count == 2
    assert any("header detected" in m for m in w)


def test_headerless_synthesizes_names() -> None:
    lines = ["1575.42 -75", "2412 -40"]
    s, w = detect_structure(lines, WHITESPACE)
    assert not s.has_header
    assert s.headers == ("Column 1", "Column 2")
    assert s.data_lines == tuple(lines)


def test_preamble_lines_are_skipped() -> None:
    lines = ["RF Export v2", "Frequency,Power", "100,-70", "200,-60"]
    assert find_data_start(lines, ",") == 1
    s, w = detect_structure(lines, ",")
    assert s.headers == ("Frequency", "Power")
    assert s.data_lines == ("100,-70", "200,-60")
    assert any("preamble" in m for m in w)


def test_preceding_line_with_other_field_count_is_not_header() -> None:
    lines = ["Scan,of,the,day", "100,-70", "200,-60"]
    s, _ = detect_structure(lines, ",")
    assert s.start_line == 1
    assert not s.has_header
    assert s.data_lines == ("100,-70", "200,-60")


def test_timestamp_first_cell_counts_as_data() -> None:
    lines = ["Time,Freq,Power", "2024-01-01T00:00:00Z,100,-70"]
    assert find_data_start(lines, ",") == 0
    s, _ = detect_structure(lines, ",")
    assert s.has_header
    assert s.headers == ("Time", "Freq", "Power")
    assert len(s.data_lines) == 1


def test_no_numeric_line_defaults_to_first_line() -> None:
    lines = ["a,b", "c,d"]
    assert find_data_start(lines, ",") == 0
    s, _ = detect_structure(lines, ",")
    assert s.has_header
    assert s.data_lines == ("c,d",)


def test_scan_window_is_bounded() -> None:
    lines = [f"note {i}" for i in range(12)] + ["100,-70"]
    assert find_data_start(lines, ",") == 0


def test_header_only_file_has_no_data_lines() -> None:
    s, _ = detect_structure(["Frequency,Power"], ",")
    assert s.has_header
    assert s.data_lines == ()


def test_synthesize_headers() -> None:
    assert synthesize_headers(3) == ("Column 1", "Column 2", "Column 3")
