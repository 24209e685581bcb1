from __future__ import annotations

import dataclasses

from rf_report_builder.ingest.config import DEFAULT_CONFIG
from rf_report_builder.ingest.delimiter import WHITESPACE, detect_delimiter, split_row


def test_split_row_trims_cells() -> None:
    assert split_row(" 100 , -70 ", ",") == ["100", "-70"]
    assert split_row("a;;b", ";") == ["a", "", "b"]


def test_split_row_whitespace_runs() -> None:
    assert split_row("  1575.42 \t  -75  ", WHITESPACE) == ["1575.42", "-75"]


def test_detect_comma() -> None:
    lines = ["Frequency(MHz),Power(dBm)", "100,-70", "200,-65", "150,-90"]
    d, w = detect_delimiter(lines)
    assert d == ","
    assert any("selected delimiter: comma" in s for s in w)


def test_detect_semicolon_and_tab() -> None:
    assert detect_delimiter(["f;p", "1;2", "3;4"])[0] == ";"
    assert detect_delimiter(["f\tp\tt", "1\t2\t3", "4\t5\t6"])[0] == "\t"


def test_whitespace_fallback_when_no_delimiter_splits() -> None:
    d, w = detect_delimiter(["1575.42 -75", "2412 -40"])
    assert d == WHITESPACE
    assert any("whitespace" in s for s in w)


def test_ragged_counts_rejected() -> None:
    lines = ["a,b", "1,2,3", "4,5", "6,7,8,9"]
    assert detect_delimiter(lines)[0] == WHITESPACE


def test_candidate_needs_half_of_lines() -> None:
    lines = ["1,2", "3 4", "5 6", "7 8"]
    assert detect_delimiter(lines)[0] == WHITESPACE


def test_tie_prefers_earlier_candidate() -> None:
    # comma and semicolon both split every line into two fields
    assert detect_delimiter(["1,2;3", "4,5;6"])[0] == ","


def test_tie_prefers_candidate_splitting_more_lines() -> None:
    # thousands separators split the data lines on comma, but not the header
    lines = ["Freq;Level", "1,575;-75", "2,412;-40"]
    assert detect_delimiter(lines)[0] == ";"


def test_only_leading_sample_is_examined() -> None:
    cfg = dataclasses.replace(DEFAULT_CONFIG, delimiter_sample_lines=3)
    lines = ["1;2", "3;4", "5;6"] + ["a;b;c;d;e", "x"] * 20
    assert detect_delimiter(lines, config=cfg)[0] == ";"
    assert detect_delimiter(lines)[0] == WHITESPACE


def test_empty_input_falls_back() -> None:
    assert detect_delimiter([])[0] == WHITESPACE
