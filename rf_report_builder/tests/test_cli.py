from __future__ import annotations

import json
from pathlib import Path

import pytest

from rf_report_builder.cli import EXIT_ERROR, EXIT_NEEDS_COLUMNS, EXIT_OK, main


def _write(tmp_path: Path, name: str, text: str) -> Path:
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return p


def test_cli_summary(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    p = _write(tmp_path, "scan.csv", "Frequency(MHz),Power(dBm)\n100,-70\n200,-65\n150,-90\n")
    rc = main([str(p), "--log-level", "ERROR"])
    out = capsys.readouterr().out
    assert rc == EXIT_OK
    assert "File: scan.csv" in out
    assert "avg=-75.00" in out
    assert "Peak power rows:" in out


def test_cli_json_is_stable(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    p = _write(tmp_path, "scan.csv", "Time,Frequency,Power\n1700000000,100,-70\n1700000010,200,-60\n")
    assert main([str(p), "--json", "--log-level", "ERROR"]) == EXIT_OK
    first = capsys.readouterr().out
    assert main([str(p), "--json", "--log-level", "ERROR"]) == EXIT_OK
    second = capsys.readouterr().out
    assert first == second
    d = json.loads(first)
    assert d["rowCount"] == 2
    assert d["timeStats"]["durationSeconds"] == 10.0


def test_cli_needs_columns_then_retry(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    p = _write(tmp_path, "odd.csv", "A,B,C\n1,2412,-40\n2,2437,-55\n")
    assert main([str(p), "--log-level", "ERROR"]) == EXIT_NEEDS_COLUMNS
    out = capsys.readouterr().out
    assert "[0] A" in out and "[2] C" in out
    assert "1 | 2412 | -40" in out

    assert main([str(p), "--freq-col", "1", "--power-col", "2", "--log-level", "ERROR"]) == EXIT_OK


def test_cli_fatal_error(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    p = _write(tmp_path, "empty.csv", "")
    assert main([str(p), "--log-level", "ERROR"]) == EXIT_ERROR
    assert "[error]" in capsys.readouterr().out


def test_cli_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    assert main([str(tmp_path / "missing.csv"), "--log-level", "ERROR"]) == EXIT_ERROR


def test_cli_large_file_needs_segment(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    lines = ["Frequency,Power"] + [f"{100 + i},{-80 + i % 10}" for i in range(200)]
    p = _write(tmp_path, "big.csv", "\n".join(lines) + "\n")
    assert main([str(p), "--max-bytes", "512", "--log-level", "ERROR"]) == EXIT_ERROR
    assert "choose a segment" in capsys.readouterr().out
    assert main([str(p), "--max-bytes", "512", "--segment", "start", "--log-level", "ERROR"]) == EXIT_OK
    assert "File: big.csv [start]" in capsys.readouterr().out


def test_cli_rejects_duplicate_columns(tmp_path: Path) -> None:
    p = _write(tmp_path, "scan.csv", "1,2\n")
    with pytest.raises(SystemExit):
        main([str(p), "--freq-col", "0", "--power-col", "0"])
