from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from rf_report_builder.util.logging import (
    ConsoleFormatter,
    JSONFormatter,
    configure_logging,
    get_logger,
)


@pytest.fixture(autouse=True)
def _restore_package_logger():
    root = logging.getLogger("rf_report_builder")
    saved = (root.level, root.propagate, root.handlers[:])
    yield
    for h in root.handlers[:]:
        root.removeHandler(h)
        if h not in saved[2]:
            h.close()
    root.setLevel(saved[0])
    root.propagate = saved[1]
    for h in saved[2]:
        root.addHandler(h)


def _record(msg: str = "built %s", **extra) -> logging.LogRecord:
    rec = logging.LogRecord("rf_report_builder.builder", logging.INFO, __file__, 1, msg, ("scan.csv",), None)
    for k, v in extra.items():
        setattr(rec, k, v)
    return rec


def test_get_logger_namespacing() -> None:
    assert get_logger("rf_report_builder.builder").name == "rf_report_builder.builder"
    assert get_logger("tools.batch").name == "rf_report_builder.tools.batch"
    assert get_logger("__main__").name == "rf_report_builder.main"


def test_configure_logging_level_and_handlers(tmp_path: Path) -> None:
    log_path = tmp_path / "ingest.log"
    logger = configure_logging(level="debug", json_file=str(log_path), use_color=False)
    assert logger.level == logging.DEBUG
    assert not logger.propagate
    kinds = sorted(type(h).__name__ for h in logger.handlers)
    assert kinds == ["FileHandler", "StreamHandler"]

    # a second call replaces rather than stacks handlers
    logger = configure_logging(level="ERROR", use_color=False)
    assert logger.level == logging.ERROR
    assert len(logger.handlers) == 1


def test_level_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("RF_REPORT_DEBUG", raising=False)
    monkeypatch.setenv("RF_REPORT_LOG_LEVEL", "INFO")
    assert configure_logging(use_color=False).level == logging.INFO

    monkeypatch.setenv("RF_REPORT_DEBUG", "1")
    assert configure_logging(use_color=False).level == logging.DEBUG

    monkeypatch.delenv("RF_REPORT_DEBUG")
    monkeypatch.delenv("RF_REPORT_LOG_LEVEL")
    assert configure_logging(use_color=False).level == logging.WARNING


def test_json_formatter_fields() -> None:
    out = json.loads(JSONFormatter().format(_record(status="ok", record_count=12, unrelated="x")))
    assert out["level"] == "INFO"
    assert out["logger"] == "rf_report_builder.builder"
    assert out["message"] == "built scan.csv"
    assert out["status"] == "ok"
    assert out["record_count"] == 12
    assert "unrelated" not in out
    assert out["ts"].endswith("Z")


def test_console_formatter_strips_package_prefix() -> None:
    line = ConsoleFormatter(use_color=False).format(_record())
    assert "[builder] built scan.csv" in line
    assert "INFO" in line


def test_json_file_receives_builder_logs(tmp_path: Path) -> None:
    from rf_report_builder import build_report

    log_path = tmp_path / "ingest.log"
    configure_logging(level="INFO", json_file=str(log_path), use_color=False)
    build_report("Frequency,Power\n100,-70\n", file_name="scan.csv")
    build_report("", file_name="empty.csv")
    for h in logging.getLogger("rf_report_builder").handlers:
        h.flush()

    entries = [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines()]
    by_status = {e.get("status"): e for e in entries}
    assert by_status["ok"]["file_name"] == "scan.csv"
    assert by_status["ok"]["record_count"] == 1
    assert by_status["error"]["error_kind"] == "empty"
