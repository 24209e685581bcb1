from __future__ import annotations

import dataclasses
import json

import pytest

from rf_report_builder.ingest.config import DEFAULT_CONFIG, IngestConfig
from rf_report_builder.models.records import ParseOptions


def test_defaults() -> None:
    cfg = IngestConfig()
    assert cfg == DEFAULT_CONFIG
    assert cfg.delimiters == (",", ";", "\t")
    assert cfg.exact_match_bonus == 10
    assert cfg.sample_size == 10
    assert cfg.epoch_ms_threshold == 1e12
    assert "rssi" in cfg.power_keywords
    assert "freq" in cfg.frequency_keywords


def test_frozen() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_CONFIG.sample_size = 5  # type: ignore[misc]


def test_dict_survives_json() -> None:
    cfg = dataclasses.replace(DEFAULT_CONFIG, sample_size=3, power_keywords=("lvl",))
    d = json.loads(json.dumps(cfg.to_dict()))
    assert d["power_keywords"] == ["lvl"]
    assert IngestConfig.from_dict(d) == cfg


def test_from_dict_ignores_unknown_keys() -> None:
    cfg = IngestConfig.from_dict({"sample_size": 4, "added_later": True})
    assert cfg.sample_size == 4


@pytest.mark.parametrize(
    "kwargs",
    [
        {"sample_size": 0},
        {"delimiter_sample_lines": 0},
        {"header_scan_lines": -1},
        {"delimiters": ()},
    ],
)
def test_invalid_config(kwargs) -> None:
    with pytest.raises(ValueError):
        IngestConfig(**kwargs)


def test_parse_options_validation() -> None:
    assert not ParseOptions().is_explicit
    assert ParseOptions(frequency_col=2, power_col=0).is_explicit
    with pytest.raises(ValueError):
        ParseOptions(frequency_col=-1, power_col=0)
    with pytest.raises(ValueError):
        ParseOptions(frequency_col=1, power_col=2, time_col=1)
