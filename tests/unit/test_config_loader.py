"""Tests for YAML config loading, discovery and saving."""

from __future__ import annotations

from pathlib import Path

import pytest

from guesstimate.adapters import config_loader
from guesstimate.adapters.config_loader import (
    CONFIG_FILENAME,
    find_config_file,
    load_config,
    load_default_config,
    resolve_config,
    save_config,
)

VALID_CONFIG = """\
taskCategories:
  backend:
    label: Backend
    costPerTimeUnit: 650
  frontend:
    label: Frontend
    costPerTimeUnit: 550.5
timeUnit:
  label: hour
  acronym: h
currency: USD
roundUpEstimations: false
autoEstimationMultiplier: 0.2
"""


def _write(tmp_path: Path, filename: str, content: str) -> Path:
    path = tmp_path / filename
    path.write_text(content, encoding="utf-8")
    return path


def test_load_config_valid_file_returns_config(tmp_path: Path) -> None:
    config_path = _write(tmp_path, "config.yml", VALID_CONFIG)

    config = load_config(config_path)

    assert list(config.task_categories) == ["backend", "frontend"]
    assert config.task_categories["frontend"].cost_per_time_unit == pytest.approx(550.5)
    assert config.task_categories["frontend"].id == "frontend"
    assert config.time_unit.acronym == "h"
    assert config.currency == "USD"
    assert config.round_up_estimations is False
    assert config.get_auto_estimation_multiplier() == pytest.approx(0.2)


def test_load_config_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Config file not found"):
        load_config(tmp_path / "absent.yml")


def test_load_config_malformed_yaml_has_parse_error(tmp_path: Path) -> None:
    malformed = """\
taskCategories:
  backend: {label: Backend, costPerTimeUnit: 650
"""
    config_path = _write(tmp_path, "malformed.yml", malformed)

    with pytest.raises(ValueError, match="Failed to parse YAML config"):
        load_config(config_path)


def test_load_config_non_mapping_root_is_rejected(tmp_path: Path) -> None:
    config_path = _write(tmp_path, "list.yml", "- one\n- two\n")

    with pytest.raises(ValueError, match="root must be a YAML mapping"):
        load_config(config_path)


def test_load_config_empty_file_gives_defaults(tmp_path: Path) -> None:
    config = load_config(_write(tmp_path, "empty.yml", ""))

    assert config.task_categories == {}
    assert config.time_unit.label == "man-day"


def test_load_config_unknown_key_is_rejected(tmp_path: Path) -> None:
    with_unknown_key = VALID_CONFIG + "hourlyRate: 12\n"
    config_path = _write(tmp_path, "unknown-key.yml", with_unknown_key)

    with pytest.raises(ValueError, match="- hourlyRate: Extra inputs are not permitted"):
        load_config(config_path)


def test_load_config_negative_cost_names_the_field(tmp_path: Path) -> None:
    negative = """\
taskCategories:
  backend:
    label: Backend
    costPerTimeUnit: -5
"""
    config_path = _write(tmp_path, "negative.yml", negative)

    with pytest.raises(ValueError, match=r"taskCategories\.backend\.costPerTimeUnit"):
        load_config(config_path)


def test_load_config_accepts_int_values_for_float_fields(tmp_path: Path) -> None:
    config = load_config(_write(tmp_path, "ints.yml", VALID_CONFIG))

    assert config.task_categories["backend"].cost_per_time_unit == pytest.approx(650.0)


def test_load_default_config_has_expected_values() -> None:
    config = load_default_config()

    assert list(config.task_categories) == ["development", "project-management", "testing"]
    assert all(
        category.cost_per_time_unit == pytest.approx(500)
        for category in config.task_categories.values()
    )
    assert config.time_unit.label == "man-day"
    assert config.time_unit.acronym == "md"
    assert config.currency == "€ H.T."
    assert config.round_up_estimations is True
    assert config.auto_estimation_multiplier == pytest.approx(0.33)


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def test_find_config_file_searches_parent_directories(tmp_path: Path) -> None:
    config_path = _write(tmp_path, CONFIG_FILENAME, VALID_CONFIG)
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert find_config_file(nested) == config_path.resolve()


def test_find_config_file_prefers_nearest(tmp_path: Path) -> None:
    _write(tmp_path, CONFIG_FILENAME, VALID_CONFIG)
    nested = tmp_path / "project"
    nested.mkdir()
    nearest = _write(nested, CONFIG_FILENAME, VALID_CONFIG)

    assert find_config_file(nested) == nearest.resolve()


def test_find_config_file_returns_none_when_absent(tmp_path: Path) -> None:
    assert find_config_file(tmp_path, filename="no-such-config.yml") is None


def test_resolve_config_explicit_path(tmp_path: Path) -> None:
    config = resolve_config(_write(tmp_path, "custom.yml", VALID_CONFIG))

    assert config.currency == "USD"


def test_resolve_config_explicit_missing_path_gives_defaults(tmp_path: Path) -> None:
    _write(tmp_path, CONFIG_FILENAME, VALID_CONFIG)

    config = resolve_config(tmp_path / "missing.yml")

    assert config == load_default_config()
    assert not (tmp_path / "missing.yml").exists()


def test_resolve_config_uses_discovered_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    _write(tmp_path, CONFIG_FILENAME, VALID_CONFIG)
    monkeypatch.chdir(tmp_path)

    assert resolve_config().currency == "USD"


def test_resolve_config_falls_back_to_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config_loader, "find_config_file", lambda: None)

    assert resolve_config().currency == "€ H.T."


# ---------------------------------------------------------------------------
# Saving
# ---------------------------------------------------------------------------


def test_save_config_round_trips(tmp_path: Path) -> None:
    original = load_config(_write(tmp_path, "in.yml", VALID_CONFIG))

    saved = save_config(original, tmp_path / "out.yml")

    assert load_config(saved) == original


def test_save_config_writes_camel_case_keys(tmp_path: Path) -> None:
    saved = save_config(load_default_config(), tmp_path / CONFIG_FILENAME)
    text = saved.read_text(encoding="utf-8")

    assert "taskCategories:" in text
    assert "costPerTimeUnit: 500" in text
    assert "roundUpEstimations: true" in text
    assert "€ H.T." in text
    assert "id:" not in text
