"""Tests for scheduling configuration loading."""

import json
import logging

import pytest

from p60_schedule import paths
from p60_schedule.config import ScheduleConfig, get_scheduling_config, load_config


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_defaults():
    cfg = ScheduleConfig()
    assert cfg.enabled is False
    assert cfg.cron == "0 8 * * 6"
    assert cfg.run_on_startup_if_missed is True
    assert cfg.startup_delay_minutes == 10


def test_from_dict_valid_values():
    cfg = ScheduleConfig.from_dict(
        {"enabled": True, "cron": "  30 7 * * 1  ", "runOnStartupIfMissed": False, "startupDelayMinutes": 2.5}
    )
    assert cfg == ScheduleConfig(enabled=True, cron="30 7 * * 1", run_on_startup_if_missed=False, startup_delay_minutes=2.5)


@pytest.mark.parametrize(
    "raw",
    [
        {"enabled": "yes", "cron": 5, "runOnStartupIfMissed": 1, "startupDelayMinutes": -1},
        {"enabled": None, "cron": "   ", "runOnStartupIfMissed": "true", "startupDelayMinutes": True},
        {"startupDelayMinutes": "10"},
        {},
    ],
)
def test_from_dict_invalid_values_use_defaults(raw):
    assert ScheduleConfig.from_dict(raw) == ScheduleConfig()


def test_from_dict_zero_delay_is_allowed():
    assert ScheduleConfig.from_dict({"startupDelayMinutes": 0}).startup_delay_minutes == 0


def test_to_dict_uses_config_file_keys():
    assert ScheduleConfig(enabled=True).to_dict() == {
        "enabled": True,
        "cron": "0 8 * * 6",
        "runOnStartupIfMissed": True,
        "startupDelayMinutes": 10,
    }


def test_get_scheduling_config_reads_file(tmp_path):
    path = _write(tmp_path / "config.json", {"scheduling": {"enabled": True, "cron": "0 9 * * 1,3,5"}, "retry": {}})
    cfg = get_scheduling_config(path)
    assert cfg.enabled is True
    assert cfg.cron == "0 9 * * 1,3,5"
    assert cfg.run_on_startup_if_missed is True


def test_get_scheduling_config_without_block(tmp_path):
    path = _write(tmp_path / "config.json", {"scheduling": ["not", "an", "object"]})
    assert get_scheduling_config(path) == ScheduleConfig()


def test_load_config_missing_file(tmp_path, caplog):
    with caplog.at_level(logging.WARNING):
        assert load_config(tmp_path / "nope.json") == {}
    assert "not found" in caplog.text


def test_load_config_invalid_json(tmp_path, caplog):
    path = tmp_path / "config.json"
    path.write_text("{ not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        assert load_config(path) == {}
    assert "Failed to load" in caplog.text


def test_load_config_non_object(tmp_path):
    path = _write(tmp_path / "config.json", [1, 2, 3])
    assert load_config(path) == {}


def test_default_path_follows_home_env(tmp_path, monkeypatch):
    monkeypatch.setenv(paths.HOME_ENV, str(tmp_path))
    _write(tmp_path / "config.json", {"scheduling": {"enabled": True}})

    assert paths.get_config_path() == tmp_path / "config.json"
    assert get_scheduling_config().enabled is True


def test_default_path_without_env(monkeypatch):
    monkeypatch.delenv(paths.HOME_ENV, raising=False)
    assert paths.get_config_path().parts[-2:] == (".portfolio60", "config.json")


def test_from_dict_nan_delay_uses_default():
    assert ScheduleConfig.from_dict({"startupDelayMinutes": float("nan")}).startup_delay_minutes == 10


def test_nan_delay_in_config_file_uses_default(tmp_path):
    path = tmp_path / "config.json"
    path.write_text('{"scheduling": {"enabled": true, "startupDelayMinutes": NaN}}', encoding="utf-8")
    cfg = get_scheduling_config(path)
    assert cfg.enabled is True
    assert cfg.startup_delay_minutes == 10
