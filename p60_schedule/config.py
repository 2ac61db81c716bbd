"""Scheduling configuration for p60-schedule.

The application keeps its settings in ``config.json``; this module reads the
``scheduling`` block. Each key is validated on its own and replaced by its
default when missing or of the wrong type, so a half-broken file still yields
a usable schedule.
"""

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from p60_schedule.paths import get_config_path

logger = logging.getLogger(__name__)

_KEYS = {
    "enabled": "enabled",
    "cron": "cron",
    "run_on_startup_if_missed": "runOnStartupIfMissed",
    "startup_delay_minutes": "startupDelayMinutes",
}


@dataclass(frozen=True)
class ScheduleConfig:
    enabled: bool = False
    cron: str = "0 8 * * 6"
    run_on_startup_if_missed: bool = True
    startup_delay_minutes: float = 10

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "ScheduleConfig":
        defaults = cls()

        enabled = raw.get("enabled")
        if not isinstance(enabled, bool):
            enabled = defaults.enabled

        cron = raw.get("cron")
        if isinstance(cron, str) and cron.strip():
            cron = cron.strip()
        else:
            cron = defaults.cron

        run_on_startup = raw.get("runOnStartupIfMissed")
        if not isinstance(run_on_startup, bool):
            run_on_startup = defaults.run_on_startup_if_missed

        delay = raw.get("startupDelayMinutes")
        # bool is an int subclass; NaN fails the comparison
        if isinstance(delay, bool) or not isinstance(delay, (int, float)) or not delay >= 0:
            delay = defaults.startup_delay_minutes

        return cls(
            enabled=enabled,
            cron=cron,
            run_on_startup_if_missed=run_on_startup,
            startup_delay_minutes=delay,
        )

    def to_dict(self) -> dict[str, Any]:
        return {_KEYS[k]: v for k, v in asdict(self).items()}


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Read the application config, or {} if it cannot be used."""
    path = path or get_config_path()
    try:
        with open(path, "r", encoding="utf-8") as f:
            cfg = json.load(f)
    except FileNotFoundError:
        logger.warning("Config file not found, using defaults: %s", path)
        return {}
    except (OSError, ValueError) as e:
        logger.warning("Failed to load %s, using defaults: %s", path, e)
        return {}

    if not isinstance(cfg, dict):
        logger.warning("Config in %s is not an object, using defaults", path)
        return {}
    return cfg


def get_scheduling_config(path: Path | None = None) -> ScheduleConfig:
    raw = load_config(path).get("scheduling")
    if not isinstance(raw, dict):
        raw = {}
    return ScheduleConfig.from_dict(raw)
