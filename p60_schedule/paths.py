"""Path configuration for p60-schedule."""

import os
from pathlib import Path

HOME_ENV = "P60_HOME"


def get_base_dir() -> Path:
    override = os.environ.get(HOME_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".portfolio60"


def get_config_path() -> Path:
    return get_base_dir() / "config.json"
