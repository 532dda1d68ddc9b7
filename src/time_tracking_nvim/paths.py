"""Helpers for locating application directories."""

from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs


APP_NAME = "time-tracking-nvim"
APP_AUTHOR = "time-tracking-nvim"


def _dirs() -> PlatformDirs:
    return PlatformDirs(appname=APP_NAME, appauthor=APP_AUTHOR)


def get_config_path() -> Path:
    """Return the location of the optional TOML config file."""
    return Path(_dirs().user_config_path) / "config.toml"


def get_log_dir() -> Path:
    path = Path(_dirs().user_log_path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_log_path() -> Path:
    return get_log_dir() / "preview.log"
