"""
Filesystem locations — XDG base dirs and the karei tree.

Every path is resolved from the environment at call time so tests can
point the whole tool at a temporary directory with ``monkeypatch.setenv``.
"""

from __future__ import annotations

import os
from pathlib import Path

APP_DIR = "karei"
SETTINGS_FILE = "settings.yml"


def _env_or_home(var: str, *fallback: str) -> Path:
    value = os.environ.get(var, "")
    if value:
        return Path(value)
    return Path.home().joinpath(*fallback)


def karei_path() -> Path:
    """Installation directory holding bundled themes and configs."""
    return _env_or_home("KAREI_PATH", ".local", "share", APP_DIR)


def xdg_config_home() -> Path:
    return _env_or_home("XDG_CONFIG_HOME", ".config")


def xdg_data_home() -> Path:
    return _env_or_home("XDG_DATA_HOME", ".local", "share")


def user_bin_dir() -> Path:
    return Path.home() / ".local" / "bin"


def config_path(domain: str) -> Path:
    """Per-domain selection file: ``$XDG_CONFIG_HOME/karei/<domain>``.

    Each domain owns its file exclusively; writes overwrite it whole.
    """
    return xdg_config_home() / APP_DIR / domain


def settings_path() -> Path:
    """Default location of the optional settings.yml."""
    return xdg_config_home() / APP_DIR / SETTINGS_FILE


def log_dir() -> Path:
    """Where install/progress/precheck/error logs are written."""
    return xdg_data_home() / APP_DIR
