"""
Settings loader — reads settings.yml into a validated model.

The settings file is optional. It supplies defaults for the global CLI
flags so a user can, for example, always run with ``output: plain``.
Flags given on the command line win over the file.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from karei.core.config.paths import settings_path
from karei.core.errors import ConfigError
from karei.ui.cli.output import OutputMode

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """User defaults for every invocation."""

    model_config = ConfigDict(extra="forbid")

    verbose: bool = False
    dry_run: bool = False
    output: OutputMode = "human"
    timeout: float | None = Field(default=None, gt=0)  # seconds per external command


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from YAML.

    Args:
        path: Explicit settings file. If None, the default location is
            used and a missing file yields default settings.

    Raises:
        ConfigError: If an explicit file is missing, or any file is
            unreadable or invalid.
    """
    explicit = path is not None
    if path is None:
        path = settings_path()

    if not path.is_file():
        if explicit:
            raise ConfigError(f"Settings file not found: {path}")
        logger.debug("No settings file at %s, using defaults", path)
        return Settings()

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}", cause=e) from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}", cause=e) from e

    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}", cause=e) from e

    logger.debug("Loaded settings from %s", path)
    return settings
