"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from karei.core.context import RunContext
from karei.ui.cli.output import Output


@pytest.fixture
def karei_env(tmp_path: Path, monkeypatch) -> Path:
    """Point HOME, the XDG dirs and KAREI_PATH into tmp_path."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("KAREI_PATH", str(tmp_path / "karei"))
    for var in ("KAREI_LOG_LEVEL", "KAREI_LOG_FILE", "KAREI_LOG_FILE_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


@pytest.fixture
def human_ctx() -> RunContext:
    return RunContext(output=Output("human"))


@pytest.fixture
def json_ctx() -> RunContext:
    return RunContext(output=Output("json"))


@pytest.fixture
def plain_ctx() -> RunContext:
    return RunContext(output=Output("plain"))
