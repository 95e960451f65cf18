"""
Tests for the domain registry.
"""

from pathlib import Path

import pytest

from karei.core.patterns.command import Command
from karei.core.patterns.factories import (
    DOMAIN_SPECS,
    DOMAINS,
    build_command,
    build_manager,
    get_spec,
)
from karei.core.patterns.manager import StateManager
from karei.handlers import logs, theme


class TestRegistry:
    def test_registered_domains(self):
        assert set(DOMAINS) == {"theme", "font", "security", "verify", "logs", "proxy", "ssh"}

    def test_unknown_domain(self):
        with pytest.raises(KeyError):
            get_spec("backup")

    @pytest.mark.parametrize("domain", sorted(DOMAIN_SPECS))
    def test_every_option_has_a_handler(self, domain: str, tmp_path: Path):
        """Every offered option resolves to a handler."""
        manager = build_manager(domain, config_file=tmp_path / domain)
        for option in manager.get_available():
            assert callable(manager.resolve_handler(option))

    @pytest.mark.parametrize("domain", sorted(DOMAIN_SPECS))
    def test_default_is_first_option(self, domain: str, tmp_path: Path):
        manager = build_manager(domain, config_file=tmp_path / domain)
        assert manager.get_current() == get_spec(domain).available[0]

    def test_theme_options(self):
        assert get_spec("theme").available == theme.THEMES
        assert "tokyo-night" in theme.THEMES
        assert len(theme.THEMES) == 8

    def test_logs_targets_share_one_handler(self, tmp_path: Path):
        """All log targets route through one handler."""
        manager = build_manager("logs", config_file=tmp_path / "logs")
        assert manager.resolve_handler("install") is logs.show_log
        assert manager.resolve_handler("all") is logs.show_all_logs


class TestBuilders:
    def test_build_manager_flags(self, tmp_path: Path):
        manager = build_manager("font", verbose=True, dry_run=True, config_file=tmp_path / "f")
        assert isinstance(manager, StateManager)
        assert manager.domain == "font"
        assert manager.verbose and manager.dry_run
        assert manager.config_path == tmp_path / "f"

    def test_build_manager_default_path(self, karei_env: Path):
        assert build_manager("ssh").config_path == karei_env / "config" / "karei" / "ssh"

    def test_build_command(self, tmp_path: Path):
        cmd = build_command("security", config_file=tmp_path / "security")
        assert isinstance(cmd, Command)
        assert cmd.name == "security"
        assert cmd.interactive
        assert cmd.usage == "Run security checks and tools"

    def test_fresh_instances(self, tmp_path: Path):
        """Each call builds a new manager."""
        a = build_manager("theme", config_file=tmp_path / "t")
        b = build_manager("theme", config_file=tmp_path / "t")
        assert a is not b
