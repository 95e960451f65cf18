"""
Service controller — systemctl convenience on top of CommandExecutor.

Holds no state of its own; dry-run and verbosity come from the executor.
"""

from __future__ import annotations

from karei.adapters.shell.command import CommandExecutor
from karei.core.errors import CommandError

SYSTEMCTL = "systemctl"


class ServiceController:
    """Query and manipulate systemd services."""

    def __init__(self, executor: CommandExecutor | None = None):
        self.executor = executor or CommandExecutor()

    def is_active(self, service: str) -> bool:
        """Whether the unit is active. Any failure counts as inactive."""
        try:
            self.executor.execute_silent(SYSTEMCTL, "is-active", "--quiet", service)
        except CommandError:
            return False
        return True

    def enable(self, service: str) -> None:
        self.executor.execute_sudo(SYSTEMCTL, "enable", service)

    def start(self, service: str) -> None:
        self.executor.execute_sudo(SYSTEMCTL, "start", service)

    def status(self, service: str) -> str:
        return self.executor.execute_with_output(SYSTEMCTL, "status", service)

    def get_property(self, service: str, prop: str) -> str:
        """Value of a single unit property, e.g. ``ActiveState``."""
        return self.executor.execute_with_output(
            SYSTEMCTL, "show", service, f"--property={prop}", "--value"
        )
