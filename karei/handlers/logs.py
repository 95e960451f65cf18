"""
Logs handlers — show the tail of karei's own log files.
"""

from __future__ import annotations

import click

from karei.adapters.shell.command import CommandExecutor
from karei.core.config.paths import log_dir
from karei.core.context import RunContext
from karei.core.errors import CommandError

LOG_TARGETS = ("install", "progress", "precheck", "errors", "all")

# target → (file name, title)
LOG_FILES: dict[str, tuple[str, str]] = {
    "install": ("install.log", "Installation"),
    "progress": ("progress.log", "Progress"),
    "precheck": ("precheck.log", "Precheck"),
    "errors": ("errors.log", "Errors"),
}

TAIL_LINES = 20


def show_log(ctx: RunContext, target: str) -> None:
    """Print the last lines of one log file.

    Raises:
        CommandError: The file exists but could not be read.
    """
    filename, title = LOG_FILES[target]
    path = log_dir() / filename

    click.echo(f"▸ {title} Logs ({path}):")
    if not path.is_file():
        click.echo(f"No {title.lower()} logs found")
        return

    executor = CommandExecutor(timeout=ctx.timeout)
    output = executor.execute_with_output("tail", "-n", str(TAIL_LINES), str(path))
    click.echo(output.rstrip("\n"))


def show_all_logs(ctx: RunContext, _target: str = "") -> None:
    """Every log in turn; an unreadable one is reported and skipped."""
    for target in LOG_FILES:
        try:
            show_log(ctx, target)
        except CommandError as e:
            ctx.output.warning(f"Failed to read {target} log: {e}")
        click.echo()
