"""
Command — the CLI-facing wrapper around one StateManager.

    karei <name> <option>   apply the option
    karei <name> list       show options, marking the current one
    karei <name>            interactive menu, or status when not interactive

The interactive menu reads a single line from an injected ``LineReader``
(stdin by default) so tests can drive it without a terminal. Bad input
is a usage error; there is no re-prompt loop.
"""

from __future__ import annotations

import logging
import re
import sys
from collections.abc import Sequence
from typing import Protocol

import click

from karei.core.context import RunContext
from karei.core.errors import UsageError
from karei.core.patterns.manager import StateManager

logger = logging.getLogger(__name__)

PROG_NAME = "karei"
LIST_ARG = "list"

# optional sign, ASCII digits only
_CHOICE_RE = re.compile(r"[+-]?[0-9]+")


class LineReader(Protocol):
    """Source of interactive input."""

    def readline(self) -> str: ...

    def isatty(self) -> bool: ...


class Command:
    """Direct, list, status and interactive surfaces for one domain."""

    def __init__(
        self,
        name: str,
        manager: StateManager,
        usage: str = "",
        description: str = "",
        interactive: bool = False,
        reader: LineReader | None = None,
    ):
        self.name = name
        self.manager = manager
        self.usage = usage
        self.description = description
        self.interactive = interactive
        self._reader = reader

    def __repr__(self) -> str:
        return f"<Command name={self.name!r} interactive={self.interactive}>"

    @property
    def reader(self) -> LineReader:
        if self._reader is None:
            return sys.stdin
        return self._reader

    def execute(self, ctx: RunContext, args: Sequence[str] = ()) -> None:
        """Dispatch on the argument list.

        Raises:
            KareiError: For invalid targets, missing handlers, bad input.
            Exception: Whatever a handler raised, unchanged.
        """
        if args and args[0]:
            target = args[0]
            if target == LIST_ARG:
                self.show_available(ctx)
                return
            self.manager.apply(ctx, target)
            return

        if self.interactive:
            self.show_concise_help(ctx)
            self.run_interactive(ctx)
            return

        self.show_status(ctx)

    # ── Rendering ───────────────────────────────────────────────

    def show_available(self, ctx: RunContext) -> None:
        out = ctx.output
        current = self.manager.get_current()
        available = self.manager.get_available()

        if out.is_json:
            out.json_result("success", {
                "type": self.manager.domain,
                "current": current,
                "available": available,
            })
        elif out.is_plain:
            for option in available:
                out.plain_status(option, "current" if option == current else "available")
        else:
            click.echo(f"Available {self.manager.domain} options:", err=True)
            for option in available:
                out.result(f"{out.marker(option == current)}{option}")

    def show_status(self, ctx: RunContext) -> None:
        out = ctx.output
        status = self.manager.status()

        if out.is_json:
            out.json_result("success", status.to_dict())
        elif out.is_plain:
            out.plain_value(status.current)
        else:
            out.result(status.current)
            out.progress(f"Available: {', '.join(status.available)}")

    def show_concise_help(self, ctx: RunContext) -> None:
        out = ctx.output
        out.hint(f"{self.name} - {self.usage}\n")
        out.hint(f"Usage: {PROG_NAME} {self.name} [option]\n")
        out.hint("Examples:")
        out.hint(f"  {PROG_NAME} {self.name} list      # Show available options")
        available = self.manager.get_available()
        if available:
            out.hint(f"  {PROG_NAME} {self.name} {available[0]}   # Apply {available[0]}")
        out.hint(f"\nFor more options, use: {PROG_NAME} {self.name} --help\n")

    # ── Interactive ─────────────────────────────────────────────

    def run_interactive(self, ctx: RunContext) -> None:
        """Numbered menu; one line of input selects the option to apply.

        Raises:
            UsageError: JSON mode, no terminal, or unusable input.
        """
        out = ctx.output

        if out.is_json:
            raise UsageError("interactive mode not available in JSON output mode")

        reader = self.reader
        if not reader.isatty():
            out.error("Interactive mode requires a terminal")
            out.hint(f"Use: {PROG_NAME} {self.name} <option> or {PROG_NAME} {self.name} list")
            raise UsageError("stdin is not a terminal")

        available = self.manager.get_available()
        current = self.manager.get_current()
        domain = self.manager.domain

        click.echo(f"Current {domain}: {current}", err=True)
        click.echo(f"Available {domain} options:", err=True)
        for index, option in enumerate(available, start=1):
            click.echo(f"{out.marker(option == current)}{index}. {option}", err=True)

        click.echo(f"\nSelect {domain} (1-{len(available)}): ", nl=False, err=True)

        choice = self._read_choice(reader)
        if choice < 1 or choice > len(available):
            raise UsageError("invalid choice")

        selected = available[choice - 1]
        logger.debug("Interactive selection for %s: %s", domain, selected)
        self.manager.apply(ctx, selected)

    @staticmethod
    def _read_choice(reader: LineReader) -> int:
        try:
            line = reader.readline()
        except (OSError, UnicodeDecodeError) as e:
            raise UsageError("invalid input", cause=e) from e

        text = line.strip()
        if not _CHOICE_RE.fullmatch(text):
            raise UsageError("invalid input")
        return int(text)
