"""
Console output — one renderer, three mutually exclusive modes.

    human   decorated text; progress/success lines on stderr
    json    a single JSON object per result on stdout, nothing decorative
    plain   ``key:value`` lines on stdout for scripts

Results go to stdout, everything conversational goes to stderr, so
``karei theme list --plain | cut -d: -f1`` stays clean.
"""

from __future__ import annotations

import json
from typing import Any, Literal

import click

OutputMode = Literal["human", "json", "plain"]

CURRENT_MARKER = "▶ "
BLANK_MARKER = "  "


class Output:
    """Format-aware writer handed to commands and handlers."""

    def __init__(self, mode: OutputMode = "human", verbose: bool = False):
        self.mode = mode
        self.verbose = verbose

    def __repr__(self) -> str:
        return f"<Output mode={self.mode!r} verbose={self.verbose}>"

    @property
    def is_json(self) -> bool:
        return self.mode == "json"

    @property
    def is_plain(self) -> bool:
        return self.mode == "plain"

    @property
    def is_human(self) -> bool:
        return self.mode == "human"

    # ── stderr ──────────────────────────────────────────────────

    def progress(self, message: str) -> None:
        """Progress chatter, only in verbose human mode."""
        if self.verbose and self.is_human:
            click.echo(message, err=True)

    def success(self, message: str) -> None:
        if self.is_human:
            click.secho(f"✓ {message}", fg="green", err=True)

    def warning(self, message: str) -> None:
        if self.is_plain:
            click.echo(f"warning: {message}", err=True)
        else:
            click.secho(f"⚠ {message}", fg="yellow", err=True)

    def error(self, message: str) -> None:
        if self.is_plain:
            click.echo(f"error: {message}", err=True)
        else:
            click.secho(f"✗ {message}", fg="red", err=True)

    def hint(self, message: str = "") -> None:
        """Undecorated help text on stderr."""
        click.echo(message, err=True)

    # ── stdout ──────────────────────────────────────────────────

    def result(self, data: Any) -> None:
        click.echo(f"{data}")

    def json_result(self, status: str, data: dict[str, Any]) -> None:
        payload: dict[str, Any] = {"status": status}
        payload.update(data)
        click.echo(json.dumps(payload, ensure_ascii=False))

    def plain_key_value(self, key: str, value: str) -> None:
        click.echo(f"{key}:{value}")

    def plain_status(self, name: str, status: str) -> None:
        click.echo(f"{name}:{status}")

    def plain_value(self, value: str) -> None:
        click.echo(value)

    def error_result(self, error: BaseException, code: int) -> None:
        """Report a terminal failure; JSON mode also gets a result object."""
        if self.is_json:
            self.json_result("error", {"error": str(error), "code": code})
        self.error(str(error))

    # ── helpers ─────────────────────────────────────────────────

    @staticmethod
    def marker(selected: bool) -> str:
        return CURRENT_MARKER if selected else BLANK_MARKER
