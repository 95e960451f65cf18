"""
Consent prompts — ask before touching a user's existing configuration.

    --yes       every prompt is accepted (and says so on stderr)
    no TTY      every prompt is declined; scripts never block on input
    JSON mode   declined as well, the stream must stay machine-readable
"""

from __future__ import annotations

import logging
import sys

import click

from karei.core.context import RunContext

logger = logging.getLogger(__name__)

_ACCEPT = ("y", "yes")


def ask_consent(ctx: RunContext, prompt: str, reader=None) -> bool:
    """``prompt [y/N]`` on stderr; True only for an explicit yes.

    Args:
        ctx: Supplies ``assume_yes`` and the output mode.
        prompt: Question without the ``[y/N]`` suffix.
        reader: Line source; stdin when None.
    """
    if ctx.assume_yes:
        click.echo(f"Auto-accepting: {prompt}", err=True)
        return True

    if ctx.output.is_json:
        logger.debug("Declining %r: JSON output mode", prompt)
        return False

    if reader is None:
        reader = sys.stdin
    if not reader.isatty():
        logger.debug("Declining %r: stdin is not a terminal", prompt)
        return False

    click.echo(f"{prompt} [y/N]: ", nl=False, err=True)
    try:
        response = reader.readline()
    except (OSError, UnicodeDecodeError):
        logger.debug("Declining %r: unreadable response", prompt)
        return False
    return response.strip().lower() in _ACCEPT


def confirm_config_change(ctx: RunContext, app: str, path, reader=None) -> bool:
    return ask_consent(ctx, f"Modify {app} configuration at {path}?", reader=reader)
