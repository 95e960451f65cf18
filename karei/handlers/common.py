"""
Helpers shared by domain handlers.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

import click

from karei.core.context import RunContext
from karei.ui.cli.output import Output

logger = logging.getLogger(__name__)


def copy_config(ctx: RunContext, src: Path, dst: Path) -> None:
    """Copy a bundled config file into place, creating parent dirs.

    Raises:
        OSError: If the copy fails.
    """
    if ctx.dry_run:
        click.echo(f"DRY RUN: cp {src} {dst}", err=ctx.output.is_json)
        return
    dst.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(src, dst)
    logger.debug("Copied %s → %s", src, dst)


def render_check(
    out: Output,
    key: str,
    ok: bool,
    ok_text: str,
    fail_text: str,
    ok_status: str = "found",
    fail_status: str = "missing",
) -> None:
    """One verification line: ``key:status`` in plain mode, ✓/✗ otherwise."""
    if out.is_plain:
        out.plain_status(key, ok_status if ok else fail_status)
    else:
        out.result(f"✓ {ok_text}" if ok else f"✗ {fail_text}")
