"""
Theme handler — copy per-application theme files into XDG config.

Bundled themes live under ``$KAREI_PATH/themes/<theme>/``. Only
config-file based applications are handled here; an application whose
theme file is not bundled is reported as skipped, not failed. A
destination the user has changed is only replaced after consent.
"""

from __future__ import annotations

import filecmp
from pathlib import Path

import click

from karei.core.config.paths import karei_path, xdg_config_home
from karei.core.context import RunContext
from karei.handlers.common import copy_config
from karei.ui.cli.consent import confirm_config_change

THEMES = (
    "tokyo-night",
    "catppuccin",
    "nord",
    "everforest",
    "gruvbox",
    "kanagawa",
    "rose-pine",
    "gruvbox-light",
)

# app → (bundled file name, destination relative to XDG_CONFIG_HOME)
THEMED_APPS: dict[str, tuple[str, str]] = {
    "ghostty": ("ghostty.conf", "ghostty/theme.conf"),
    "btop": ("btop.theme", "btop/themes/{theme}.theme"),
    "zellij": ("zellij.kdl", "zellij/themes/{theme}.kdl"),
}


def theme_paths(theme: str, app: str) -> tuple[Path, Path]:
    """Source and destination of ``app``'s file for ``theme``."""
    src_name, dst_rel = THEMED_APPS[app]
    src = karei_path() / "themes" / theme / src_name
    dst = xdg_config_home() / dst_rel.format(theme=theme)
    return src, dst


def apply_theme(ctx: RunContext, theme: str) -> None:
    """Apply ``theme`` to every themable application that ships a file.

    Per-application failures are reported in the summary; they do not
    fail the theme as a whole.
    """
    out = ctx.output
    applied: list[str] = []
    failed: list[str] = []
    skipped: list[str] = []

    out.progress(f"Applying {theme} theme to {len(THEMED_APPS)} applications...")

    for app in THEMED_APPS:
        src, dst = theme_paths(theme, app)
        if not src.is_file():
            out.progress(f"{app} theme not available")
            skipped.append(app)
            continue
        if not ctx.dry_run and _would_overwrite(src, dst) and not confirm_config_change(ctx, app, dst):
            out.progress(f"Keeping existing {app} theme at {dst}")
            skipped.append(app)
            continue
        try:
            copy_config(ctx, src, dst)
        except OSError as e:
            out.warning(f"Failed to apply {theme} theme to {app}: {e}")
            failed.append(app)
        else:
            applied.append(app)

    if out.is_json:
        out.json_result("success", {
            "theme": theme,
            "applied": applied,
            "failed": failed,
            "skipped": skipped,
        })
        return

    if out.is_plain:
        for app in applied:
            out.plain_status(app, "applied")
        for app in failed:
            out.plain_status(app, "failed")
        for app in skipped:
            out.plain_status(app, "skipped")
        return

    _print_summary(theme, applied, failed, skipped)


def _would_overwrite(src: Path, dst: Path) -> bool:
    """Whether copying would replace a file with different content."""
    return dst.is_file() and not filecmp.cmp(src, dst, shallow=False)


def _print_summary(theme: str, applied: list[str], failed: list[str], skipped: list[str]) -> None:
    click.echo()
    click.secho(f"✓ Theme '{theme}' application complete:", fg="green", bold=True)
    if applied:
        click.echo(f"  Successfully themed ({len(applied)} apps):")
        for app in applied:
            click.echo(f"    ✓ {app}")
    if failed:
        click.echo(f"  Failed to theme ({len(failed)} apps):")
        for app in failed:
            click.echo(f"    ✗ {app}")
    if skipped:
        click.echo(f"  Skipped ({len(skipped)} apps):")
        for app in skipped:
            click.echo(f"    - {app}")
    click.echo()
    click.echo("Next steps:")
    click.echo("  Restart applications to see theme changes")
    click.echo("  View available themes: karei theme list")
