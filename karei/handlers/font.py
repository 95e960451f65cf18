"""
Font handler — point terminal applications at the chosen font.
"""

from __future__ import annotations

from karei.core.config.paths import karei_path, xdg_config_home
from karei.core.context import RunContext
from karei.handlers.common import copy_config

FONTS = ("CaskaydiaMono", "FiraMono", "JetBrainsMono", "MesloLGS", "BerkeleyMono")

# app → destination relative to XDG_CONFIG_HOME
FONT_APPS: dict[str, str] = {
    "ghostty": "ghostty/font.conf",
}


def apply_font(ctx: RunContext, font: str) -> None:
    """Copy each app's bundled ``<font>.conf`` into place when present."""
    out = ctx.output
    for app, dst_rel in FONT_APPS.items():
        src = karei_path() / "configs" / app / "fonts" / f"{font}.conf"
        if not src.is_file():
            out.progress(f"No {font} config bundled for {app}")
            continue
        try:
            copy_config(ctx, src, xdg_config_home() / dst_rel)
        except OSError as e:
            out.warning(f"Failed to apply {font} font to {app}: {e}")

    if out.is_json:
        out.json_result("success", {"font": font})
    elif out.is_plain:
        out.plain_status(font, "applied")
    else:
        out.result(f"✓ Font '{font}' applied")
