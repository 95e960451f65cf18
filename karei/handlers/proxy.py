"""
Proxy handlers — report proxy environment variables.

Only ``status`` is implemented; enabling, disabling and configuring a
proxy fail with ``NotImplementedFeatureError``.
"""

from __future__ import annotations

import os

from karei.core.context import RunContext
from karei.core.errors import NotImplementedFeatureError

PROXY_TARGETS = ("enable", "disable", "status", "configure")
PROXY_VARS = ("http_proxy", "https_proxy", "ftp_proxy", "no_proxy")


def collect_proxy_status() -> dict[str, str]:
    return {var: os.environ.get(var) or "unset" for var in PROXY_VARS}


def show_proxy_status(ctx: RunContext, _target: str = "") -> None:
    out = ctx.output
    status = collect_proxy_status()

    if out.is_json:
        out.json_result("success", {"proxy": status})
        return

    out.progress("Proxy Status:")
    for var, value in status.items():
        if out.is_plain:
            out.plain_key_value(var, value)
        elif value == "unset":
            out.result(f"✗ {var}: not set")
        else:
            out.result(f"✓ {var}: {value}")


def enable_proxy(ctx: RunContext, _target: str = "") -> None:
    ctx.output.progress("Enabling proxy configuration...")
    raise NotImplementedFeatureError("proxy configuration not implemented")


def disable_proxy(ctx: RunContext, _target: str = "") -> None:
    ctx.output.progress("Disabling proxy configuration...")
    raise NotImplementedFeatureError("proxy configuration not implemented")


def configure_proxy(ctx: RunContext, _target: str = "") -> None:
    ctx.output.progress("Interactive proxy configuration...")
    raise NotImplementedFeatureError("interactive proxy configuration not implemented")
