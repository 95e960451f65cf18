"""
Verify handlers — read-only checks of the bootstrapped environment.

Each ``collect_*`` function gathers one section as plain data; each
``verify_*`` handler renders its section in the active output mode.
``verify_all`` emits a single JSON object in JSON mode so the result
stays one parseable document.

Probes always run for real, even under ``--dry-run``: they change nothing.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from karei.adapters.shell.command import CommandExecutor
from karei.core.config.paths import user_bin_dir, xdg_config_home, xdg_data_home
from karei.core.context import RunContext
from karei.core.errors import EXIT_DEPENDENCY_ERROR, CommandError, KareiError
from karei.handlers.common import render_check

VERIFY_TARGETS = ("tools", "integrations", "path", "fish", "xdg", "versions", "all")

# tool → (install method, binary)
CORE_TOOLS: dict[str, tuple[str, str]] = {
    "git": ("apt", "git"),
    "fish": ("apt", "fish"),
    "starship": ("aqua", "starship"),
    "zellij": ("aqua", "zellij"),
    "btop": ("apt", "btop"),
    "neovim": ("apt", "nvim"),
    "lazygit": ("aqua", "lazygit"),
}

VERSION_COMMANDS: dict[str, tuple[str, ...]] = {
    "git": ("git", "--version"),
    "fish": ("fish", "--version"),
    "starship": ("starship", "--version"),
    "neovim": ("nvim", "--version"),
}


class FishNotInstalledError(KareiError):
    code = EXIT_DEPENDENCY_ERROR

    def __init__(self) -> None:
        super().__init__("fish shell not installed")


def _probe_executor(ctx: RunContext) -> CommandExecutor:
    return CommandExecutor(verbose=False, dry_run=False, timeout=ctx.timeout)


def _integration_configs() -> dict[str, Path]:
    config = xdg_config_home()
    return {
        "fish": config / "fish" / "config.fish",
        "ghostty": config / "ghostty" / "config",
        "btop": config / "btop" / "btop.conf",
    }


# ── Collectors ──────────────────────────────────────────────────


def tool_installed(executor: CommandExecutor, method: str, binary: str) -> bool:
    """Whether a tool is installed, asking aqua for aqua-managed ones."""
    if method == "aqua" and executor.command_exists("aqua"):
        aqua_root = str(user_bin_dir().parent)
        try:
            executor.execute_silent("env", f"AQUA_ROOT_DIR={aqua_root}", "aqua", "which", binary)
        except CommandError:
            return False
        return True
    return executor.command_exists(binary)


def collect_tools(executor: CommandExecutor) -> dict[str, str]:
    return {
        tool: "installed" if tool_installed(executor, method, binary) else "missing"
        for tool, (method, binary) in CORE_TOOLS.items()
    }


def collect_integrations() -> dict[str, str]:
    return {
        name: "found" if path.is_file() else "missing"
        for name, path in _integration_configs().items()
    }


def collect_path() -> dict[str, Any]:
    user_bin = str(user_bin_dir())
    entries = os.environ.get("PATH", "").split(os.pathsep)
    return {"user_bin_dir": user_bin, "in_path": user_bin in entries}


def collect_fish(executor: CommandExecutor) -> dict[str, bool]:
    return {
        "installed": executor.command_exists("fish"),
        "config_exists": _integration_configs()["fish"].is_file(),
    }


def collect_xdg() -> dict[str, str]:
    return {"config": str(xdg_config_home()), "data": str(xdg_data_home())}


def collect_versions(executor: CommandExecutor) -> dict[str, str]:
    versions: dict[str, str] = {}
    for name, argv in VERSION_COMMANDS.items():
        try:
            output = executor.execute_with_output(*argv)
        except CommandError:
            versions[name] = "check_failed"
            continue
        versions[name] = output.splitlines()[0] if output else ""
    return versions


# ── Handlers ────────────────────────────────────────────────────


def verify_tools(ctx: RunContext, _target: str = "") -> None:
    out = ctx.output
    tools = collect_tools(_probe_executor(ctx))
    if out.is_json:
        out.json_result("success", {"tools": tools})
        return

    out.progress("Verifying tools...")
    for tool, state in tools.items():
        render_check(
            out, tool, state == "installed",
            ok_text=tool, fail_text=f"{tool} - not found",
            ok_status="installed",
        )


def verify_integrations(ctx: RunContext, _target: str = "") -> None:
    out = ctx.output
    integrations = collect_integrations()
    if out.is_json:
        out.json_result("success", {"integrations": integrations})
        return

    out.progress("Verifying integrations...")
    for name, state in integrations.items():
        render_check(
            out, f"{name}-config", state == "found",
            ok_text=f"{name} config", fail_text=f"{name} config - not found",
        )


def verify_path(ctx: RunContext, _target: str = "") -> None:
    out = ctx.output
    path = collect_path()
    if out.is_json:
        out.json_result("success", {"path": path})
        return

    out.progress("Verifying PATH...")
    render_check(
        out, "user-bin-path", path["in_path"],
        ok_text="User bin directory in PATH",
        fail_text=f"User bin directory not in PATH: {path['user_bin_dir']}",
    )


def verify_fish(ctx: RunContext, _target: str = "") -> None:
    """Fish must be installed; a missing config is only reported."""
    out = ctx.output
    fish = collect_fish(_probe_executor(ctx))
    if not fish["installed"]:
        raise FishNotInstalledError()
    if out.is_json:
        out.json_result("success", {"fish": fish})
        return

    out.progress("Verifying Fish shell...")
    render_check(
        out, "fish-config", fish["config_exists"],
        ok_text="Fish configuration found", fail_text="Fish configuration not found",
    )


def verify_xdg(ctx: RunContext, _target: str = "") -> None:
    out = ctx.output
    dirs = collect_xdg()
    if out.is_json:
        out.json_result("success", {"xdg": dirs})
        return

    out.progress("Verifying XDG directories...")
    for name, directory in dirs.items():
        exists = Path(directory).is_dir()
        key = f"xdg-{name}-home"
        if out.is_plain:
            if exists:
                out.plain_key_value(key, directory)
            else:
                out.plain_status(key, "missing")
        else:
            label = f"XDG_{name.upper()}_HOME: {directory}"
            render_check(out, key, exists, ok_text=label, fail_text=f"{label} (not found)")


def verify_versions(ctx: RunContext, _target: str = "") -> None:
    out = ctx.output
    versions = collect_versions(_probe_executor(ctx))
    if out.is_json:
        out.json_result("success", {"versions": versions})
        return

    out.progress("Verifying versions...")
    for name, version in versions.items():
        ok = version != "check_failed"
        if out.is_plain:
            out.plain_key_value(f"{name}-version", version if ok else "failed")
        else:
            render_check(
                out, name, ok,
                ok_text=f"{name}: {version}", fail_text=f"{name}: version check failed",
            )


_SECTIONS: tuple[Callable[[RunContext, str], None], ...] = (
    verify_tools,
    verify_integrations,
    verify_path,
    verify_fish,
    verify_xdg,
    verify_versions,
)


def verify_all(ctx: RunContext, _target: str = "") -> None:
    """Every check; stops at the first section that raises."""
    out = ctx.output
    if out.is_json:
        executor = _probe_executor(ctx)
        out.json_result("success", {
            "tools": collect_tools(executor),
            "integrations": collect_integrations(),
            "path": collect_path(),
            "fish": collect_fish(executor),
            "xdg": collect_xdg(),
            "versions": collect_versions(executor),
        })
        return

    for section in _SECTIONS:
        section(ctx, "")
        if out.is_human:
            click.echo(err=True)
