"""
Domain registry — builds the StateManager / Command pair for each domain.

Every domain is declared once as a ``DomainSpec``: its option set, its
handler table and its help text. The CLI asks this module for a fresh
manager or command per invocation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from karei.core.patterns.command import Command, LineReader
from karei.core.patterns.manager import DEFAULT_HANDLER, Handler, ManagerType, StateManager
from karei.handlers import font, logs, proxy, security, ssh, theme, verify


@dataclass(frozen=True)
class DomainSpec:
    """Static description of one domain."""

    domain: ManagerType
    usage: str
    available: tuple[str, ...]
    handlers: dict[str, Handler] = field(default_factory=dict)
    description: str = ""
    interactive: bool = True


def _ssh_for(provider: str) -> Handler:
    def handler(ctx, _target: str) -> None:
        ssh.setup_ssh_key(ctx, provider)

    return handler


DOMAIN_SPECS: dict[str, DomainSpec] = {
    spec.domain.value: spec
    for spec in (
        DomainSpec(
            domain=ManagerType.THEME,
            usage="Manage system themes",
            available=theme.THEMES,
            handlers={DEFAULT_HANDLER: theme.apply_theme},
            description=(
                "Apply a coordinated theme to terminal applications.\n\n"
                "Examples:\n"
                "  karei theme tokyo-night    Apply the tokyo-night theme\n"
                "  karei theme list           Show available themes"
            ),
        ),
        DomainSpec(
            domain=ManagerType.FONT,
            usage="Manage system fonts",
            available=font.FONTS,
            handlers={DEFAULT_HANDLER: font.apply_font},
            description=(
                "Configure a programming font for terminal applications.\n\n"
                "Examples:\n"
                "  karei font JetBrainsMono    Apply JetBrains Mono\n"
                "  karei font list             Show available fonts"
            ),
        ),
        DomainSpec(
            domain=ManagerType.SECURITY,
            usage="Run security checks and tools",
            available=security.SECURITY_TOOLS,
            handlers={DEFAULT_HANDLER: security.run_security_tool},
            description=(
                "Run a system security tool.\n\n"
                "  audit      Show audit rules\n"
                "  firewall   Show UFW firewall status\n"
                "  fail2ban   Show fail2ban jails\n"
                "  clamav     Check the antivirus scanner\n"
                "  rkhunter   Rootkit detection\n"
                "  aide       File integrity check"
            ),
        ),
        DomainSpec(
            domain=ManagerType.VERIFY,
            usage="Verify system configuration",
            available=verify.VERIFY_TARGETS,
            handlers={
                "tools": verify.verify_tools,
                "integrations": verify.verify_integrations,
                "path": verify.verify_path,
                "fish": verify.verify_fish,
                "xdg": verify.verify_xdg,
                "versions": verify.verify_versions,
                "all": verify.verify_all,
                DEFAULT_HANDLER: verify.verify_all,
            },
            description="Run verification checks on the installed environment.",
        ),
        DomainSpec(
            domain=ManagerType.LOGS,
            usage="View karei logs",
            available=logs.LOG_TARGETS,
            handlers={
                "install": logs.show_log,
                "progress": logs.show_log,
                "precheck": logs.show_log,
                "errors": logs.show_log,
                "all": logs.show_all_logs,
                DEFAULT_HANDLER: logs.show_all_logs,
            },
            description="Display installation and operation logs.",
        ),
        DomainSpec(
            domain=ManagerType.PROXY,
            usage="Manage proxy settings",
            available=proxy.PROXY_TARGETS,
            handlers={
                "enable": proxy.enable_proxy,
                "disable": proxy.disable_proxy,
                "status": proxy.show_proxy_status,
                "configure": proxy.configure_proxy,
                DEFAULT_HANDLER: proxy.show_proxy_status,
            },
            description="Show proxy environment variables.",
        ),
        DomainSpec(
            domain=ManagerType.SSH,
            usage="Set up SSH keys",
            available=ssh.SSH_TARGETS,
            handlers={
                "github": _ssh_for("github"),
                "gitlab": _ssh_for("gitlab"),
                "bitbucket": _ssh_for("bitbucket"),
                "custom": ssh.setup_custom_ssh,
                DEFAULT_HANDLER: _ssh_for("github"),
            },
            description="Generate an SSH key for a git hosting provider.",
        ),
    )
}

DOMAINS: tuple[str, ...] = tuple(DOMAIN_SPECS)


def get_spec(domain: str) -> DomainSpec:
    """Look up a registered domain.

    Raises:
        KeyError: If the domain has no registered manager.
    """
    return DOMAIN_SPECS[domain]


def build_manager(
    domain: str,
    verbose: bool = False,
    dry_run: bool = False,
    config_file: Path | None = None,
) -> StateManager:
    """Fresh StateManager for ``domain``."""
    spec = get_spec(domain)
    return StateManager(
        name=spec.domain.value,
        domain=spec.domain,
        available=spec.available,
        handlers=spec.handlers,
        config_file=config_file,
        verbose=verbose,
        dry_run=dry_run,
    )


def build_command(
    domain: str,
    verbose: bool = False,
    dry_run: bool = False,
    config_file: Path | None = None,
    reader: LineReader | None = None,
) -> Command:
    """Fresh Command (and its StateManager) for ``domain``."""
    spec = get_spec(domain)
    return Command(
        name=spec.domain.value,
        manager=build_manager(domain, verbose=verbose, dry_run=dry_run, config_file=config_file),
        usage=spec.usage,
        description=spec.description,
        interactive=spec.interactive,
        reader=reader,
    )
