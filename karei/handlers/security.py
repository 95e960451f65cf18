"""
Security handler — run one of the system security tools.

Most tools need root and go through ``sudo``; their output is always
streamed since reading it is the point.
"""

from __future__ import annotations

from karei.core.context import RunContext
from karei.core.errors import EXIT_DEPENDENCY_ERROR, KareiError

SECURITY_TOOLS = ("audit", "firewall", "fail2ban", "clamav", "rkhunter", "aide")

# tool → (needs sudo, argv)
_TOOL_COMMANDS: dict[str, tuple[bool, tuple[str, ...]]] = {
    "audit": (True, ("auditctl", "-l")),
    "firewall": (True, ("ufw", "status", "verbose")),
    "clamav": (False, ("clamscan", "--version")),
    "rkhunter": (True, ("rkhunter", "--check", "--report-warnings-only")),
    "aide": (True, ("aide", "--check")),
}


class Fail2BanNotActiveError(KareiError):
    """fail2ban was requested but its service is not running."""

    code = EXIT_DEPENDENCY_ERROR

    def __init__(self) -> None:
        super().__init__("fail2ban service not active")


def run_security_tool(ctx: RunContext, tool: str) -> None:
    """Run ``tool`` and stream its report.

    Raises:
        Fail2BanNotActiveError: fail2ban requested while its unit is down.
        CommandError: The tool failed or is not installed.
        KareiError: Unknown tool name.
    """
    executor = ctx.executor(verbose=True)

    if tool == "fail2ban":
        services = ctx.services()
        if not services.is_active("fail2ban"):
            raise Fail2BanNotActiveError()
        executor.execute_sudo("fail2ban-client", "status")
        return

    if tool not in _TOOL_COMMANDS:
        raise KareiError(f"unknown security tool: {tool}")

    needs_sudo, argv = _TOOL_COMMANDS[tool]
    if needs_sudo:
        executor.execute_sudo(*argv)
    else:
        executor.execute(*argv)
