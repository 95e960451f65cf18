"""
Error taxonomy and exit codes.

Every error the core raises on purpose is a ``KareiError``. It carries
the numeric exit code the CLI should terminate with, so the outer layer
can map failures without inspecting message text.

    invalid target     → InvalidTargetError   (domain-specific code)
    no handler         → NoHandlerError       (EXIT_CONFIG_ERROR)
    handler failure    → whatever the handler raised (propagated as-is)
    bad interactive in → UsageError           (EXIT_USAGE_ERROR)
"""

from __future__ import annotations

# ── Exit codes ──────────────────────────────────────────────────

EXIT_SUCCESS = 0
EXIT_GENERAL_ERROR = 1
EXIT_USAGE_ERROR = 2
EXIT_CONFIG_ERROR = 3
EXIT_PERMISSION_ERROR = 4
EXIT_NOT_FOUND_ERROR = 5
EXIT_DEPENDENCY_ERROR = 10
EXIT_NETWORK_ERROR = 11
EXIT_SYSTEM_ERROR = 12
EXIT_TIMEOUT_ERROR = 13
EXIT_INTERRUPT_ERROR = 14
EXIT_THEME_ERROR = 20
EXIT_FONT_ERROR = 21
EXIT_APP_ERROR = 22
EXIT_BACKUP_ERROR = 23
EXIT_MIGRATION_ERROR = 24
EXIT_WARNINGS = 64

# Domains whose "not found" failure has its own exit code
_NOT_FOUND_CODES: dict[str, int] = {
    "theme": EXIT_THEME_ERROR,
    "font": EXIT_FONT_ERROR,
    "install": EXIT_APP_ERROR,
}


def not_found_code(domain: str) -> int:
    """Exit code for an invalid option in the given domain."""
    return _NOT_FOUND_CODES.get(domain, EXIT_NOT_FOUND_ERROR)


# ── Exceptions ──────────────────────────────────────────────────


class KareiError(Exception):
    """Base error with an attached process exit code."""

    code: int = EXIT_GENERAL_ERROR

    def __init__(
        self,
        message: str,
        code: int | None = None,
        cause: BaseException | None = None,
    ):
        self.message = message
        if code is not None:
            self.code = code
        self.cause = cause
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


class InvalidInputError(KareiError):
    """A value is not one of the options a manager accepts."""

    code = EXIT_USAGE_ERROR


class InvalidTargetError(KareiError):
    """``apply`` was asked for an option outside the available set."""

    def __init__(self, domain: str, target: str):
        self.domain = domain
        self.target = target
        super().__init__(f"invalid {domain}: {target}", code=not_found_code(domain))


class NoHandlerError(KareiError):
    """A valid option has neither its own handler nor a default one."""

    code = EXIT_CONFIG_ERROR

    def __init__(self, target: str):
        self.target = target
        super().__init__(f"no handler available for {target}")


class UsageError(KareiError):
    """The command was invoked in a way it cannot serve."""

    code = EXIT_USAGE_ERROR


class ConfigError(KareiError):
    """Settings file is missing, unreadable or invalid."""

    code = EXIT_CONFIG_ERROR


class CommandError(KareiError):
    """An external process failed to launch or exited non-zero."""

    code = EXIT_SYSTEM_ERROR

    def __init__(
        self,
        command: list[str],
        message: str,
        returncode: int | None = None,
        output: str = "",
        code: int | None = None,
        cause: BaseException | None = None,
    ):
        self.command = command
        self.returncode = returncode
        self.output = output
        super().__init__(message, code=code, cause=cause)


class NotImplementedFeatureError(KareiError):
    """Option is registered but its handler has no implementation yet."""
