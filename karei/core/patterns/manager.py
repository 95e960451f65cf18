"""
StateManager — validated, persisted selection among a fixed option set.

One manager per domain (theme, font, security, ...). It knows the valid
options, which handler performs the side effect for each, and where the
last successful choice is remembered between runs.

Lifecycle per process:
    1. Built fresh by the factory (no in-memory state survives a run).
    2. ``get_current()`` lazily reads the selection file once.
    3. ``apply()`` validates, dispatches to a handler, then persists.

Handler lookup order is ``handlers[target]`` then ``handlers["default"]``,
so a domain can special-case a few options and share one code path for
the rest.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from enum import Enum
from pathlib import Path

from karei.core.config.paths import config_path
from karei.core.context import RunContext
from karei.core.errors import InvalidInputError, InvalidTargetError, NoHandlerError
from karei.core.models.status import ManagerStatus
from karei.core.persistence.selection_file import read_selections, write_selection

logger = logging.getLogger(__name__)

Handler = Callable[[RunContext, str], None]

DEFAULT_HANDLER = "default"


class ManagerType(str, Enum):
    """Known domains. Only some have a registered manager."""

    THEME = "theme"
    FONT = "font"
    INSTALL = "install"
    SECURITY = "security"
    VERIFY = "verify"
    LOGS = "logs"
    PROXY = "proxy"
    SSH = "ssh"
    RESTORE = "restore"
    BACKUP = "backup"
    UPDATE = "update"


class StateManager:
    """Selection state and handler dispatch for one domain.

    Args:
        name: Display name, usually the same as the domain.
        domain: Domain tag; derives the persisted key and config path.
        available: Valid options in display order. The first is the default.
        handlers: Option → handler, plus an optional ``"default"`` entry.
        config_file: Override for the selection file location.
        verbose: Include underlying error detail in failure messages.
        dry_run: Force dry-run for every handler this manager dispatches.
    """

    def __init__(
        self,
        name: str,
        domain: ManagerType | str,
        available: Iterable[str],
        handlers: Mapping[str, Handler] | None = None,
        config_file: Path | None = None,
        verbose: bool = False,
        dry_run: bool = False,
    ):
        self.name = name
        self.domain = domain.value if isinstance(domain, ManagerType) else domain
        self.available: tuple[str, ...] = tuple(available)
        self.handlers: dict[str, Handler] = dict(handlers or {})
        self.config_path = config_file or config_path(self.domain)
        self.verbose = verbose
        self.dry_run = dry_run
        self._current: str | None = None

    def __repr__(self) -> str:
        return f"<StateManager domain={self.domain!r} options={len(self.available)}>"

    # ── Queries ─────────────────────────────────────────────────

    def is_valid(self, choice: str) -> bool:
        """Whether ``choice`` is one of the available options."""
        return choice in self.available

    def get_available(self) -> list[str]:
        return list(self.available)

    def get_current(self) -> str:
        """Current selection, read from the selection file on first use."""
        if self._current is None:
            self._current = self.detect_current()
        return self._current

    def detect_current(self) -> str:
        """Resolve the persisted selection, falling back to the default.

        A missing or unreadable file, or a value that is not an available
        option, yields ``available[0]``.
        """
        for value in read_selections(self.config_path, self.domain):
            if self.is_valid(value):
                return value
            logger.debug("Ignoring persisted %s value %r: not available", self.domain, value)
        return self.default

    @property
    def default(self) -> str:
        return self.available[0] if self.available else ""

    def status(self) -> ManagerStatus:
        """Read-only snapshot for display."""
        return ManagerStatus(
            type=self.domain,
            current=self.get_current(),
            available=list(self.available),
            config=str(self.config_path),
        )

    # ── Mutations ───────────────────────────────────────────────

    def set_current(self, choice: str) -> None:
        """Validate and cache ``choice`` without persisting it.

        Raises:
            InvalidInputError: If ``choice`` is not available.
        """
        if not self.is_valid(choice):
            raise InvalidInputError(f"invalid input for {self.domain}: {choice}")
        self._current = choice

    def save_current(self, choice: str) -> None:
        """Set and persist ``choice``, overwriting the selection file.

        Raises:
            InvalidInputError: If ``choice`` is not available.
            OSError: If the file cannot be written.
        """
        self.set_current(choice)
        write_selection(self.config_path, self.domain, choice)

    def resolve_handler(self, target: str) -> Handler:
        """Option-specific handler, else the default one.

        Raises:
            NoHandlerError: If neither exists.
        """
        handler = self.handlers.get(target) or self.handlers.get(DEFAULT_HANDLER)
        if handler is None:
            raise NoHandlerError(target)
        return handler

    def apply(self, ctx: RunContext, target: str) -> None:
        """Validate ``target``, run its handler, and persist on success.

        Nothing runs and nothing is written when validation fails. A
        failing handler leaves the selection untouched. A failure to
        persist after a successful handler is only a warning: the side
        effect has already happened.

        Raises:
            InvalidTargetError: ``target`` is not an available option.
            NoHandlerError: No handler covers ``target``.
            Exception: Whatever the handler raised.
        """
        out = ctx.output

        if not self.is_valid(target):
            raise InvalidTargetError(self.domain, target)

        handler = self.resolve_handler(target)

        if self.dry_run and not ctx.dry_run:
            ctx = ctx.model_copy(update={"dry_run": True})

        out.progress(f"Applying {self.domain}: {target}")
        logger.info("Applying %s %s (dry_run=%s)", self.domain, target, ctx.dry_run)

        try:
            handler(ctx, target)
        except Exception as e:
            if self.verbose:
                out.error(f"Failed to apply {self.domain} {target}: {e}")
            else:
                out.error(f"Failed to apply {self.domain} {target}")
            logger.debug("Handler for %s %s failed", self.domain, target, exc_info=True)
            raise

        self._current = target
        try:
            self.save_current(target)
        except OSError as e:
            logger.debug("Could not persist %s selection to %s: %s", self.domain, self.config_path, e)
            if self.verbose:
                out.warning(f"Failed to save configuration: {e}")
            else:
                out.warning("Failed to save configuration")

        out.success(f"{self.domain} applied successfully: {target}")
