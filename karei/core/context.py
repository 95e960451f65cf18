"""
Run context — the explicit per-invocation configuration.

Built once by the entry point and passed to every handler as its first
argument. Nothing in here is mutated after construction, so handlers can
read it freely without coordinating.

    - CLI:    main.py → RunContext(output=..., verbose=..., dry_run=...)
    - Tests:  RunContext() or RunContext(output=Output("json"))
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from karei.adapters.shell.command import CommandExecutor
from karei.adapters.shell.service import ServiceController
from karei.ui.cli.output import Output


class RunContext(BaseModel):
    """Everything a handler needs besides its target."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    verbose: bool = False
    dry_run: bool = False
    assume_yes: bool = False  # --yes: accept every consent prompt
    timeout: float | None = None  # seconds; None = wait for the child forever
    output: Output = Field(default_factory=Output)

    def executor(self, verbose: bool | None = None) -> CommandExecutor:
        """A CommandExecutor bound to this context's flags.

        In JSON mode its own announcements go to stderr so stdout carries
        only the result object.
        """
        return CommandExecutor(
            verbose=self.verbose if verbose is None else verbose,
            dry_run=self.dry_run,
            timeout=self.timeout,
            keep_stdout_clean=self.output.is_json,
        )

    def services(self) -> ServiceController:
        """A ServiceController bound to this context's flags."""
        return ServiceController(self.executor())
