"""
Command executor — the one place handlers run external processes.

Every handler goes through this class instead of calling ``subprocess``
directly, so dry-run, verbosity and ``sudo`` behave the same everywhere:

    execute              run; stream child output only when verbose
    execute_sudo         same, prefixed with ``sudo``
    execute_with_output  capture combined stdout+stderr and return it
    execute_silent       run with all output discarded (probes)
    command_exists       PATH lookup

Failures raise ``CommandError``. There are no retries and no exit-code
interpretation beyond zero / non-zero.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
import time

import click

from karei.core.errors import (
    EXIT_PERMISSION_ERROR,
    EXIT_TIMEOUT_ERROR,
    CommandError,
)

logger = logging.getLogger(__name__)


def format_command(cmd: list[str]) -> str:
    """Render an argv list the way a user would type it."""
    return shlex.join(cmd)


class CommandExecutor:
    """Run external commands with shared dry-run / verbose semantics.

    Args:
        verbose: Echo each command and stream the child's stdout/stderr.
        dry_run: Print the would-be command line instead of running it.
        timeout: Seconds before the child is killed; None waits forever.
        keep_stdout_clean: Send announcements and streamed child output to
            stderr, leaving stdout to the caller (JSON mode).
    """

    def __init__(
        self,
        verbose: bool = False,
        dry_run: bool = False,
        timeout: float | None = None,
        keep_stdout_clean: bool = False,
    ):
        self.verbose = verbose
        self.dry_run = dry_run
        self.timeout = timeout
        self.keep_stdout_clean = keep_stdout_clean

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__} verbose={self.verbose} "
            f"dry_run={self.dry_run} timeout={self.timeout}>"
        )

    def execute(self, name: str, *args: str) -> None:
        """Run a command. Output reaches the terminal only when verbose."""
        cmd = [name, *args]
        if self.dry_run:
            self._announce_dry_run(cmd)
            return

        if self.verbose:
            click.echo(f"Running: {format_command(cmd)}", err=self.keep_stdout_clean)
            # None inherits the parent stream; fd 2 diverts stdout to stderr
            out_sink = 2 if self.keep_stdout_clean else None
            err_sink = None
        else:
            out_sink = err_sink = subprocess.DEVNULL

        # stdin is inherited so sudo can prompt for a password
        self._run(cmd, stdout=out_sink, stderr=err_sink)

    def execute_sudo(self, name: str, *args: str) -> None:
        """Run a command with root privileges via ``sudo``."""
        self.execute("sudo", name, *args)

    def execute_with_output(self, name: str, *args: str) -> str:
        """Run a command and return its combined stdout+stderr."""
        cmd = [name, *args]
        if self.dry_run:
            self._announce_dry_run(cmd)
            return ""

        result = self._run(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
        )
        return result.stdout or ""

    def execute_silent(self, name: str, *args: str) -> None:
        """Run a command with no output at all; used for existence probes."""
        if self.dry_run:
            return
        self._run(
            [name, *args],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )

    def command_exists(self, name: str) -> bool:
        """Whether ``name`` resolves to an executable on PATH."""
        return shutil.which(name) is not None

    # ── internals ───────────────────────────────────────────────

    def _announce_dry_run(self, cmd: list[str]) -> None:
        click.echo(f"DRY RUN: {' '.join(cmd)}", err=self.keep_stdout_clean)

    def _run(self, cmd: list[str], **kwargs) -> subprocess.CompletedProcess:
        line = format_command(cmd)
        logger.debug("Executing: %s (timeout=%s)", line, self.timeout)
        start = time.monotonic()

        try:
            result = subprocess.run(
                cmd,
                text=True,
                timeout=self.timeout,
                check=False,
                **kwargs,
            )
        except subprocess.TimeoutExpired as e:
            raise CommandError(
                cmd,
                f"{line}: timed out after {self.timeout}s",
                code=EXIT_TIMEOUT_ERROR,
                cause=e,
            ) from e
        except FileNotFoundError as e:
            raise CommandError(cmd, f"{cmd[0]}: command not found", cause=e) from e
        except PermissionError as e:
            raise CommandError(
                cmd, f"{cmd[0]}: permission denied", code=EXIT_PERMISSION_ERROR, cause=e
            ) from e
        except OSError as e:
            raise CommandError(cmd, f"{line}: cannot start", cause=e) from e

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.debug("%s exited %d in %dms", cmd[0], result.returncode, elapsed_ms)

        if result.returncode != 0:
            output = result.stdout if isinstance(result.stdout, str) else ""
            raise CommandError(
                cmd,
                f"{line}: exited with code {result.returncode}",
                returncode=result.returncode,
                output=output,
            )
        return result
