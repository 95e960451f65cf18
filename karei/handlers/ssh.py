"""
SSH handlers — make sure an ed25519 key exists for git hosting.

GitHub, GitLab and Bitbucket all use the same key; the provider only
changes the messages. Custom configurations are not implemented.
"""

from __future__ import annotations

import getpass
import socket
from pathlib import Path

from karei.core.context import RunContext
from karei.core.errors import CommandError, NotImplementedFeatureError

SSH_TARGETS = ("github", "gitlab", "bitbucket", "custom")

PROVIDER_NAMES = {
    "github": "GitHub",
    "gitlab": "GitLab",
    "bitbucket": "Bitbucket",
}

KEY_NAME = "id_ed25519"


def ssh_key_path() -> Path:
    return Path.home() / ".ssh" / KEY_NAME


def key_comment(ctx: RunContext) -> str:
    """git's user.email, else ``user@host``."""
    executor = ctx.executor()
    if executor.command_exists("git") and not ctx.dry_run:
        try:
            email = executor.execute_with_output("git", "config", "--get", "user.email").strip()
        except CommandError:
            email = ""
        if email:
            return email
    return f"{getpass.getuser()}@{socket.gethostname()}"


def setup_ssh_key(ctx: RunContext, provider: str = "github") -> None:
    """Generate ``~/.ssh/id_ed25519`` unless it already exists.

    Raises:
        CommandError: ssh-keygen failed or is not installed.
    """
    out = ctx.output
    label = PROVIDER_NAMES.get(provider, PROVIDER_NAMES["github"])
    out.progress(f"Setting up {label} SSH key...")

    key_path = ssh_key_path()
    if key_path.is_file():
        out.success("SSH key already exists")
        return

    if not ctx.dry_run:
        key_path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)

    ctx.executor(verbose=True).execute(
        "ssh-keygen", "-t", "ed25519", "-C", key_comment(ctx), "-f", str(key_path), "-N", ""
    )
    out.success(f"SSH key created: {key_path}.pub, add it to {label}")


def setup_custom_ssh(ctx: RunContext, _target: str = "") -> None:
    ctx.output.progress("Setting up custom SSH configuration...")
    raise NotImplementedFeatureError("custom SSH configuration not implemented")
