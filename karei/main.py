"""
karei — CLI entrypoint.

Usage:
    karei --help
    karei theme list
    karei --json font JetBrainsMono
    karei --dry-run security firewall
    karei status
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from karei import __version__
from karei.core.config.loader import load_settings
from karei.core.context import RunContext
from karei.core.errors import EXIT_GENERAL_ERROR, ConfigError, KareiError, UsageError
from karei.core.observability.logging_config import resolve_level, setup_logging
from karei.core.patterns.factories import DOMAINS, build_command, build_manager, get_spec
from karei.ui.cli.output import Output


@click.group()
@click.version_option(version=__version__, prog_name="karei")
@click.option("--verbose", "-v", is_flag=True, help="Show progress and error details.")
@click.option("--quiet", "-q", is_flag=True, help="Only log errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option("--json", "as_json", is_flag=True, help="Machine-readable JSON output.")
@click.option("--plain", is_flag=True, help="Line-oriented key:value output for scripts.")
@click.option("--dry-run", is_flag=True, help="Show commands instead of running them.")
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Accept every consent prompt.")
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Seconds before an external command is killed.",
)
@click.option(
    "--settings",
    "settings_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to settings.yml (default: $XDG_CONFIG_HOME/karei/settings.yml).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    as_json: bool,
    plain: bool,
    dry_run: bool,
    assume_yes: bool,
    timeout: float | None,
    settings_file: Path | None,
) -> None:
    """karei — Linux desktop and developer environment bootstrapper."""
    setup_logging(level=resolve_level(debug=debug, verbose=verbose, quiet=quiet))

    try:
        settings = load_settings(settings_file)
    except ConfigError as e:
        Output().error(str(e))
        sys.exit(e.code)

    if as_json and plain:
        err = UsageError("--json and --plain are mutually exclusive")
        Output().error(str(err))
        sys.exit(err.code)

    if as_json:
        mode = "json"
    elif plain:
        mode = "plain"
    else:
        mode = settings.output

    verbose = verbose or settings.verbose
    ctx.ensure_object(dict)
    ctx.obj["run"] = RunContext(
        verbose=verbose,
        dry_run=dry_run or settings.dry_run,
        assume_yes=assume_yes,
        timeout=timeout if timeout is not None else settings.timeout,
        output=Output(mode=mode, verbose=verbose),
    )


def _run_context(ctx: click.Context) -> RunContext:
    return ctx.obj["run"]


def _fail(run: RunContext, error: Exception) -> None:
    code = error.code if isinstance(error, KareiError) else EXIT_GENERAL_ERROR
    run.output.error_result(error, code)
    sys.exit(code)


def _domain_command(domain: str) -> click.Command:
    spec = get_spec(domain)

    @click.command(
        name=domain,
        help=f"{spec.usage}.\n\n{spec.description}",
        short_help=spec.usage,
    )
    @click.argument("option", required=False, metavar="[OPTION|list]")
    @click.pass_context
    def command(ctx: click.Context, option: str | None) -> None:
        run = _run_context(ctx)
        universal = build_command(domain, verbose=run.verbose, dry_run=run.dry_run)
        try:
            universal.execute(run, [option] if option else [])
        except Exception as e:  # every failure becomes an exit code here
            _fail(run, e)

    return command


for _domain in DOMAINS:
    cli.add_command(_domain_command(_domain))


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show the current selection of every domain."""
    run = _run_context(ctx)
    out = run.output
    snapshots = [build_manager(domain).status() for domain in DOMAINS]

    if out.is_json:
        out.json_result("success", {"domains": {s.type: s.to_dict() for s in snapshots}})
        return

    if out.is_plain:
        for s in snapshots:
            out.plain_key_value(s.type, s.current)
        return

    click.secho("\n📋 karei status", fg="cyan", bold=True)
    for s in snapshots:
        click.echo(f"   {s.type:<10} {s.current}")
    click.echo()


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
