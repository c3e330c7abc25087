from __future__ import annotations

import os
import sys
from pathlib import Path

import click
import typer

from knr import __version__
from knr.core.config import build_configuration, load_file_config
from knr.core.errors import ErrorCode
from knr.core.result import Err
from knr.output.console import ConsoleProtocol, RichConsole
from knr.output.errors import open_error_exit_code, print_open_error
from knr.platform.paths import user_config_path
from knr.services.newrelease import OpenSummary, ReleaseOpener

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _console() -> ConsoleProtocol:
    return RichConsole()


_ABI_NOTES = {"none": "no ABI data", "reused": "ABI reused", "fetched": "ABI fetched"}


def _summary_notes(summary: OpenSummary) -> str:
    notes = [_ABI_NOTES[summary.abi_action]]
    if summary.backport:
        notes.insert(0, "backport synced")
    return ", ".join(notes)


@app.command(
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "help_option_names": ["-h", "--help"],
    },
)
def open_release(
    ctx: typer.Context,
    dry_run: bool = typer.Option(
        False, "--dry-run", "-d", help="Show the commands that would run, change nothing."
    ),
    reuse_abi: bool = typer.Option(
        False, "--reuse-abi", "-r", help="Rename the previous ABI directory instead of fetching."
    ),
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Start a new release: sync backport, refresh ABI, open the changelog, commit.

    Run from the top of a kernel tree whose changelog is closed. Needs DEBEMAIL
    (matching KNR_MAILENFORCE); CHROOT prefixes the debian/rules calls.
    """
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=int(ErrorCode.OK))

    if ctx.args:
        typer.echo(f"error: unknown argument: {ctx.args[0]}", err=True)
        typer.echo(ctx.get_help(), err=True)
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    console = _console()

    file_config = load_file_config(user_config_path())
    if isinstance(file_config, Err):
        console.error(f"configuration error: {file_config.error.message}")
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    config = build_configuration(
        dry_run=dry_run,
        reuse_abi=reuse_abi,
        environ=os.environ,
        file_config=file_config.value,
    )

    result = ReleaseOpener(config=config, console=console).run(Path.cwd())
    if isinstance(result, Err):
        print_open_error(result.error, console)
        raise typer.Exit(code=open_error_exit_code(result.error))

    summary = result.value
    notes = _summary_notes(summary)
    if summary.dry_run:
        console.success(f"dry-run complete for {summary.version} ({notes}), nothing changed")
    else:
        console.success(f"new release opened after {summary.version} ({notes})")


def main() -> None:
    """Console entry point. Usage errors exit 1 like every other failure."""
    try:
        code = app(standalone_mode=False)
    except click.UsageError as e:
        e.show()
        sys.exit(int(ErrorCode.FAILURE))
    except click.exceptions.Abort:
        typer.echo("Aborted!", err=True)
        sys.exit(int(ErrorCode.FAILURE))
    sys.exit(code or int(ErrorCode.OK))
