"""App callback: global options, configuration and logging."""

from pathlib import Path
from typing import Optional

import typer

from .. import __version__
from ..config import load_config
from ..exceptions import UserManagerError
from ..logging_config import setup_logging
from . import app
from ._common import console, print_error


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"user-manager {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    data_file: Optional[Path] = typer.Option(
        None,
        "--data-file",
        "-d",
        help="JSON file holding the users (default: data/users.json)",
        dir_okay=False,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file path (TOML format)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also write log records to this file",
        dir_okay=False,
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the version and exit",
        is_eager=True,
        callback=_version_callback,
    ),
):
    """
    Manage a small list of users stored in a JSON file.

    Without a command, starts the interactive menu.

    [bold cyan]Examples:[/bold cyan]

      user-manager

      user-manager add --name Ann --email ann@example.com --age 30

      user-manager --data-file team.json search ann
    """
    if verbose and quiet:
        console.print("[red]Error:[/red] --verbose and --quiet are mutually exclusive")
        raise typer.Exit(1)

    try:
        settings = load_config(
            config_file=config,
            data_file=str(data_file) if data_file is not None else None,
            log_file=str(log_file) if log_file is not None else None,
            verbose=verbose,
            quiet=quiet,
        )
    except UserManagerError as e:
        print_error(str(e))
        raise typer.Exit(1)

    logger = setup_logging(
        verbose=settings.verbose, quiet=settings.quiet, log_file=settings.log_file
    )
    logger.debug(f"Loaded settings: {settings}")

    ctx.obj = {"config": settings}

    if ctx.invoked_subcommand is None:
        from .shell import run_shell

        run_shell(settings)
