"""Shell command."""

import sys

import typer

from ..config import UserManagerConfig
from . import app
from ._common import build_repository, console, get_config, handle_errors
from ._shell import InteractiveShell


def run_shell(config: UserManagerConfig) -> None:
    """Run the menu loop against the configured data file."""
    # A terminal gets input() with line editing; pipes and test runners are read directly.
    stream = None if sys.stdin.isatty() else sys.stdin
    shell = InteractiveShell(build_repository(config), console=console, stream=stream)
    with handle_errors():
        shell.run()


@app.command()
def shell(ctx: typer.Context):
    """
    Start the interactive menu.

    [bold cyan]Examples:[/bold cyan]

      user-manager shell

      user-manager --data-file team.json shell
    """
    run_shell(get_config(ctx))
