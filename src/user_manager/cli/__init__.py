"""CLI entry point. Registers all subcommands."""

import typer

app = typer.Typer(
    name="user-manager",
    help="User Manager - keep a small list of users in a JSON file",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .main import main_callback as _main_callback  # noqa: F401, E402
from .shell import shell as _shell  # noqa: F401, E402
from .users import (  # noqa: F401, E402
    add_user as _add_user,
    delete_user as _delete_user,
    list_all as _list_all,
    search_users as _search_users,
    show_user as _show_user,
    update_user as _update_user,
)


def main() -> None:
    """Console script entry point."""
    app()
