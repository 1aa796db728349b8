"""Shared CLI helpers."""

import json
from contextlib import contextmanager
from typing import Iterator, List

import typer
from rich.console import Console
from rich.markup import escape

from ..config import UserManagerConfig
from ..exceptions import RecordError, UserManagerError
from ..logging_config import get_logger
from ..models import User
from ..repository import UserRepository
from ..storage import JsonUserStore

console = Console()

logger = get_logger(__name__)


def get_config(ctx: typer.Context) -> UserManagerConfig:
    """Config resolved by the app callback."""
    return ctx.find_root().obj["config"]


def build_repository(config: UserManagerConfig) -> UserRepository:
    store = JsonUserStore(
        config.data_path,
        atomic_writes=config.atomic_writes,
        strict_load=config.strict_load,
    )
    return UserRepository(store)


def print_error(message: str, out: Console = console) -> None:
    out.print(f"[red]Error:[/red] {escape(message)}")


def print_users(users: List[User], out: Console = console) -> None:
    """Print records one per line, or a notice when there are none."""
    if not users:
        out.print("[yellow]No users found.[/yellow]")
        return
    out.print("[bold cyan]User List:[/bold cyan]")
    for user in users:
        out.print(user.describe(), markup=False, highlight=False, soft_wrap=True)


def print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


@contextmanager
def handle_errors() -> Iterator[None]:
    """Map User Manager errors onto exit codes.

    Record errors exit with 1 after printing the message. Storage and
    configuration errors are logged first since they end an otherwise
    long-running session.
    """
    try:
        yield
    except RecordError as e:
        print_error(str(e))
        raise typer.Exit(1)
    except UserManagerError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        print_error(str(e))
        raise typer.Exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        console.print("\n[yellow]Interrupted[/yellow]")
        raise typer.Exit(130)
