"""One-shot record commands: add, update, delete, show, search, list."""

from typing import Optional

import typer

from ..exceptions import ValidationError
from ..validation import parse_optional_age
from . import app
from ._common import (
    build_repository,
    console,
    get_config,
    handle_errors,
    print_json,
    print_users,
)


@app.command("add")
def add_user(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", "-n", help="Display name"),
    email: str = typer.Option(..., "--email", "-e", help="Email address (unique, any case)"),
    age: Optional[str] = typer.Option(None, "--age", "-a", help="Age in years, 0-150"),
    json_output: bool = typer.Option(False, "--json", help="Print the new record as JSON"),
):
    """
    Add a user.

    [bold cyan]Examples:[/bold cyan]

      user-manager add --name Ann --email ann@example.com --age 30
    """
    repository = build_repository(get_config(ctx))
    with handle_errors():
        user = repository.add(name, email, parse_optional_age(age))

    if json_output:
        print_json(user.to_dict())
        return
    console.print("[green]User created:[/green]")
    console.print(user.describe(), markup=False, highlight=False, soft_wrap=True)


@app.command("update")
def update_user(
    ctx: typer.Context,
    user_id: str = typer.Argument(..., help="Id of the user to change"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="New name"),
    email: Optional[str] = typer.Option(None, "--email", "-e", help="New email address"),
    age: Optional[str] = typer.Option(None, "--age", "-a", help="New age, 0-150"),
    clear_age: bool = typer.Option(False, "--clear-age", help="Remove the stored age"),
    json_output: bool = typer.Option(False, "--json", help="Print the record as JSON"),
):
    """
    Change fields of an existing user. Fields not given are left as they are.
    """
    if age is not None and clear_age:
        console.print("[red]Error:[/red] --age and --clear-age are mutually exclusive")
        raise typer.Exit(1)

    repository = build_repository(get_config(ctx))
    with handle_errors():
        updates: dict = {}
        if name is not None:
            updates["name"] = name
        if email is not None:
            updates["email"] = email
        if clear_age:
            updates["age"] = None
        elif age is not None:
            if not age.strip():
                raise ValidationError("age must not be blank, use --clear-age", field="age")
            updates["age"] = parse_optional_age(age)

        if not updates:
            # still report an unknown id
            user = repository.get(user_id)
            changed = False
        else:
            before = repository.get(user_id)
            user = repository.update(user_id, updates)
            changed = user != before

    if json_output:
        print_json(user.to_dict())
        return
    if not changed:
        console.print("Nothing changed.")
        return
    console.print("[green]User updated:[/green]")
    console.print(user.describe(), markup=False, highlight=False, soft_wrap=True)


@app.command("delete")
def delete_user(
    ctx: typer.Context,
    user_id: str = typer.Argument(..., help="Id of the user to remove"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """Delete a user."""
    repository = build_repository(get_config(ctx))
    with handle_errors():
        user = repository.get(user_id)
        if not yes and not typer.confirm(f"Delete {user.name} <{user.email}>?"):
            console.print("Cancelled.")
            raise typer.Exit(0)
        repository.delete(user.id)
    console.print("[green]User deleted.[/green]")


@app.command("show")
def show_user(
    ctx: typer.Context,
    user_id: str = typer.Argument(..., help="Id of the user"),
    json_output: bool = typer.Option(False, "--json", help="Print the record as JSON"),
):
    """Show one user."""
    repository = build_repository(get_config(ctx))
    with handle_errors():
        user = repository.get(user_id)

    if json_output:
        print_json(user.to_dict())
        return
    console.print(user.describe(), markup=False, highlight=False, soft_wrap=True)


@app.command("search")
def search_users(
    ctx: typer.Context,
    keyword: str = typer.Argument("", help="Text to look for in id, name or email"),
    json_output: bool = typer.Option(False, "--json", help="Print matches as JSON"),
):
    """
    Find users whose id, name or email contains KEYWORD (any case).

    [bold cyan]Examples:[/bold cyan]

      user-manager search ann

      user-manager search example.com --json
    """
    repository = build_repository(get_config(ctx))
    with handle_errors():
        users = repository.search(keyword)

    if json_output:
        print_json([u.to_dict() for u in users])
        return
    print_users(users)


@app.command("list")
def list_all(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Print users as JSON"),
):
    """List every user in insertion order."""
    repository = build_repository(get_config(ctx))
    with handle_errors():
        users = repository.list_users()

    if json_output:
        print_json([u.to_dict() for u in users])
        return
    print_users(users)
