"""Interactive menu loop.

The shell owns presentation only: it collects raw strings, hands them to the
repository and renders the results. Record errors are printed and the loop
carries on; storage errors propagate to the caller.
"""

from typing import Callable, Dict, Optional, TextIO

from rich.console import Console

from ..exceptions import RecordError
from ..models import User
from ..repository import UserRepository
from ..validation import parse_optional_age
from ._common import print_error, print_users

MENU = (
    "1) Add user",
    "2) Edit user",
    "3) Delete user",
    "4) Search users",
    "5) List all users",
    "0) Exit",
)

CLEAR_AGE = "-"


class InteractiveShell:
    """Menu-driven front end over a UserRepository.

    Args:
        repository: Target of every menu action.
        console: Where the menu, prompts and results are written.
        stream: Input stream. When None, prompts read from the terminal
            through ``input()``.
    """

    def __init__(
        self,
        repository: UserRepository,
        console: Console,
        stream: Optional[TextIO] = None,
    ):
        self.repository = repository
        self.console = console
        self.stream = stream
        self._actions: Dict[str, Callable[[], None]] = {
            "1": self.add_user,
            "2": self.edit_user,
            "3": self.delete_user,
            "4": self.search_users,
            "5": self.list_users,
        }

    def run(self) -> None:
        """Loop until the user picks 0 or input ends."""
        while True:
            self.print_menu()
            try:
                choice = self.ask("Enter your choice: ").strip()
                if choice == "0":
                    self.console.print("Goodbye.")
                    return
                action = self._actions.get(choice)
                if action is None:
                    self.console.print("[yellow]Invalid choice.[/yellow]")
                    continue
                action()
            except RecordError as e:
                print_error(str(e), out=self.console)
            except EOFError:
                self.console.print()
                self.console.print("Goodbye.")
                return

    def print_menu(self) -> None:
        self.console.print()
        self.console.print("[bold cyan]=== USER MANAGER CLI ===[/bold cyan]")
        for line in MENU:
            self.console.print(line)

    def ask(self, prompt: str) -> str:
        """Read one line of input.

        Raises:
            EOFError: When the input stream is exhausted.
        """
        answer = self.console.input(prompt, markup=False, stream=self.stream)
        if self.stream is not None:
            # readline() gives "" only at end of input
            if answer == "":
                raise EOFError
            answer = answer.rstrip("\r\n")
        return answer

    # -------------------------------------- actions --------------------------------------

    def add_user(self) -> None:
        name = self.ask("Name: ")
        email = self.ask("Email: ")
        age = parse_optional_age(self.ask("Age (optional): "))
        user = self.repository.add(name, email, age)
        self._show("[green]User created:[/green]", user)

    def edit_user(self) -> None:
        current = self.repository.get(self.ask("User ID: "))
        self._show("Editing:", current)
        self.console.print("[dim]Leave a field blank to keep its current value.[/dim]")

        updates: dict = {}
        name = self.ask(f"Name [{current.name}]: ")
        if name.strip():
            updates["name"] = name
        email = self.ask(f"Email [{current.email}]: ")
        if email.strip():
            updates["email"] = email
        shown_age = current.age if current.age is not None else "not specified"
        age_raw = self.ask(f"Age [{shown_age}] ('{CLEAR_AGE}' to clear): ").strip()
        if age_raw == CLEAR_AGE:
            updates["age"] = None
        elif age_raw:
            updates["age"] = parse_optional_age(age_raw)

        if not updates:
            self.console.print("Nothing changed.")
            return
        updated = self.repository.update(current.id, updates)
        if updated == current:
            self.console.print("Nothing changed.")
            return
        self._show("[green]User updated:[/green]", updated)

    def delete_user(self) -> None:
        user = self.repository.get(self.ask("User ID: "))
        answer = self.ask(f"Delete {user.name} <{user.email}>? (y/N): ")
        if answer.strip().lower() not in ("y", "yes"):
            self.console.print("Cancelled.")
            return
        self.repository.delete(user.id)
        self.console.print("[green]User deleted.[/green]")

    def search_users(self) -> None:
        keyword = self.ask("Keyword: ")
        print_users(self.repository.search(keyword), out=self.console)

    def list_users(self) -> None:
        print_users(self.repository.list_users(), out=self.console)

    def _show(self, label: str, user: User) -> None:
        self.console.print(label)
        self.console.print(user.describe(), markup=False, highlight=False, soft_wrap=True)
