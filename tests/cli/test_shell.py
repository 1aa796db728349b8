"""Tests for the interactive menu loop."""

import io
import json

import pytest
from rich.console import Console

from user_manager.cli._shell import InteractiveShell
from user_manager.exceptions import StorageError
from user_manager.repository import UserRepository
from user_manager.storage import JsonUserStore


def _run(repository, *lines):
    """Drive the shell with the given input lines; return its output."""
    out = io.StringIO()
    console = Console(file=out, width=200, force_terminal=False, color_system=None)
    stream = io.StringIO("".join(f"{line}\n" for line in lines))
    InteractiveShell(repository, console=console, stream=stream).run()
    return out.getvalue()


class TestMenu:
    def test_menu_and_exit(self, repository):
        output = _run(repository, "0")
        assert "=== USER MANAGER CLI ===" in output
        assert "1) Add user" in output
        assert "0) Exit" in output
        assert "Goodbye." in output

    def test_end_of_input_exits(self, repository):
        output = _run(repository)
        assert output.rstrip().endswith("Goodbye.")

    def test_invalid_choice_continues(self, repository):
        output = _run(repository, "9", "0")
        assert "Invalid choice." in output
        assert output.count("=== USER MANAGER CLI ===") == 2


class TestAdd:
    def test_add_and_list(self, repository):
        output = _run(repository, "1", "Ann", "ann@x.com", "30", "5", "0")
        assert "User created:" in output
        assert "- Ann - <ann@x.com>" in output
        assert "30 years old" in output

        users = repository.list_users()
        assert len(users) == 1
        assert f"(ID: {users[0].id})" in output

    def test_add_without_age(self, repository):
        output = _run(repository, "1", "Bob", "bob@x.com", "", "0")
        assert "Age not specified" in output
        assert repository.list_users()[0].age is None

    def test_bad_age_is_reported_and_loop_continues(self, repository):
        output = _run(repository, "1", "Ann", "ann@x.com", "abc", "5", "0")
        assert "Error: age must be an integer in [0,150]" in output
        assert "No users found." in output

    def test_duplicate_email_is_reported(self, repository, ann):
        output = _run(repository, "1", "Bob", "ANN@x.com", "", "0")
        assert "Error: email already exists" in output
        assert len(repository.list_users()) == 1


class TestEdit:
    def test_edit_age_only(self, repository, ann):
        output = _run(repository, "2", ann.id, "", "", "31", "0")
        assert "User updated:" in output
        user = repository.get(ann.id)
        assert (user.name, user.email, user.age) == ("Ann", "ann@x.com", 31)

    def test_blank_answers_change_nothing(self, repository, ann, data_file):
        before = data_file.read_bytes()
        output = _run(repository, "2", ann.id, "", "", "", "0")
        assert "Nothing changed." in output
        assert data_file.read_bytes() == before

    def test_dash_clears_age(self, repository, ann):
        _run(repository, "2", ann.id, "", "", "-", "0")
        assert repository.get(ann.id).age is None

    def test_prompts_show_current_values(self, repository, ann):
        output = _run(repository, "2", ann.id, "", "", "", "0")
        assert "Name [Ann]:" in output
        assert "Email [ann@x.com]:" in output
        assert "Age [30]" in output

    def test_unknown_id(self, repository):
        output = _run(repository, "2", "missing", "0")
        assert "Error: user not found: missing" in output


class TestDelete:
    def test_confirmed_delete(self, repository, ann):
        output = _run(repository, "3", ann.id, "y", "0")
        assert "User deleted." in output
        assert repository.list_users() == []

    def test_declined_delete(self, repository, ann):
        output = _run(repository, "3", ann.id, "n", "0")
        assert "Cancelled." in output
        assert repository.list_users() == [ann]


class TestSearch:
    def test_search(self, repository, ann):
        repository.add("Bob", "bob@x.com")
        output = _run(repository, "4", "BOB", "0")
        assert "- Bob - <bob@x.com>" in output
        assert "- Ann -" not in output

    def test_no_match(self, repository, ann):
        output = _run(repository, "4", "zzz", "0")
        assert "No users found." in output


def test_storage_error_propagates(tmp_path):
    """I/O failures are not swallowed by the loop."""
    path = tmp_path / "users.json"
    path.mkdir()
    repository = UserRepository(JsonUserStore(path))
    with pytest.raises(StorageError):
        _run(repository, "5", "0")


def test_markup_in_names_is_printed_literally(repository):
    repository.add("[bold]Ann[/bold]", "ann@x.com")
    output = _run(repository, "5", "0")
    assert "- [bold]Ann[/bold] - <ann@x.com>" in output
