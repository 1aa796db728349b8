"""Shared test fixtures for User Manager tests."""

import pytest

from user_manager.repository import UserRepository
from user_manager.storage import JsonUserStore


@pytest.fixture
def data_file(tmp_path):
    """Path of a backing file that does not exist yet."""
    return tmp_path / "data" / "users.json"


@pytest.fixture
def store(data_file):
    return JsonUserStore(data_file)


@pytest.fixture
def repository(store):
    return UserRepository(store)


@pytest.fixture
def ann(repository):
    """Repository seeded with Ann; returns her record."""
    return repository.add("Ann", "ann@x.com", 30)
