"""Tests for configuration loading and merging."""

import os
from pathlib import Path

import pytest

from user_manager.config import UserManagerConfig, load_config
from user_manager.exceptions import ConfigurationError, InvalidConfigError


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Empty home and working directory, no USER_MANAGER_* variables."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    for key in list(os.environ):
        if key.startswith("USER_MANAGER_"):
            monkeypatch.delenv(key)
    return home, work


class TestDefaults:
    def test_defaults(self):
        config = load_config()
        assert config == UserManagerConfig()
        assert config.data_file == "data/users.json"
        assert config.data_path == Path("data/users.json")
        assert config.atomic_writes is False
        assert config.strict_load is False
        assert config.verbosity == "normal"
        assert config.log_file is None

    def test_invalid_verbosity(self):
        with pytest.raises(InvalidConfigError) as exc:
            UserManagerConfig(verbosity="loud")
        assert exc.value.key == "verbosity"

    def test_blank_data_file(self):
        with pytest.raises(InvalidConfigError):
            UserManagerConfig(data_file="  ")


class TestFileSources:
    def test_project_config(self, isolated):
        _, work = isolated
        (work / "user-manager.toml").write_text('data_file = "people.json"\natomic_writes = true\n')

        config = load_config()
        assert config.data_file == "people.json"
        assert config.atomic_writes is True

    def test_explicit_file_overrides_project_and_global(self, isolated, tmp_path):
        home, work = isolated
        (home / ".user-manager.toml").write_text('data_file = "global.json"\nstrict_load = true\n')
        (work / "user-manager.toml").write_text('data_file = "project.json"\n')
        explicit = tmp_path / "explicit.toml"
        explicit.write_text('data_file = "explicit.json"\n')

        config = load_config(config_file=explicit)
        assert config.data_file == "explicit.json"
        # untouched keys still come from lower layers
        assert config.strict_load is True

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Config file not found"):
            load_config(config_file=tmp_path / "nope.toml")

    def test_malformed_toml(self, isolated):
        _, work = isolated
        (work / "user-manager.toml").write_text("data_file = \n")
        with pytest.raises(ConfigurationError, match="Invalid project config"):
            load_config()

    def test_unknown_key(self, isolated):
        _, work = isolated
        (work / "user-manager.toml").write_text("colour = true\n")
        with pytest.raises(ConfigurationError, match="Unknown configuration keys: colour"):
            load_config()

    def test_wrong_type_in_file(self, isolated):
        _, work = isolated
        (work / "user-manager.toml").write_text('atomic_writes = "sometimes"\n')
        with pytest.raises(InvalidConfigError):
            load_config()


class TestEnvironment:
    def test_env_overrides_files(self, isolated, monkeypatch):
        _, work = isolated
        (work / "user-manager.toml").write_text('data_file = "project.json"\n')
        monkeypatch.setenv("USER_MANAGER_DATA_FILE", "env.json")
        monkeypatch.setenv("USER_MANAGER_STRICT_LOAD", "yes")
        monkeypatch.setenv("USER_MANAGER_VERBOSITY", "quiet")

        config = load_config()
        assert config.data_file == "env.json"
        assert config.strict_load is True
        assert config.quiet

    def test_bad_bool(self, monkeypatch):
        monkeypatch.setenv("USER_MANAGER_ATOMIC_WRITES", "maybe")
        with pytest.raises(InvalidConfigError, match="USER_MANAGER_ATOMIC_WRITES"):
            load_config()


class TestOverrides:
    def test_cli_overrides_win(self, monkeypatch):
        monkeypatch.setenv("USER_MANAGER_DATA_FILE", "env.json")
        config = load_config(data_file="cli.json")
        assert config.data_file == "cli.json"

    def test_none_overrides_are_ignored(self, monkeypatch):
        monkeypatch.setenv("USER_MANAGER_DATA_FILE", "env.json")
        config = load_config(data_file=None, log_file=None)
        assert config.data_file == "env.json"

    def test_verbose_and_quiet_flags(self):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"
        assert load_config(verbose=False, quiet=False).verbosity == "normal"
