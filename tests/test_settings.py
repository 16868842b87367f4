"""Tests for linfix.settings: precedence and validation."""

from pathlib import Path

import click
import pytest
import tomlkit

import linfix.settings as settings_module
from linfix.settings import DEFAULT_SERVICE_NAME, LinfixSettings, get_settings


def _write_config(path: Path, config: dict) -> None:
    path.write_text(tomlkit.dumps(config))


class TestDefaults:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LINFIX_SERVICE_NAME")
        s = get_settings()
        assert s.service_name == DEFAULT_SERVICE_NAME == "linear-cli-tool"
        assert s.api_url == "https://api.linear.app/graphql"
        assert s.estimate == 1
        assert s.priority == 2
        assert s.state_match == "Progress"
        assert s.assign_to_viewer is True
        assert s.git_executable == "git"
        assert s.strict_exit is False


class TestPrecedence:
    def test_toml_values_used(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LINFIX_SERVICE_NAME")
        _write_config(settings_module.CONFIG_PATH, {"service_name": "from-toml", "priority": 3})
        s = get_settings()
        assert s.service_name == "from-toml"
        assert s.priority == 3

    def test_env_overrides_toml(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_config(settings_module.CONFIG_PATH, {"service_name": "from-toml", "estimate": 3})
        monkeypatch.setenv("LINFIX_SERVICE_NAME", "from-env")
        s = get_settings()
        assert s.service_name == "from-env"
        assert s.estimate == 3

    def test_unknown_toml_keys_ignored(self) -> None:
        _write_config(settings_module.CONFIG_PATH, {"not_a_setting": "x"})
        assert isinstance(get_settings(), LinfixSettings)

    def test_toml_is_cached(self) -> None:
        _write_config(settings_module.CONFIG_PATH, {"state_match": "Doing"})
        assert get_settings().state_match == "Doing"
        _write_config(settings_module.CONFIG_PATH, {"state_match": "Started"})
        assert get_settings().state_match == "Doing"


class TestValidation:
    def test_out_of_range_priority_exits(self) -> None:
        _write_config(settings_module.CONFIG_PATH, {"priority": 9})
        with pytest.raises((SystemExit, click.exceptions.Exit)):
            get_settings()

    def test_env_bool_parsed(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LINFIX_STRICT_EXIT", "1")
        monkeypatch.setenv("LINFIX_ASSIGN_TO_VIEWER", "false")
        s = get_settings()
        assert s.strict_exit is True
        assert s.assign_to_viewer is False
