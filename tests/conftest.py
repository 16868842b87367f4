"""Shared test fixtures."""

import uuid
from pathlib import Path

import keyring
import pytest
from keyring.backend import KeyringBackend
from keyring.errors import PasswordDeleteError

import linfix.settings as settings_module
from linfix.credentials import CredentialStore
from linfix.models import CreatedIssue, Team, TeamState
from linfix.settings import LinfixSettings


class MemoryKeyring(KeyringBackend):
    """In-process keyring so tests never touch the real OS credential store."""

    priority = 1  # type: ignore[assignment]

    def __init__(self) -> None:
        super().__init__()
        self.passwords: dict[tuple[str, str], str] = {}

    def get_password(self, service: str, username: str) -> str | None:
        return self.passwords.get((service, username))

    def set_password(self, service: str, username: str, password: str) -> None:
        self.passwords[(service, username)] = password

    def delete_password(self, service: str, username: str) -> None:
        if self.passwords.pop((service, username), None) is None:
            raise PasswordDeleteError(username)


@pytest.fixture(autouse=True)
def memory_keyring():
    previous = keyring.get_keyring()
    backend = MemoryKeyring()
    keyring.set_keyring(backend)
    yield backend
    keyring.set_keyring(previous)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """No user config file, no LINFIX_* leakage, and a fresh keyring namespace per test."""
    for name in LinfixSettings.model_fields:
        monkeypatch.delenv(f"LINFIX_{name.upper()}", raising=False)
    monkeypatch.setattr(settings_module, "CONFIG_PATH", tmp_path / "config.toml")
    monkeypatch.setenv("LINFIX_SERVICE_NAME", f"linfix-test-{uuid.uuid4().hex}")
    settings_module._load_toml.cache_clear()
    yield
    settings_module._load_toml.cache_clear()


@pytest.fixture
def store() -> CredentialStore:
    return CredentialStore(settings_module.get_settings().service_name)


@pytest.fixture
def sample_teams() -> list[Team]:
    return [
        Team(id="T1", name="Core", key="COR"),
        Team(id="T2", name="Growth", key="GRO"),
    ]


@pytest.fixture
def sample_states() -> list[TeamState]:
    return [
        TeamState(id="s_backlog", name="Backlog", type="backlog"),
        TeamState(id="s_progress", name="In Progress", type="started"),
        TeamState(id="s_review", name="In Progress - Review", type="started"),
    ]


@pytest.fixture
def created_issue() -> CreatedIssue:
    return CreatedIssue(
        id="issue_42",
        identifier="ENG-42",
        title="add retry logic",
        url="https://linear.app/acme/issue/ENG-42/add-retry-logic",
        branch_name="eng-42-add-retry-logic",
    )
