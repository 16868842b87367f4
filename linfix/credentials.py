"""API key and default team, kept in the OS credential store via keyring."""

import logging

import keyring
from keyring.errors import KeyringError

log = logging.getLogger(__name__)

API_KEY = "api-key"
DEFAULT_TEAM = "default-team"


class CredentialStoreError(RuntimeError):
    pass


class CredentialStore:
    """Two secrets under one keyring service: the Linear API key and the default team id.

    Values are stored and returned as-is. Nothing is ever deleted.
    """

    def __init__(self, service_name: str) -> None:
        self._service = service_name

    @property
    def service_name(self) -> str:
        return self._service

    def get(self, key: str) -> str | None:
        log.debug("Reading %s from keyring service %s", key, self._service)
        try:
            return keyring.get_password(self._service, key)
        except KeyringError as exc:
            raise CredentialStoreError(f"Credential store unavailable: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        log.debug("Writing %s to keyring service %s", key, self._service)
        try:
            keyring.set_password(self._service, key, value)
        except KeyringError as exc:
            raise CredentialStoreError(f"Credential store unavailable: {exc}") from exc

    @property
    def api_key(self) -> str | None:
        return self.get(API_KEY)

    @property
    def default_team(self) -> str | None:
        return self.get(DEFAULT_TEAM)

    def set_api_key(self, api_key: str) -> None:
        self.set(API_KEY, api_key)

    def set_default_team(self, team_id: str) -> None:
        self.set(DEFAULT_TEAM, team_id)
