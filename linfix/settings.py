"""Settings resolution: environment and .env over ~/.config/linfix/config.toml over defaults."""

from functools import lru_cache
from pathlib import Path

import tomlkit
import typer
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

CONFIG_PATH = Path.home() / ".config" / "linfix" / "config.toml"

DEFAULT_SERVICE_NAME = "linear-cli-tool"


class LinfixSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LINFIX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Credential store namespace (keyring service name)
    service_name: str = DEFAULT_SERVICE_NAME

    # Linear
    api_url: str = "https://api.linear.app/graphql"
    timeout: float = 30

    # Issue defaults for fix/checkout
    issue_description: str = "Generated from linfix cli"
    estimate: int | None = 1
    priority: int | None = Field(default=2, ge=0, le=4)  # 0 none, 1 urgent ... 4 low
    state_match: str = "Progress"  # case-sensitive substring of the initial state's name
    assign_to_viewer: bool = True

    git_executable: str = "git"

    # Exit 1 on failure instead of always exiting 0
    strict_exit: bool = False

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # init kwargs carry the TOML file values, so they rank below the environment
        return env_settings, dotenv_settings, init_settings, file_secret_settings


@lru_cache(maxsize=1)
def _load_toml() -> tomlkit.TOMLDocument:
    """Load ~/.config/linfix/config.toml, returning empty document if missing."""
    if not CONFIG_PATH.exists():
        return tomlkit.document()
    return tomlkit.load(CONFIG_PATH.open())


def get_settings() -> LinfixSettings:
    """Return settings resolved from (highest to lowest):

    1. LINFIX_* environment variables
    2. .env in cwd
    3. ~/.config/linfix/config.toml
    4. defaults
    """
    toml_config = _load_toml().unwrap()
    try:
        return LinfixSettings(**toml_config)
    except ValidationError as exc:
        typer.echo(f"Invalid configuration (check {CONFIG_PATH} and LINFIX_* variables):\n{exc}")
        raise typer.Exit(1) from exc
