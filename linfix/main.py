"""linfix CLI: all commands."""

import logging
from collections.abc import Callable
from typing import Annotated

import click
import typer
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from typer.core import TyperGroup

from linfix import prompts
from linfix.credentials import CredentialStore, CredentialStoreError
from linfix.models import ErrorKind, Failure
from linfix.providers.base import TicketProvider
from linfix.providers.linear import LinearProvider
from linfix.settings import CONFIG_PATH, LinfixSettings, get_settings
from linfix.teams import choose_team, fetch_teams
from linfix.workflow import build_title, create_issue_and_checkout

USAGE = "Unknown command. Available commands are `login`, `fix`, `checkout` and `update-team`."


class _RouterGroup(TyperGroup):
    """Prints the usage hint for unknown commands instead of failing with a usage error."""

    def resolve_command(self, ctx: click.Context, args: list[str]):
        if args and not args[0].startswith("-") and self.get_command(ctx, args[0]) is None:
            rprint(USAGE)
            ctx.exit(0)
        return super().resolve_command(ctx, args)


app = typer.Typer(cls=_RouterGroup, help="linfix: create a Linear issue and check out its branch in one step")


# ---------------------------------------------------------------------------
# Plumbing
# ---------------------------------------------------------------------------


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("linfix")
    logger.handlers[:] = [RichHandler(console=Console(stderr=True), show_path=False)]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def get_provider(api_key: str, settings: LinfixSettings) -> TicketProvider:
    return LinearProvider(api_key, settings)


def _report(failure: Failure, settings: LinfixSettings) -> None:
    if failure.is_guidance:
        rprint(f"[yellow]{escape(failure.message)}[/yellow]")
    else:
        rprint(f"[red]Error:[/red] {escape(failure.message)}")
    if settings.strict_exit:
        raise typer.Exit(1)


def _run(settings: LinfixSettings, flow: Callable[[CredentialStore], Failure | None]) -> None:
    """Run a command flow against the configured credential store and report how it ended."""
    try:
        failure = flow(CredentialStore(settings.service_name))
    except CredentialStoreError as exc:
        failure = Failure.from_exception(ErrorKind.CREDENTIAL_STORE, exc)
    if failure is not None:
        _report(failure, settings)


def _missing_api_key(hint: str) -> Failure:
    return Failure(kind=ErrorKind.MISSING_CREDENTIAL, message=f"No API key found. {hint}")


# ---------------------------------------------------------------------------
# Flows
# ---------------------------------------------------------------------------


def _login(settings: LinfixSettings, store: CredentialStore) -> Failure | None:
    api_key = prompts.ask_secret("Enter your Linear API key:", "API key is required!")
    if api_key is None:
        return Failure(kind=ErrorKind.CANCELLED, message="Cancelled.")
    store.set_api_key(api_key)
    rprint("[green]✓[/green] Linear API key stored successfully.")

    team_id = choose_team(get_provider(api_key, settings), "Select your default team:")
    if isinstance(team_id, Failure):
        return team_id
    store.set_default_team(team_id)
    rprint("[green]✓[/green] Default team saved.")
    return None


def _fix(
    settings: LinfixSettings,
    store: CredentialStore,
    words: list[str],
    select_team: bool,
) -> Failure | None:
    api_key = store.api_key
    if not api_key:
        return _missing_api_key("Please login using `linfix login`.")

    title = build_title(words)
    if not title:
        return Failure(kind=ErrorKind.INVALID_INPUT, message="Please provide a brief issue title for the fix command.")

    # --select-team picks a team for this issue only; the stored default is left alone.
    if select_team:
        provider = get_provider(api_key, settings)
        team_id = choose_team(provider, "Select a team for this issue:")
        if isinstance(team_id, Failure):
            return team_id
    else:
        team_id = store.default_team
        if not team_id:
            return Failure(
                kind=ErrorKind.MISSING_CREDENTIAL,
                message="No default team found. Please use `linfix update-team` to set your default team.",
            )
        provider = get_provider(api_key, settings)

    result = create_issue_and_checkout(provider, team_id, title, settings)
    return result if isinstance(result, Failure) else None


def _update_team(settings: LinfixSettings, store: CredentialStore) -> Failure | None:
    api_key = store.api_key
    if not api_key:
        return _missing_api_key("Please use `linfix login` first.")

    team_id = choose_team(get_provider(api_key, settings), "Select your new default team:")
    if isinstance(team_id, Failure):
        return team_id
    store.set_default_team(team_id)
    rprint("[green]✓[/green] Default team updated successfully.")
    return None


def _list_teams(settings: LinfixSettings, store: CredentialStore) -> Failure | None:
    api_key = store.api_key
    if not api_key:
        return _missing_api_key("Please login using `linfix login`.")

    teams = fetch_teams(get_provider(api_key, settings))
    if not teams:
        return Failure(kind=ErrorKind.REMOTE, message="No teams available.")
    default_team = store.default_team

    table = Table(title="Teams")
    table.add_column("Default")
    table.add_column("Key", style="cyan")
    table.add_column("Name")
    table.add_column("ID", style="dim")

    for t in teams:
        table.add_row("✓" if t.id == default_team else "", t.key or "—", t.name, t.id)

    rprint(table)
    return None


def _config_show(settings: LinfixSettings, store: CredentialStore) -> Failure | None:
    def mask(val: str | None, prefix: str = "") -> str:
        if val is None:
            return "[dim](not set)[/dim]"
        if len(val) <= 5:
            return "***"
        return f"{prefix}...{val[-5:]}"

    table = Table(title="linfix Configuration")
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("config_file", str(CONFIG_PATH) if CONFIG_PATH.exists() else "[dim](not found)[/dim]")
    for field, value in settings.model_dump().items():
        table.add_row(field, escape(str(value)) if value is not None else "[dim](not set)[/dim]")
    table.add_row("api_key", mask(store.api_key, prefix="lin_api_"))
    table.add_row("default_team", escape(store.default_team or "") or "[dim](not set)[/dim]")

    rprint(table)
    return None


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output to stderr")] = False,
) -> None:
    _configure_logging(verbose)
    if ctx.invoked_subcommand is None:
        rprint(USAGE)


@app.command("login")
def login() -> None:
    """Store your Linear API key and choose a default team."""
    settings = get_settings()
    _run(settings, lambda store: _login(settings, store))


@app.command("fix")
def fix(
    title: Annotated[list[str] | None, typer.Argument(help="Issue title words", show_default=False)] = None,
    select_team: Annotated[
        bool,
        typer.Option("--select-team", "-s", help="Choose the team for this issue instead of using the default"),
    ] = False,
) -> None:
    """Create a Linear issue assigned to you and check out its branch."""
    settings = get_settings()
    _run(settings, lambda store: _fix(settings, store, title or [], select_team))


app.command("checkout", help="Alias for fix.")(fix)


@app.command("update-team")
def update_team() -> None:
    """Choose a new default team."""
    settings = get_settings()
    _run(settings, lambda store: _update_team(settings, store))


@app.command("list-teams")
def list_teams() -> None:
    """List teams visible to your API key."""
    settings = get_settings()
    _run(settings, lambda store: _list_teams(settings, store))


@app.command("config-show")
def config_show() -> None:
    """Show resolved configuration (masks the API key)."""
    settings = get_settings()
    _run(settings, lambda store: _config_show(settings, store))
