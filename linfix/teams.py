"""Team lookup and interactive team selection."""

import logging

from rich import print as rprint
from rich.markup import escape

from linfix import prompts
from linfix.models import ErrorKind, Failure, Team
from linfix.providers.base import TicketProvider, TrackerError

log = logging.getLogger(__name__)


def fetch_teams(provider: TicketProvider) -> list[Team]:
    """Return all teams, or an empty list if Linear could not be reached."""
    try:
        return provider.list_teams()
    except TrackerError as exc:
        log.debug("Team fetch failed", exc_info=True)
        rprint(f"[red]Failed to fetch teams:[/red] {escape(str(exc))}")
        return []


def choose_team(provider: TicketProvider, message: str) -> str | Failure:
    """Prompt for one of the available teams and return its id."""
    teams = fetch_teams(provider)
    if not teams:
        return Failure(kind=ErrorKind.REMOTE, message="No teams available to choose from.")

    team_id = prompts.ask_choice(message, [(team.name, team.id) for team in teams])
    if team_id is None:
        return Failure(kind=ErrorKind.CANCELLED, message="Cancelled.")
    return team_id
