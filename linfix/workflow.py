"""Issue creation followed by branch checkout."""

import logging
from collections.abc import Iterable

from rich import print as rprint
from rich.markup import escape

from linfix.git import GitError, checkout_new_branch
from linfix.models import CreatedIssue, ErrorKind, Failure, IssueDraft, TeamState
from linfix.providers.base import TicketProvider, TrackerError
from linfix.settings import LinfixSettings

log = logging.getLogger(__name__)


def build_title(words: Iterable[str]) -> str:
    """Join CLI words with single spaces, collapsing any runs of whitespace."""
    return " ".join(" ".join(words).split())


def find_state_id(states: Iterable[TeamState], needle: str) -> str | None:
    """Return the id of the first state whose name contains needle (case-sensitive)."""
    return next((state.id for state in states if needle in state.name), None)


def create_issue_and_checkout(
    provider: TicketProvider,
    team_id: str,
    title: str,
    settings: LinfixSettings,
) -> CreatedIssue | Failure:
    """Create an issue assigned to the viewer and check out the branch Linear names for it."""
    try:
        assignee_id = provider.get_viewer().id if settings.assign_to_viewer else None
        state_id = find_state_id(provider.list_team_states(team_id), settings.state_match)
        if state_id is None:
            log.debug("No state matching %r in team %s; using the team default", settings.state_match, team_id)

        issue = provider.create_issue(
            IssueDraft(
                team_id=team_id,
                title=title,
                description=settings.issue_description,
                assignee_id=assignee_id,
                state_id=state_id,
                estimate=settings.estimate,
                priority=settings.priority,
            )
        )
    except TrackerError as exc:
        log.debug("Issue creation failed", exc_info=True)
        return Failure.from_exception(ErrorKind.REMOTE, exc)

    if issue is None:
        return Failure(kind=ErrorKind.REMOTE, message="Failed to create issue.")

    rprint(f"Issue created: {escape(issue.title)} with ID [bold]{escape(issue.identifier)}[/bold]")

    try:
        checkout_new_branch(issue.branch_name, settings.git_executable)
    except GitError as exc:
        return Failure.from_exception(ErrorKind.SUBPROCESS, exc)

    rprint(f"Issue URL: {issue.url}")
    return issue
