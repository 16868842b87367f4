"""Abstract base class for the issue tracker."""

from abc import ABC, abstractmethod

from linfix.models import CreatedIssue, IssueDraft, Team, TeamState, Viewer


class TrackerError(RuntimeError):
    """Any failure talking to the tracker: transport, HTTP status, GraphQL errors, bad payloads."""


class TicketProvider(ABC):
    @abstractmethod
    def list_teams(self) -> list[Team]: ...

    @abstractmethod
    def get_viewer(self) -> Viewer: ...

    @abstractmethod
    def list_team_states(self, team_id: str) -> list[TeamState]: ...

    @abstractmethod
    def create_issue(self, draft: IssueDraft) -> CreatedIssue | None: ...
