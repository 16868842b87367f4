"""Linear GraphQL API provider."""

import logging

import httpx
from pydantic import ValidationError

from linfix.models import CreatedIssue, IssueDraft, Team, TeamState, Viewer
from linfix.providers.base import TicketProvider, TrackerError
from linfix.settings import LinfixSettings

log = logging.getLogger(__name__)

_LIST_TEAMS = """
query ListTeams {
  teams {
    nodes {
      id
      name
      key
    }
  }
}
"""

_VIEWER = """
query Viewer {
  viewer {
    id
    name
    email
  }
}
"""

_TEAM_STATES = """
query TeamStates($id: String!) {
  team(id: $id) {
    states {
      nodes {
        id
        name
        type
      }
    }
  }
}
"""

_CREATE_ISSUE = """
mutation CreateIssue($input: IssueCreateInput!) {
  issueCreate(input: $input) {
    success
    issue {
      id
      identifier
      title
      url
      branchName
    }
  }
}
"""


def _draft_input(draft: IssueDraft) -> dict:
    fields = {
        "teamId": draft.team_id,
        "title": draft.title,
        "description": draft.description,
        "assigneeId": draft.assignee_id,
        "stateId": draft.state_id,
        "estimate": draft.estimate,
        "priority": draft.priority,
    }
    return {k: v for k, v in fields.items() if v is not None}


class LinearProvider(TicketProvider):
    def __init__(self, api_key: str, settings: LinfixSettings) -> None:
        if not api_key:
            raise TrackerError("A Linear API key is required")
        self._api_key = api_key
        self._endpoint = settings.api_url
        self._timeout = settings.timeout

    def _gql(self, query: str, variables: dict | None = None) -> dict:
        log.debug("POST %s: %s", self._endpoint, query.strip().splitlines()[0])
        try:
            response = httpx.post(
                self._endpoint,
                json={"query": query, "variables": variables or {}},
                headers={
                    "Authorization": self._api_key,
                    "Content-Type": "application/json",
                },
                timeout=self._timeout,
            )
        except httpx.HTTPError as exc:
            raise TrackerError(str(exc)) from exc

        if response.status_code == 401:
            raise TrackerError("Linear API returned 401. Run `linfix login` to store a valid API key.")

        # GraphQL errors usually arrive with a 4xx status; prefer their message over the status line.
        try:
            data = response.json()
        except ValueError:
            data = None
        if isinstance(data, dict) and data.get("errors"):
            messages = "; ".join(
                str(e.get("message", e) if isinstance(e, dict) else e) for e in data["errors"]
            )
            raise TrackerError(f"Linear API error: {messages}")

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TrackerError(str(exc)) from exc
        if not isinstance(data, dict) or data.get("data") is None:
            raise TrackerError("Linear API returned an unexpected response")
        return data["data"]

    def list_teams(self) -> list[Team]:
        data = self._gql(_LIST_TEAMS)
        try:
            return [Team.model_validate(n) for n in data["teams"]["nodes"]]
        except (KeyError, TypeError, ValidationError) as exc:
            raise TrackerError(f"Unexpected teams payload from Linear: {exc}") from exc

    def get_viewer(self) -> Viewer:
        data = self._gql(_VIEWER)
        try:
            return Viewer.model_validate(data["viewer"])
        except (KeyError, ValidationError) as exc:
            raise TrackerError(f"Unexpected viewer payload from Linear: {exc}") from exc

    def list_team_states(self, team_id: str) -> list[TeamState]:
        data = self._gql(_TEAM_STATES, {"id": team_id})
        team = data.get("team")
        if not team:
            raise TrackerError(f"Team '{team_id}' not found in Linear")
        try:
            return [TeamState.model_validate(n) for n in team["states"]["nodes"]]
        except (KeyError, TypeError, ValidationError) as exc:
            raise TrackerError(f"Unexpected workflow states payload from Linear: {exc}") from exc

    def create_issue(self, draft: IssueDraft) -> CreatedIssue | None:
        data = self._gql(_CREATE_ISSUE, {"input": _draft_input(draft)})
        try:
            result = data["issueCreate"]
            success = result["success"]
            node = result.get("issue")
        except (KeyError, TypeError, AttributeError) as exc:
            raise TrackerError(f"Unexpected issueCreate payload from Linear: {exc!r}") from exc
        if not success:
            raise TrackerError("Linear issueCreate returned success=false")
        if not node:
            return None
        try:
            return CreatedIssue.model_validate(node)
        except ValidationError as exc:
            raise TrackerError(f"Unexpected issue payload from Linear: {exc}") from exc
