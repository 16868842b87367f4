"""Shared pydantic models: the contract between the Linear provider, the workflow and main.py."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Team(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    key: str | None = None  # ENG, DES, ...


class TeamState(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: str | None = None  # backlog | unstarted | started | completed | canceled


class Viewer(BaseModel):
    """The user the API key belongs to."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str | None = None
    email: str | None = None


class IssueDraft(BaseModel):
    """Everything sent to issueCreate. None fields are left to the tracker's defaults."""

    model_config = ConfigDict(frozen=True)

    team_id: str
    title: str
    description: str | None = None
    assignee_id: str | None = None
    state_id: str | None = None
    estimate: int | None = None
    priority: int | None = None


class CreatedIssue(BaseModel):
    """Returned by create_issue, just what the checkout step needs."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str | None = None
    identifier: str  # ENG-42
    title: str
    url: str
    branch_name: str = Field(alias="branchName")  # generated by Linear, used verbatim


class ErrorKind(StrEnum):
    MISSING_CREDENTIAL = "missing-credential"
    INVALID_INPUT = "invalid-input"
    CANCELLED = "cancelled"
    CREDENTIAL_STORE = "credential-store"
    REMOTE = "remote"
    SUBPROCESS = "subprocess"


# Kinds that are reported as guidance rather than as an "Error:" line.
GUIDANCE_KINDS = frozenset({ErrorKind.MISSING_CREDENTIAL, ErrorKind.INVALID_INPUT, ErrorKind.CANCELLED})

UNKNOWN_ERROR = "An unknown error occurred"


class Failure(BaseModel):
    """Why a command stopped early. Commands return these instead of raising."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str

    @classmethod
    def from_exception(cls, kind: ErrorKind, exc: BaseException) -> "Failure":
        return cls(kind=kind, message=str(exc) or UNKNOWN_ERROR)

    @property
    def is_guidance(self) -> bool:
        return self.kind in GUIDANCE_KINDS
