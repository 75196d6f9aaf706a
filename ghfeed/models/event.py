"""
Typed GitHub activity event models.

Every decoded event carries exactly one action variant. Variants are
distinguished by their ``kind`` literal so that ``EventAction`` can be
used as a discriminated union in responses.
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class FrozenModel(BaseModel):
    """Base for immutable event records."""

    model_config = ConfigDict(frozen=True)


class Actor(FrozenModel):
    """User who triggered an event."""

    display_login: str = Field(..., description="Login shown for the actor")
    url: str = Field(..., description="Profile URL")
    avatar_url: str = Field(..., description="Avatar image URL")


class Repo(FrozenModel):
    """Repository an event happened in."""

    name: str = Field(..., description="Repository full name (owner/repo)")
    url: str = Field(..., description="Repository URL")


class Commit(FrozenModel):
    sha: str


class Comment(FrozenModel):
    url: str


class PullRequest(FrozenModel):
    action: str
    number: int
    url: str
    title: str


class Issue(FrozenModel):
    number: int
    url: str
    title: str


class PushAction(FrozenModel):
    kind: Literal["push"] = "push"
    head: str
    commits: List[Commit] = Field(default_factory=list)


class ForkAction(FrozenModel):
    kind: Literal["fork"] = "fork"


class PullRequestReviewCommentAction(FrozenModel):
    kind: Literal["pull_request_review_comment"] = "pull_request_review_comment"
    comment: Comment
    pull_request: PullRequest


class PullRequestAction(FrozenModel):
    kind: Literal["pull_request"] = "pull_request"
    pull_request: PullRequest


class IssueCommentAction(FrozenModel):
    kind: Literal["issue_comment"] = "issue_comment"
    issue: Issue
    comment: Comment


class IssueAction(FrozenModel):
    kind: Literal["issue"] = "issue"
    action: str
    issue: Issue


class CommitCommentAction(FrozenModel):
    kind: Literal["commit_comment"] = "commit_comment"
    url: str


class WatchAction(FrozenModel):
    kind: Literal["watch"] = "watch"


class DeleteAction(FrozenModel):
    kind: Literal["delete"] = "delete"
    ref: str
    ref_type: str


class MemberAction(FrozenModel):
    kind: Literal["member"] = "member"
    action: str
    member_login: str


class CreateAction(FrozenModel):
    kind: Literal["create"] = "create"
    ref: Optional[str] = None
    ref_type: str
    description: Optional[str] = None


class UnknownAction(FrozenModel):
    """Catch-all for event types this service does not know about."""

    kind: Literal["unknown"] = "unknown"
    raw_type: str


EventAction = Annotated[
    Union[
        PushAction,
        ForkAction,
        PullRequestReviewCommentAction,
        PullRequestAction,
        IssueCommentAction,
        IssueAction,
        CommitCommentAction,
        WatchAction,
        DeleteAction,
        MemberAction,
        CreateAction,
        UnknownAction,
    ],
    Field(discriminator="kind"),
]


class Event(FrozenModel):
    """One unit of public GitHub activity."""

    id: str = Field(..., description="GitHub event ID")
    action: EventAction
    created_at: str = Field(..., description="ISO-8601 creation timestamp")
    actor: Actor
    repo: Repo

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "22249084947",
                "action": {
                    "kind": "push",
                    "head": "7a8f3ac80e2ad2f6842cb86f576d4bfe2c03e300",
                    "commits": [{"sha": "7a8f3ac80e2ad2f6842cb86f576d4bfe2c03e300"}],
                },
                "created_at": "2022-06-09T12:47:28Z",
                "actor": {
                    "display_login": "octocat",
                    "url": "https://github.com/octocat",
                    "avatar_url": "https://avatars.githubusercontent.com/u/583231?",
                },
                "repo": {
                    "name": "octocat/Hello-World",
                    "url": "https://github.com/octocat/Hello-World",
                },
            }
        },
    )
