"""Data models for the application."""

from ghfeed.models.event import (
    Actor,
    Comment,
    Commit,
    CommitCommentAction,
    CreateAction,
    DeleteAction,
    Event,
    EventAction,
    ForkAction,
    Issue,
    IssueAction,
    IssueCommentAction,
    MemberAction,
    PullRequest,
    PullRequestAction,
    PullRequestReviewCommentAction,
    PushAction,
    Repo,
    UnknownAction,
    WatchAction,
)
from ghfeed.models.feed import FeedItem, FeedResponse

__all__ = [
    # Event models
    "Actor",
    "Repo",
    "Event",
    "EventAction",
    # Payload parts
    "Commit",
    "Comment",
    "Issue",
    "PullRequest",
    # Action variants
    "PushAction",
    "ForkAction",
    "PullRequestReviewCommentAction",
    "PullRequestAction",
    "IssueCommentAction",
    "IssueAction",
    "CommitCommentAction",
    "WatchAction",
    "DeleteAction",
    "MemberAction",
    "CreateAction",
    "UnknownAction",
    # Feed models
    "FeedItem",
    "FeedResponse",
]
