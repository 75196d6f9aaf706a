"""Plain-text rendering of decoded activity events."""

from typing import Iterable

from ghfeed.models.event import (
    CommitCommentAction,
    CreateAction,
    DeleteAction,
    Event,
    ForkAction,
    IssueAction,
    IssueCommentAction,
    MemberAction,
    PullRequestAction,
    PullRequestReviewCommentAction,
    PushAction,
    UnknownAction,
    WatchAction,
)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def describe_event(event: Event) -> str:
    """
    Describe one event as a single line of text.

    Args:
        event: Decoded event

    Returns:
        str: Human readable summary

    Example:
        >>> describe_event(push_event)
        'octocat pushed 1 commit to octocat/Hello-World'
    """
    who = event.actor.display_login
    repo = event.repo.name
    action = event.action

    if isinstance(action, PushAction):
        return f"{who} pushed {_plural(len(action.commits), 'commit')} to {repo}"
    if isinstance(action, ForkAction):
        return f"{who} forked {repo}"
    if isinstance(action, PullRequestReviewCommentAction):
        pr = action.pull_request
        return f"{who} commented on pull request #{pr.number} \"{pr.title}\" in {repo}"
    if isinstance(action, PullRequestAction):
        pr = action.pull_request
        return f"{who} {pr.action} pull request #{pr.number} \"{pr.title}\" in {repo}"
    if isinstance(action, IssueCommentAction):
        issue = action.issue
        return f"{who} commented on issue #{issue.number} \"{issue.title}\" in {repo}"
    if isinstance(action, IssueAction):
        issue = action.issue
        return f"{who} {action.action} issue #{issue.number} \"{issue.title}\" in {repo}"
    if isinstance(action, CommitCommentAction):
        return f"{who} commented on a commit in {repo}"
    if isinstance(action, WatchAction):
        return f"{who} starred {repo}"
    if isinstance(action, DeleteAction):
        return f"{who} deleted {action.ref_type} {action.ref} in {repo}"
    if isinstance(action, MemberAction):
        return f"{who} {action.action} {action.member_login} as a collaborator to {repo}"
    if isinstance(action, CreateAction):
        if action.ref is None:
            return f"{who} created {action.ref_type} {repo}"
        return f"{who} created {action.ref_type} {action.ref} in {repo}"
    if isinstance(action, UnknownAction):
        return f"{who} triggered {action.raw_type} in {repo}"
    raise TypeError(f"Unsupported event action: {type(action).__name__}")


def render_feed(events: Iterable[Event]) -> str:
    """Render events as newline separated summaries prefixed with their timestamp."""
    return "\n".join(f"{event.created_at}  {describe_event(event)}" for event in events)
