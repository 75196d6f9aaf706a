"""
Decoder for GitHub public activity events.

This module turns raw event objects from the ``/users/{username}/events``
endpoint into typed :class:`~ghfeed.models.event.Event` records. Payloads
differ per event type, so every known ``type`` has its own decode rule that
reads only the ``payload`` paths it needs. Types without a rule decode to
:class:`~ghfeed.models.event.UnknownAction` instead of failing.

The functions here are pure: they never log and never touch the network.
Callers that want to hear about unknown types or skipped events pass
callbacks.
"""

from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from ghfeed.core.urls import normalize_url
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

_MISSING = object()


class DecodeErrorReason(str, Enum):
    """Why a field could not be decoded."""

    MISSING = "missing"
    INVALID = "invalid"


class DecodeError(Exception):
    """Raised when an event does not match the expected schema.

    Attributes:
        reason: Whether the field was missing or had the wrong type
        path: Dotted path of the offending field (``""`` for the root)
        raw_type: Event ``type`` string, once it has been read
        index: Position of the event in its batch, when decoded as a list
    """

    def __init__(
        self,
        reason: DecodeErrorReason,
        path: str,
        raw_type: Optional[str] = None,
        index: Optional[int] = None,
    ):
        self.reason = reason
        self.path = path
        self.raw_type = raw_type
        self.index = index
        super().__init__(self.message)

    @property
    def message(self) -> str:
        location = self.path or "<root>"
        if self.index is not None:
            location = f"[{self.index}].{self.path}" if self.path else f"[{self.index}]"
        text = f"{self.reason.value} field '{location}'"
        if self.raw_type is not None:
            text += f" in {self.raw_type}"
        return text

    def __str__(self) -> str:
        return self.message


# =============================================================================
# Path-based field readers
# =============================================================================

def _lookup(data: Any, path: str) -> Any:
    """Follow a dotted path through objects and arrays.

    Numeric segments index into lists. Returns ``_MISSING`` when a key is
    absent; raises when an intermediate value is not a container.
    """
    current = data
    walked: List[str] = []
    for key in path.split("."):
        if isinstance(current, dict):
            if key not in current:
                return _MISSING
            current = current[key]
        elif isinstance(current, list) and key.isdigit():
            position = int(key)
            if position >= len(current):
                return _MISSING
            current = current[position]
        else:
            raise DecodeError(DecodeErrorReason.INVALID, ".".join(walked))
        walked.append(key)
    return current


def _require(data: Any, path: str) -> Any:
    value = _lookup(data, path)
    if value is _MISSING or value is None:
        raise DecodeError(DecodeErrorReason.MISSING, path)
    return value


def _read_str(data: Any, path: str) -> str:
    value = _require(data, path)
    if not isinstance(value, str):
        raise DecodeError(DecodeErrorReason.INVALID, path)
    return value


def _read_optional_str(data: Any, path: str) -> Optional[str]:
    value = _lookup(data, path)
    if value is _MISSING or value is None:
        return None
    if not isinstance(value, str):
        raise DecodeError(DecodeErrorReason.INVALID, path)
    return value


def _read_int(data: Any, path: str) -> int:
    value = _require(data, path)
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(DecodeErrorReason.INVALID, path)
    return value


def _read_object(data: Any, path: str) -> Dict[str, Any]:
    value = _require(data, path)
    if not isinstance(value, dict):
        raise DecodeError(DecodeErrorReason.INVALID, path)
    return value


def _read_optional_list(data: Any, path: str) -> List[Any]:
    value = _lookup(data, path)
    if value is _MISSING or value is None:
        return []
    if not isinstance(value, list):
        raise DecodeError(DecodeErrorReason.INVALID, path)
    return value


# =============================================================================
# Shared sub-decoders
# =============================================================================

def _decode_actor(raw: Dict[str, Any]) -> Actor:
    _read_object(raw, "actor")
    return Actor(
        display_login=_read_str(raw, "actor.display_login"),
        url=normalize_url(_read_str(raw, "actor.url")),
        avatar_url=normalize_url(_read_str(raw, "actor.avatar_url")),
    )


def _decode_repo(raw: Dict[str, Any]) -> Repo:
    _read_object(raw, "repo")
    return Repo(
        name=_read_str(raw, "repo.name"),
        url=normalize_url(_read_str(raw, "repo.url")),
    )


def _decode_pull_request(raw: Dict[str, Any]) -> PullRequest:
    return PullRequest(
        action=_read_str(raw, "payload.action"),
        number=_read_int(raw, "payload.pull_request.number"),
        url=_read_str(raw, "payload.pull_request.html_url"),
        title=_read_str(raw, "payload.pull_request.title"),
    )


def _decode_issue(raw: Dict[str, Any]) -> Issue:
    return Issue(
        number=_read_int(raw, "payload.issue.number"),
        url=_read_str(raw, "payload.issue.html_url"),
        title=_read_str(raw, "payload.issue.title"),
    )


def _decode_comment(raw: Dict[str, Any]) -> Comment:
    return Comment(url=_read_str(raw, "payload.comment.html_url"))


# =============================================================================
# Per-type decode rules
# =============================================================================

def _decode_push(raw: Dict[str, Any]) -> PushAction:
    commits = _read_optional_list(raw, "payload.commits")
    return PushAction(
        head=_read_str(raw, "payload.head"),
        commits=[
            Commit(sha=_read_str(raw, f"payload.commits.{position}.sha"))
            for position in range(len(commits))
        ],
    )


def _decode_fork(raw: Dict[str, Any]) -> ForkAction:
    return ForkAction()


def _decode_pull_request_review_comment(raw: Dict[str, Any]) -> PullRequestReviewCommentAction:
    return PullRequestReviewCommentAction(
        comment=_decode_comment(raw),
        pull_request=_decode_pull_request(raw),
    )


def _decode_pull_request_event(raw: Dict[str, Any]) -> PullRequestAction:
    return PullRequestAction(pull_request=_decode_pull_request(raw))


def _decode_issue_comment(raw: Dict[str, Any]) -> IssueCommentAction:
    return IssueCommentAction(issue=_decode_issue(raw), comment=_decode_comment(raw))


def _decode_issues(raw: Dict[str, Any]) -> IssueAction:
    return IssueAction(action=_read_str(raw, "payload.action"), issue=_decode_issue(raw))


def _decode_commit_comment(raw: Dict[str, Any]) -> CommitCommentAction:
    return CommitCommentAction(url=_read_str(raw, "payload.comment.html_url"))


def _decode_watch(raw: Dict[str, Any]) -> WatchAction:
    return WatchAction()


def _decode_delete(raw: Dict[str, Any]) -> DeleteAction:
    return DeleteAction(
        ref=_read_str(raw, "payload.ref"),
        ref_type=_read_str(raw, "payload.ref_type"),
    )


def _decode_member(raw: Dict[str, Any]) -> MemberAction:
    return MemberAction(
        action=_read_str(raw, "payload.action"),
        member_login=_read_str(raw, "payload.member.login"),
    )


def _decode_create(raw: Dict[str, Any]) -> CreateAction:
    return CreateAction(
        ref=_read_optional_str(raw, "payload.ref"),
        ref_type=_read_str(raw, "payload.ref_type"),
        description=_read_optional_str(raw, "payload.description"),
    )


ACTION_DECODERS: Dict[str, Callable[[Dict[str, Any]], EventAction]] = {
    "PullRequestEvent": _decode_pull_request_event,
    "PushEvent": _decode_push,
    "CreateEvent": _decode_create,
    "ForkEvent": _decode_fork,
    "PullRequestReviewCommentEvent": _decode_pull_request_review_comment,
    "CommitCommentEvent": _decode_commit_comment,
    "IssueCommentEvent": _decode_issue_comment,
    "IssuesEvent": _decode_issues,
    "MemberEvent": _decode_member,
    "WatchEvent": _decode_watch,
    "DeleteEvent": _decode_delete,
}


# =============================================================================
# Public API
# =============================================================================

def decode_action(
    raw: Dict[str, Any],
    raw_type: str,
    on_unknown: Optional[Callable[[str], None]] = None,
) -> EventAction:
    """
    Decode the payload of one event according to its type.

    Args:
        raw: Raw event object
        raw_type: Value of the event's ``type`` field
        on_unknown: Called with ``raw_type`` when no rule matches

    Returns:
        EventAction: Decoded variant, ``UnknownAction`` for unknown types

    Raises:
        DecodeError: If a field required by the matching rule is missing
    """
    decoder = ACTION_DECODERS.get(raw_type)
    if decoder is None:
        if on_unknown is not None:
            on_unknown(raw_type)
        return UnknownAction(raw_type=raw_type)

    try:
        return decoder(raw)
    except DecodeError as e:
        e.raw_type = raw_type
        raise


def decode_event(
    raw: Any,
    on_unknown: Optional[Callable[[str], None]] = None,
) -> Event:
    """
    Decode one raw event object into an Event.

    Args:
        raw: One element of the events array returned by GitHub
        on_unknown: Optional callback receiving unrecognised ``type`` values

    Returns:
        Event: Fully decoded event with normalized actor and repo URLs

    Raises:
        DecodeError: If any required field is missing or has the wrong type

    Example:
        >>> event = decode_event(raw_watch_event)
        >>> event.action.kind
        'watch'
    """
    if not isinstance(raw, dict):
        raise DecodeError(DecodeErrorReason.INVALID, "")

    event_id = _read_str(raw, "id")
    created_at = _read_str(raw, "created_at")
    actor = _decode_actor(raw)
    repo = _decode_repo(raw)
    raw_type = _read_str(raw, "type")

    return Event(
        id=event_id,
        action=decode_action(raw, raw_type, on_unknown),
        created_at=created_at,
        actor=actor,
        repo=repo,
    )


def decode_events(
    raw: Any,
    skip_malformed: bool = True,
    on_unknown: Optional[Callable[[str], None]] = None,
    on_error: Optional[Callable[[int, DecodeError], None]] = None,
) -> List[Event]:
    """
    Decode an events array, keeping input order.

    Args:
        raw: JSON array returned by the events endpoint
        skip_malformed: Drop events that fail to decode instead of failing
            the whole batch
        on_unknown: Optional callback receiving unrecognised ``type`` values
        on_error: Called with ``(index, error)`` for each skipped event

    Returns:
        List[Event]: Decoded events in input order

    Raises:
        DecodeError: If ``raw`` is not an array, or if an event fails and
            ``skip_malformed`` is False
    """
    if not isinstance(raw, list):
        raise DecodeError(DecodeErrorReason.INVALID, "")

    events: List[Event] = []
    for index, item in enumerate(raw):
        try:
            events.append(decode_event(item, on_unknown))
        except DecodeError as e:
            e.index = index
            if not skip_malformed:
                raise
            if on_error is not None:
                on_error(index, e)
    return events
