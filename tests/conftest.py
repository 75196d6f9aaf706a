"""
Pytest configuration and shared fixtures.

This module provides test fixtures for the entire test suite, including
raw GitHub event payloads, mock services and test clients.
"""

import copy
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from ghfeed.core.config import Settings
from ghfeed.main import app
from ghfeed.middleware.rate_limiting import limiter
from ghfeed.models.event import Actor, Event, Repo, WatchAction


# =============================================================================
# Test Settings
# =============================================================================

@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Provide test settings configuration.

    Returns:
        Settings object with test configuration
    """
    return Settings(
        app_name="GitHub Activity Feed Test",
        app_version="1.0.0-test",
        debug=True,
        log_level="DEBUG",
        github_api_url="https://api.github.test",
        github_request_timeout=5.0,
        github_events_per_page=50,
        feed_usernames=["octocat"],
        skip_malformed_events=True,
        rate_limit_enabled=False,
        api_v1_prefix="/api/v1",
    )


# =============================================================================
# HTTP Client Fixtures
# =============================================================================

@pytest.fixture
def client():
    """Get test client for API requests, with rate limiting switched off."""
    enabled = limiter.enabled
    limiter.enabled = False
    try:
        yield TestClient(app)
    finally:
        limiter.enabled = enabled
        app.dependency_overrides.clear()


@pytest.fixture
def rate_limited_client():
    """Get test client with rate limiting switched on and empty counters."""
    enabled = limiter.enabled
    limiter.enabled = True
    limiter.reset()
    try:
        yield TestClient(app)
    finally:
        limiter.reset()
        limiter.enabled = enabled
        app.dependency_overrides.clear()


# =============================================================================
# Raw Event Fixtures
# =============================================================================

SAMPLE_PAYLOADS: Dict[str, Dict[str, Any]] = {
    "PushEvent": {
        "repository_id": 1296269,
        "push_id": 10115855396,
        "ref": "refs/heads/main",
        "head": "abc123",
        "before": "000000",
        "commits": [{"sha": "deadbeef", "message": "Fix all the bugs"}],
    },
    "ForkEvent": {
        "forkee": {"id": 3, "full_name": "hubot/Hello-World"},
    },
    "PullRequestReviewCommentEvent": {
        "action": "created",
        "comment": {
            "url": "https://api.github.com/repos/octocat/Hello-World/pulls/comments/11",
            "html_url": "https://github.com/octocat/Hello-World/pull/3#discussion_r11",
        },
        "pull_request": {
            "number": 3,
            "html_url": "https://github.com/octocat/Hello-World/pull/3",
            "title": "Fix typo",
        },
    },
    "PullRequestEvent": {
        "action": "opened",
        "number": 3,
        "pull_request": {
            "number": 3,
            "html_url": "https://github.com/octocat/Hello-World/pull/3",
            "title": "Fix typo",
            "state": "open",
        },
    },
    "IssueCommentEvent": {
        "action": "created",
        "issue": {
            "number": 7,
            "html_url": "https://github.com/octocat/Hello-World/issues/7",
            "title": "Crash on start",
        },
        "comment": {
            "html_url": "https://github.com/octocat/Hello-World/issues/7#issuecomment-9",
        },
    },
    "IssuesEvent": {
        "action": "closed",
        "issue": {
            "number": 7,
            "html_url": "https://github.com/octocat/Hello-World/issues/7",
            "title": "Crash on start",
        },
    },
    "CommitCommentEvent": {
        "action": "created",
        "comment": {
            "html_url": "https://github.com/octocat/Hello-World/commit/deadbeef#commitcomment-5",
        },
    },
    "WatchEvent": {"action": "started"},
    "DeleteEvent": {"ref": "feature/old", "ref_type": "branch", "pusher_type": "user"},
    "MemberEvent": {"action": "added", "member": {"login": "hubot", "id": 4}},
    "CreateEvent": {
        "ref": "v1.0.0",
        "ref_type": "tag",
        "master_branch": "main",
        "description": "My first repository",
        "pusher_type": "user",
    },
}


def build_raw_event(
    event_type: str,
    payload: Optional[Dict[str, Any]] = None,
    event_id: str = "1001",
    created_at: str = "2024-01-15T12:00:00Z",
    login: str = "octocat",
) -> Dict[str, Any]:
    """Build a raw event object shaped like the GitHub events API."""
    if payload is None:
        payload = copy.deepcopy(SAMPLE_PAYLOADS.get(event_type, {}))
    return {
        "id": event_id,
        "type": event_type,
        "actor": {
            "id": 583231,
            "login": login,
            "display_login": login,
            "gravatar_id": "",
            "url": f"https://api.github.com/users/{login}",
            "avatar_url": "https://avatars.githubusercontent.com/u/583231?",
        },
        "repo": {
            "id": 1296269,
            "name": "octocat/Hello-World",
            "url": "https://api.github.com/repos/octocat/Hello-World",
        },
        "payload": payload,
        "public": True,
        "created_at": created_at,
    }


@pytest.fixture
def raw_event_factory() -> Callable[..., Dict[str, Any]]:
    """Provide the raw event builder."""
    return build_raw_event


@pytest.fixture
def sample_github_events() -> List[Dict[str, Any]]:
    """
    Provide a raw events array with a push followed by a watch.

    Returns:
        List of event dicts
    """
    return [
        build_raw_event("PushEvent", event_id="12345", created_at="2024-01-15T12:00:00Z"),
        build_raw_event("WatchEvent", event_id="12346", created_at="2024-01-14T08:30:00Z"),
    ]


# =============================================================================
# Decoded Event Fixtures
# =============================================================================

def build_event(
    event_id: str,
    created_at: str,
    login: str = "octocat",
) -> Event:
    """Build a decoded WatchEvent for merge tests."""
    return Event(
        id=event_id,
        action=WatchAction(),
        created_at=created_at,
        actor=Actor(
            display_login=login,
            url=f"https://github.com/{login}",
            avatar_url="https://avatars.githubusercontent.com/u/1?",
        ),
        repo=Repo(name="octocat/Hello-World", url="https://github.com/octocat/Hello-World"),
    )


@pytest.fixture
def event_factory() -> Callable[..., Event]:
    """Provide the decoded event builder."""
    return build_event


# =============================================================================
# Mock Service Fixtures
# =============================================================================

@pytest.fixture
def mock_github_service() -> Mock:
    """
    Provide a mock GitHub service.

    Returns:
        Mocked GitHubService
    """
    service = Mock()
    service.get_user_events_raw = AsyncMock(return_value=[])
    service.get_user_events = AsyncMock(return_value=[])
    service.close = AsyncMock()
    return service
