"""Services module for GitHub Activity Feed.

This module contains service layer classes that handle business logic
and external API integrations.
"""

from ghfeed.services.decoder import (
    DecodeError,
    DecodeErrorReason,
    decode_event,
    decode_events,
)
from ghfeed.services.feed import FeedResult, FeedService, merge_events
from ghfeed.services.github import (
    GitHubAPIError,
    GitHubInvalidUsernameError,
    GitHubNetworkError,
    GitHubNotFoundError,
    GitHubService,
    GitHubTimeoutError,
)
from ghfeed.services.render import describe_event, render_feed

__all__ = [
    "GitHubService",
    "GitHubAPIError",
    "GitHubInvalidUsernameError",
    "GitHubNotFoundError",
    "GitHubTimeoutError",
    "GitHubNetworkError",
    "DecodeError",
    "DecodeErrorReason",
    "decode_event",
    "decode_events",
    "FeedService",
    "FeedResult",
    "merge_events",
    "describe_event",
    "render_feed",
]
