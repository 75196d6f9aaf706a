"""
Feed service for combining the activity of several GitHub users.

This module fetches every requested user concurrently, keeps going when a
single user fails, and merges the decoded events into one feed ordered from
newest to oldest.
"""

import asyncio
import logging
from typing import Dict, Iterable, List, Optional, Sequence

from pydantic import BaseModel, Field

from ghfeed.models.event import Event
from ghfeed.services.decoder import DecodeError
from ghfeed.services.github import GitHubAPIError, GitHubService

logger = logging.getLogger(__name__)


class FeedResult(BaseModel):
    """Merged feed plus the users whose activity could not be loaded."""

    events: List[Event] = Field(default_factory=list)
    failures: Dict[str, str] = Field(default_factory=dict)


def merge_events(*sequences: Iterable[Event]) -> List[Event]:
    """
    Merge several event sequences into one feed, newest first.

    GitHub timestamps are ISO-8601 UTC strings of a fixed shape, so they
    sort lexically in time order. The sort is stable.

    Args:
        *sequences: Event sequences, one per fetched user

    Returns:
        List[Event]: All events sorted by ``created_at`` descending

    Example:
        >>> merged = merge_events(alice_events, bob_events)
        >>> merged[0].created_at >= merged[-1].created_at
        True
    """
    merged: List[Event] = []
    for sequence in sequences:
        merged.extend(sequence)
    return sorted(merged, key=lambda event: event.created_at, reverse=True)


def unique_usernames(usernames: Iterable[str]) -> List[str]:
    """Strip, drop blanks and de-duplicate usernames, keeping first-seen order."""
    seen = set()
    result = []
    for name in usernames:
        cleaned = name.strip()
        if cleaned and cleaned.lower() not in seen:
            seen.add(cleaned.lower())
            result.append(cleaned)
    return result


class FeedService:
    """
    Service building a combined activity feed.

    A failing user (network error, unknown user or malformed payload) only
    removes that user's events from the result; the failure is reported in
    ``FeedResult.failures``.
    """

    def __init__(self, github_service: GitHubService) -> None:
        """
        Initialize the FeedService.

        Args:
            github_service: Service used to fetch and decode user events
        """
        self.github_service = github_service

    async def build_feed(
        self,
        usernames: Sequence[str],
        limit: Optional[int] = None
    ) -> FeedResult:
        """
        Fetch several users concurrently and merge their events.

        Args:
            usernames: GitHub usernames to include
            limit: Optional maximum number of events to return

        Returns:
            FeedResult: Merged events and per-user failure messages

        Raises:
            Exception: Anything other than GitHub or decode failures
        """
        names = unique_usernames(usernames)
        logger.info(f"Building feed for {len(names)} users: {names}")

        results = await asyncio.gather(
            *(self.github_service.get_user_events(name) for name in names),
            return_exceptions=True
        )

        sequences: List[List[Event]] = []
        failures: Dict[str, str] = {}
        for name, result in zip(names, results):
            if isinstance(result, (GitHubAPIError, DecodeError)):
                logger.error(f"Dropping activity for user {name}: {result}")
                failures[name] = str(result)
            elif isinstance(result, BaseException):
                raise result
            else:
                sequences.append(result)

        events = merge_events(*sequences)
        if limit is not None:
            events = events[:limit]

        logger.info(
            f"Built feed with {len(events)} events "
            f"({len(failures)} of {len(names)} users failed)"
        )
        return FeedResult(events=events, failures=failures)
