"""
Feed routes for retrieving merged GitHub activity.

This module provides endpoints to fetch:
- The merged activity feed of several users
- The activity feed of a single user
- A plain-text rendering of the merged feed
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import PlainTextResponse

from ghfeed.core.config import get_settings
from ghfeed.middleware.rate_limiting import limiter
from ghfeed.models.event import Event
from ghfeed.models.feed import FeedItem, FeedResponse
from ghfeed.routes.dependencies import get_feed_service, get_github_service
from ghfeed.services.decoder import DecodeError
from ghfeed.services.feed import FeedResult, FeedService
from ghfeed.services.github import (
    GitHubAPIError,
    GitHubInvalidUsernameError,
    GitHubNotFoundError,
    GitHubService,
    GitHubTimeoutError,
)
from ghfeed.services.render import describe_event, render_feed

# Configure logging
logger = logging.getLogger(__name__)

# Router configuration
feed_router = APIRouter(prefix="/feed", tags=["Feed"])


def resolve_usernames(users: Optional[List[str]]) -> List[str]:
    """
    Pick the usernames a feed request should cover.

    Query values may contain comma separated names. When the request names
    nobody, the configured ``feed_usernames`` are used.

    Args:
        users: Raw ``users`` query values

    Returns:
        List of usernames (possibly empty)

    Example:
        >>> resolve_usernames(["octocat,torvalds", "gvanrossum"])
        ['octocat', 'torvalds', 'gvanrossum']
    """
    names = [
        name.strip()
        for value in users or []
        for name in value.split(",")
        if name.strip()
    ]
    if not names:
        names = list(get_settings().feed_usernames)
    return names


def to_feed_response(events: List[Event], failures: Optional[dict] = None) -> FeedResponse:
    """Attach a summary line to every event."""
    return FeedResponse(
        events=[FeedItem(event=event, summary=describe_event(event)) for event in events],
        failures=failures or {},
    )


async def _build_feed(
    users: Optional[List[str]],
    limit: Optional[int],
    feed_service: FeedService
) -> FeedResult:
    usernames = resolve_usernames(users)
    if not usernames:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No GitHub usernames given and none configured."
        )
    return await feed_service.build_feed(usernames, limit=limit)


@feed_router.get(
    "",
    response_model=FeedResponse,
    summary="Get merged activity feed",
    status_code=status.HTTP_200_OK,
)
@limiter.limit(get_settings().rate_limit_feed)
async def get_feed(
    request: Request,
    users: Optional[List[str]] = Query(None, description="GitHub usernames"),
    limit: Optional[int] = Query(None, ge=1, le=1000),
    feed_service: FeedService = Depends(get_feed_service)
) -> FeedResponse:
    """
    Retrieve the merged public activity of several GitHub users.

    Users whose activity cannot be fetched or decoded are left out of the
    feed and listed under ``failures``.

    Args:
        request: FastAPI request object (required for rate limiting)
        users: Usernames to include; defaults to the configured list
        limit: Optional maximum number of events

    Returns:
        FeedResponse with events sorted newest first

    Raises:
        HTTPException:
            - 400 if no usernames were given or configured

    Example:
        ```python
        response = await client.get("/api/v1/feed?users=octocat&users=torvalds")
        ```
    """
    result = await _build_feed(users, limit, feed_service)
    return to_feed_response(result.events, result.failures)


@feed_router.get(
    "/text",
    response_class=PlainTextResponse,
    summary="Get merged activity feed as text",
    status_code=status.HTTP_200_OK,
)
@limiter.limit(get_settings().rate_limit_feed)
async def get_feed_text(
    request: Request,
    users: Optional[List[str]] = Query(None, description="GitHub usernames"),
    limit: Optional[int] = Query(None, ge=1, le=1000),
    feed_service: FeedService = Depends(get_feed_service)
) -> PlainTextResponse:
    """Render the merged feed as one line per event."""
    result = await _build_feed(users, limit, feed_service)
    return PlainTextResponse(render_feed(result.events))


@feed_router.get(
    "/users/{username}",
    response_model=FeedResponse,
    summary="Get activity feed of one user",
    status_code=status.HTTP_200_OK,
)
@limiter.limit(get_settings().rate_limit_feed)
async def get_user_feed(
    request: Request,
    username: str,
    github_service: GitHubService = Depends(get_github_service)
) -> FeedResponse:
    """
    Retrieve the public activity of a single GitHub user.

    Args:
        request: FastAPI request object (required for rate limiting)
        username: GitHub username

    Returns:
        FeedResponse containing the user's events in GitHub's order

    Raises:
        HTTPException:
            - 400 if the username is not a valid GitHub login
            - 404 if the user does not exist on GitHub
            - 504 if GitHub timed out
            - 502 for other upstream failures or undecodable payloads
    """
    try:
        events = await github_service.get_user_events(username)
    except GitHubInvalidUsernameError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message
        )
    except GitHubNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"GitHub user '{username}' not found"
        )
    except GitHubTimeoutError:
        raise HTTPException(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            detail="GitHub API request timed out"
        )
    except GitHubAPIError as e:
        logger.error(f"GitHub error fetching activity for {username}: {e.message}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to fetch activity for user '{username}'"
        )
    except DecodeError as e:
        logger.error(f"Undecodable activity for {username}: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"GitHub returned malformed activity for '{username}': {e}"
        )

    logger.info(f"Retrieved {len(events)} activity events for user: {username}")
    return to_feed_response(events)
