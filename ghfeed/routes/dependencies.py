"""
FastAPI route dependencies.

This module provides reusable dependencies that can be injected into
route handlers, so tests can swap services through
``app.dependency_overrides``.
"""

from fastapi import Depends

from ghfeed.services import github
from ghfeed.services.feed import FeedService
from ghfeed.services.github import GitHubService


def get_github_service() -> GitHubService:
    """
    Dependency returning the shared GitHub service.

    Returns:
        GitHubService: Process-wide service instance
    """
    return github.get_github_service()


def get_feed_service(
    github_service: GitHubService = Depends(get_github_service)
) -> FeedService:
    """
    Dependency building a FeedService on top of the GitHub service.

    Example:
        ```python
        @router.get("/feed")
        async def feed(feed_service: FeedService = Depends(get_feed_service)):
            return await feed_service.build_feed(["octocat"])
        ```
    """
    return FeedService(github_service)
