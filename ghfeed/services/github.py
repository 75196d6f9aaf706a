"""GitHub API service for fetching public activity events.

This module provides the service layer that talks to GitHub's REST API.
Each username is fetched with a single GET request and the raw response is
handed to the event decoder.
"""

import logging
import re
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List, Optional

import httpx

from ghfeed.core.config import get_settings
from ghfeed.models.event import Event
from ghfeed.services.decoder import DecodeError, decode_events

# Initialize logger
logger = logging.getLogger(__name__)

# Logins are 1-39 ASCII letters, digits or hyphens
GITHUB_LOGIN_PATTERN = re.compile(r"[A-Za-z0-9-]{1,39}")


class GitHubAPIError(Exception):
    """Base exception for GitHub API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None, response_data: Optional[Dict[str, Any]] = None):
        self.message = message
        self.status_code = status_code
        self.response_data = response_data
        super().__init__(self.message)


class GitHubNotFoundError(GitHubAPIError):
    """Exception raised when a GitHub user does not exist."""

    pass


class GitHubInvalidUsernameError(GitHubAPIError):
    """Exception raised for names that cannot be GitHub logins."""

    pass


class GitHubTimeoutError(GitHubAPIError):
    """Exception raised when a GitHub request times out."""

    pass


class GitHubNetworkError(GitHubAPIError):
    """Exception raised for transport failures talking to GitHub."""

    pass


class GitHubService:
    """Service for reading public activity from the GitHub API.

    Attributes:
        base_url: GitHub API base URL
        timeout: Timeout for HTTP requests in seconds
        per_page: Number of events requested per user
        _client: Shared httpx.AsyncClient instance
    """

    HEADERS: Dict[str, str] = {
        "Accept": "application/vnd.github+json",
        "User-Agent": "GitHub-Activity-Feed/1.0",
    }

    def __init__(self) -> None:
        """Initialize the GitHub service."""
        self._client: Optional[httpx.AsyncClient] = None
        self._settings = get_settings()
        self.base_url = self._settings.github_api_url
        self.timeout = self._settings.github_request_timeout
        self.per_page = self._settings.github_events_per_page
        logger.info("GitHubService initialized")

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the shared HTTP client.

        Returns:
            httpx.AsyncClient: Configured async HTTP client
        """
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
                headers=self.HEADERS,
            )
            logger.debug("Created new httpx.AsyncClient")
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and cleanup resources."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed httpx.AsyncClient")

    @asynccontextmanager
    async def _get_client(self) -> AsyncGenerator[httpx.AsyncClient, None]:
        """Context manager yielding the shared HTTP client.

        Yields:
            httpx.AsyncClient: Configured async HTTP client
        """
        yield self.client

    def _handle_github_error(self, response: httpx.Response, default_message: str) -> None:
        """Handle GitHub API error responses.

        Args:
            response: HTTP response from GitHub API
            default_message: Default error message if response doesn't contain details

        Raises:
            GitHubNotFoundError: For unknown users
            GitHubAPIError: For other API errors
        """
        try:
            error_data = response.json()
        except ValueError:
            error_data = {"message": response.text}

        if not isinstance(error_data, dict):
            error_data = {"message": str(error_data)}
        error_message = error_data.get("message") or default_message

        logger.error(
            f"GitHub API error: status={response.status_code}, "
            f"message={error_message}, data={error_data}"
        )

        if response.status_code == 404:
            raise GitHubNotFoundError(
                message=error_message,
                status_code=response.status_code,
                response_data=error_data
            )

        raise GitHubAPIError(
            message=error_message,
            status_code=response.status_code,
            response_data=error_data
        )

    async def get_user_events_raw(self, username: str) -> List[Any]:
        """Get the raw public events array for a user.

        Args:
            username: GitHub username

        Returns:
            List[Any]: Event objects exactly as returned by GitHub

        Raises:
            GitHubNotFoundError: If the user does not exist
            GitHubInvalidUsernameError: If the name is not a valid login
            GitHubTimeoutError: If the request times out
            GitHubNetworkError: If the request could not be sent
            GitHubAPIError: For other non-200 responses or a non-JSON body

        Example:
            >>> service = GitHubService()
            >>> events = await service.get_user_events_raw("octocat")
            >>> print(len(events))
        """
        if not GITHUB_LOGIN_PATTERN.fullmatch(username):
            logger.error(f"Rejected invalid GitHub username: {username!r}")
            raise GitHubInvalidUsernameError(
                message=f"Invalid GitHub username: {username!r}",
                status_code=400
            )

        logger.info(f"Fetching activity for user: {username} (per_page={self.per_page})")

        try:
            async with self._get_client() as client:
                response = await client.get(
                    f"{self.base_url}/users/{username}/events",
                    params={"per_page": self.per_page}
                )
        except httpx.TimeoutException as e:
            logger.error(f"Timeout while fetching activity for {username}: {e}")
            raise GitHubTimeoutError(
                message="GitHub API request timed out",
                status_code=None
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"HTTP error while fetching activity for {username}: {e}")
            raise GitHubNetworkError(
                message=f"Could not reach GitHub API: {e}",
                status_code=None
            ) from e

        if response.status_code != 200:
            self._handle_github_error(
                response,
                f"Failed to fetch activity for user {username}"
            )

        try:
            events = response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON in activity response for {username}: {e}")
            raise GitHubAPIError(
                message="GitHub API returned an invalid JSON body",
                status_code=response.status_code
            ) from e

        logger.info(f"Successfully fetched activity events for {username}")
        return events

    async def get_user_events(self, username: str) -> List[Event]:
        """Get decoded public events for a user.

        Malformed events are skipped or abort the whole batch depending on
        the ``skip_malformed_events`` setting.

        Args:
            username: GitHub username

        Returns:
            List[Event]: Decoded events in the order GitHub returned them

        Raises:
            GitHubAPIError: If fetching fails
            DecodeError: If the body is not an array, or an event is
                malformed and skipping is disabled
        """
        raw_events = await self.get_user_events_raw(username)

        def log_unknown(raw_type: str) -> None:
            logger.warning(f"Unhandled event type '{raw_type}' for user {username}")

        def log_skipped(index: int, error: DecodeError) -> None:
            logger.warning(f"Skipping malformed event for user {username}: {error}")

        try:
            events = decode_events(
                raw_events,
                skip_malformed=self._settings.skip_malformed_events,
                on_unknown=log_unknown,
                on_error=log_skipped,
            )
        except DecodeError as e:
            logger.error(f"Failed to decode activity for user {username}: {e}")
            raise

        logger.debug(f"Decoded {len(events)} events for {username}")
        return events


_github_service: Optional[GitHubService] = None


def get_github_service() -> GitHubService:
    """Get the shared GitHubService instance."""
    global _github_service
    if _github_service is None:
        _github_service = GitHubService()
    return _github_service


async def cleanup_github_service() -> None:
    """Close the shared GitHubService, if one was created."""
    global _github_service
    if _github_service is not None:
        await _github_service.close()
        _github_service = None
