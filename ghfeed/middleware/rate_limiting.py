"""Rate limiting middleware and configuration."""

from typing import Callable

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from ghfeed.core.config import get_settings


def get_client_identifier(request: Request) -> str:
    """
    Identify the caller for rate limiting.

    Only the connection's remote address is used. Client supplied
    forwarding headers are ignored; behind a reverse proxy, run uvicorn
    with ``--proxy-headers`` and ``--forwarded-allow-ips`` so the remote
    address is resolved from trusted proxies only.

    Args:
        request: FastAPI request object

    Returns:
        str: Client identifier for rate limiting
    """
    return f"ip:{get_remote_address(request)}"


# Create limiter with in-memory storage
limiter = Limiter(
    key_func=get_client_identifier,
    default_limits=[get_settings().rate_limit_default],
    enabled=get_settings().rate_limit_enabled,
)


class RateLimitHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add rate limiting headers to responses.

    slowapi records the limit applied to a decorated route in
    ``request.state.view_rate_limit`` as ``(RateLimitItem, [key, scope])``.
    The current window is read back from the limiter storage to fill in
    ``X-RateLimit-Limit``, ``X-RateLimit-Remaining`` and ``X-RateLimit-Reset``.
    Routes without a limit get no headers.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """
        Process request and add rate limit headers to response.

        Args:
            request: Incoming request
            call_next: Next middleware/handler

        Returns:
            Response with rate limit headers
        """
        response = await call_next(request)

        limit_info = getattr(request.state, "view_rate_limit", None)
        if limit_info is None:
            return response

        item, identifiers = limit_info
        reset_at, remaining = limiter.limiter.get_window_stats(item, *identifiers)

        response.headers["X-RateLimit-Limit"] = str(item.amount)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        response.headers["X-RateLimit-Reset"] = str(int(reset_at))

        return response
