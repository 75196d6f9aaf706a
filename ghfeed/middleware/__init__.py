"""Middleware components."""

from ghfeed.middleware.rate_limiting import (
    RateLimitHeadersMiddleware,
    get_client_identifier,
    limiter,
)
from ghfeed.middleware.security import SecurityHeadersMiddleware

__all__ = [
    "RateLimitHeadersMiddleware",
    "SecurityHeadersMiddleware",
    "get_client_identifier",
    "limiter",
]
