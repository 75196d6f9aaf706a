"""Security headers middleware.

Every feed response carries a fixed set of hardening headers and an
``X-Request-ID`` that also tags the access log line for the request.
"""

import logging
import re
import time
import uuid
from typing import Callable, Dict

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ghfeed.core.config import get_settings

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Caller supplied IDs are echoed back, so only short opaque tokens are kept
REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")

SECURITY_HEADERS: Dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
}


def resolve_request_id(request: Request) -> str:
    """Reuse a well-formed incoming request ID or create a new UUID."""
    incoming = request.headers.get(REQUEST_ID_HEADER)
    if incoming and REQUEST_ID_PATTERN.fullmatch(incoming):
        return incoming
    return str(uuid.uuid4())


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add ``SECURITY_HEADERS``, the request ID and HSTS to each response.

    HSTS uses ``settings.hsts_max_age`` and is only sent over HTTPS.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = resolve_request_id(request)
        request.state.request_id = request_id
        started = time.perf_counter()

        response = await call_next(request)

        response.headers.update(SECURITY_HEADERS)
        response.headers[REQUEST_ID_HEADER] = request_id

        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = (
                f"max-age={get_settings().hsts_max_age}; includeSubDomains"
            )

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"in {elapsed_ms:.1f}ms [{request_id}]"
        )

        return response
