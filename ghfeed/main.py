"""
GitHub Activity Feed API

A FastAPI application that merges the public GitHub activity of several
users into a single feed.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from ghfeed.core.config import get_settings, logger
from ghfeed.middleware import RateLimitHeadersMiddleware, SecurityHeadersMiddleware, limiter
from ghfeed.routes import feed_router
from ghfeed.services.github import cleanup_github_service

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events for the FastAPI application.
    """
    # Startup
    logger.info("Starting GitHub Activity Feed API...")
    if settings.feed_usernames:
        logger.info(f"Default feed users: {settings.feed_usernames}")
    else:
        logger.warning("No default feed users configured; requests must pass ?users=")

    yield

    # Shutdown
    logger.info("Shutting down GitHub Activity Feed API...")
    await cleanup_github_service()
    logger.info("Application shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Merged public GitHub activity for a list of users",
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url=f"{settings.api_v1_prefix}/openapi.json",
)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type", "X-Requested-With", "X-Request-ID"],
    expose_headers=[
        "X-RateLimit-Limit",
        "X-RateLimit-Remaining",
        "X-RateLimit-Reset",
        "X-Request-ID",
    ],
)

# Rate Limiting and Security Middleware
app.add_middleware(RateLimitHeadersMiddleware)
app.add_middleware(SecurityHeadersMiddleware)

# Register limiter with app
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Include API routers
app.include_router(feed_router, prefix=settings.api_v1_prefix)


@app.get("/", tags=["Root"])
@limiter.limit("20/minute")
async def root(request: Request) -> dict:
    """
    Root endpoint with API information.

    Returns:
        dict: API metadata and available endpoints
    """
    return {
        "message": settings.app_name,
        "version": settings.app_version,
        "features": [
            "Typed GitHub event decoding",
            "Multi-user merged feed",
            "Plain-text feed rendering",
            "Per-client Rate Limiting",
        ],
        "endpoints": {
            "docs": "/docs",
            "redoc": "/redoc",
            "health": "/health",
            "feed": f"{settings.api_v1_prefix}/feed",
        },
    }


@app.get("/health", tags=["Health"])
async def health_check() -> dict:
    """
    Health check endpoint.

    Returns:
        dict: Application health status
    """
    return {
        "status": "healthy",
        "version": settings.app_version,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "ghfeed.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
