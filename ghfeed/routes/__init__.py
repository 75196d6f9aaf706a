"""
API Routes Module

This module exports all API routers for the GitHub Activity Feed application.
All routes are prefixed with /api/v1 when included in main.py.
"""

from ghfeed.routes.feed import feed_router

__all__ = [
    "feed_router",
]
