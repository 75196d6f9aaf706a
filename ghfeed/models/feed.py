"""
Feed-related Pydantic models.

This module contains response models for the feed endpoints.
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from ghfeed.models.event import Event


class FeedItem(BaseModel):
    """One rendered entry of the feed."""

    event: Event = Field(..., description="Decoded GitHub event")
    summary: str = Field(..., description="One-line human readable description")


class FeedResponse(BaseModel):
    """Response model for the merged feed endpoints."""

    events: List[FeedItem] = Field(
        ...,
        description="Events of all requested users, newest first"
    )
    failures: Dict[str, str] = Field(
        default_factory=dict,
        description="Users whose activity could not be loaded, with the reason"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "events": [
                    {
                        "event": {
                            "id": "22249084964",
                            "action": {"kind": "watch"},
                            "created_at": "2022-06-09T12:47:28Z",
                            "actor": {
                                "display_login": "octocat",
                                "url": "https://github.com/octocat",
                                "avatar_url": "https://avatars.githubusercontent.com/u/583231?"
                            },
                            "repo": {
                                "name": "octocat/Hello-World",
                                "url": "https://github.com/octocat/Hello-World"
                            }
                        },
                        "summary": "octocat starred octocat/Hello-World"
                    }
                ],
                "failures": {"ghost-user": "Not Found"}
            }
        }
    )
