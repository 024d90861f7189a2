"""Pydantic request/response models for the YouTube AI Studio API."""

from typing import Literal

from pydantic import BaseModel, Field

# =============================================================================
# Core
# =============================================================================


class RootResponse(BaseModel):
    """Root endpoint response."""

    message: str
    version: str

    model_config = {"json_schema_extra": {"examples": [{"message": "YouTube AI Studio API", "version": "1.0.0"}]}}


class ProvidersStatus(BaseModel):
    """Which external providers have credentials configured."""

    youtube: bool
    gemini: bool


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    providers: ProvidersStatus

    model_config = {
        "json_schema_extra": {
            "examples": [{"status": "healthy", "providers": {"youtube": False, "gemini": True}}]
        }
    }


# =============================================================================
# Videos and scoring
# =============================================================================


class VideoInput(BaseModel):
    """A caller-supplied video record.

    Counts may be missing or null; they are treated as 0 when scored.
    """

    id: str = Field(min_length=1)
    title: str = ""
    channel_title: str = ""
    thumbnail_url: str = ""
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    view_count: int | float | str | None = None
    like_count: int | float | str | None = None
    comment_count: int | float | str | None = None
    published_at: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "dQw4w9WgXcQ",
                    "title": "Ultimate Guide: Sourdough",
                    "view_count": 120000,
                    "like_count": 5400,
                    "comment_count": 320,
                    "published_at": "2024-01-15T00:00:00Z",
                }
            ]
        }
    }


class SimilarSearchRequest(BaseModel):
    """Request to find videos similar to a given one."""

    video: VideoInput


class OutlierDetectRequest(BaseModel):
    """Search a query and score the resulting batch."""

    query: str = Field(description="Search query")
    outlier_direction: Literal["high", "both"] | None = Field(
        default=None, description="Override the configured outlier direction"
    )

    model_config = {"json_schema_extra": {"examples": [{"query": "sourdough bread", "outlier_direction": "high"}]}}


class ScoreBatchRequest(BaseModel):
    """Score a caller-supplied batch of videos."""

    videos: list[VideoInput]
    outlier_direction: Literal["high", "both"] | None = None
    now: str | None = Field(
        default=None, description="ISO timestamp used as the scoring clock (defaults to current time)"
    )


# =============================================================================
# Content generation
# =============================================================================


class TopicRequest(BaseModel):
    """Request carrying a video topic."""

    topic: str = Field(description="Video topic or working title")

    model_config = {"json_schema_extra": {"examples": [{"topic": "home espresso for beginners"}]}}


class ThumbnailRequest(BaseModel):
    """Request to generate a thumbnail for a title."""

    title: str
    keywords: str = ""

    model_config = {
        "json_schema_extra": {"examples": [{"title": "I Tried Every Espresso Machine", "keywords": "coffee, review"}]}
    }
