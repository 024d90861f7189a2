"""Video search routes for the YouTube AI Studio API."""

import logging

from api.dependencies import get_optional_ai_service, get_search_service
from api.schemas import SimilarSearchRequest
from fastapi import APIRouter, Depends, HTTPException, Query
from models.video import VideoMetric
from services.ai_service import AIService
from services.video_search_service import VideoSearchService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Search"])


@router.get(
    "/api/search",
    summary="Search videos",
    description="Searches YouTube, or returns deterministic mock data when no API key is set.",
)
def search_videos(
    q: str = Query("", description="Search query"),
    search_service: VideoSearchService = Depends(get_search_service),
) -> dict:
    """Search for videos."""
    if not q.strip():
        raise HTTPException(status_code=400, detail="Query parameter 'q' is required")

    return search_service.search(q).to_dict()


@router.post(
    "/api/search/similar",
    summary="Find similar videos",
    description=(
        "Asks Gemini for search tags describing a video, then searches them. "
        "Without a Gemini key, tags are derived from the title."
    ),
)
def find_similar_videos(
    request: SimilarSearchRequest,
    search_service: VideoSearchService = Depends(get_search_service),
    ai_service: AIService | None = Depends(get_optional_ai_service),
) -> dict:
    """Find videos similar to the given one."""
    video = VideoMetric.from_dict(request.video.model_dump())
    tags, result = search_service.find_similar(video, ai_service)

    response = result.to_dict()
    response["tags"] = tags
    return response
