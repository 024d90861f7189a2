"""Content generation routes (titles, descriptions, keywords) for the YouTube AI Studio API."""

import logging

from api.dependencies import get_ai_service
from api.schemas import TopicRequest
from fastapi import APIRouter, Depends, HTTPException
from services.ai_service import AIService, AIServiceError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Content"])


def _require_topic(request: TopicRequest) -> str:
    topic = request.topic.strip()
    if not topic:
        raise HTTPException(status_code=400, detail="Topic is required")
    return topic


@router.post(
    "/api/content/generate",
    summary="Generate video content",
    description="Generates SEO titles, a description, tags and thumbnail prompts for a topic.",
)
def generate_content(
    request: TopicRequest,
    ai_service: AIService = Depends(get_ai_service),
) -> dict:
    """Generate content for a topic."""
    topic = _require_topic(request)
    try:
        return ai_service.generate_content(topic).to_dict()
    except AIServiceError as e:
        logger.error(f"Content generation failed for '{topic}': {e}")
        raise HTTPException(status_code=502, detail=f"Content generation failed: {e}")


@router.post(
    "/api/keywords/analyze",
    summary="Analyze keywords",
    description="Extracts SEO keywords with scores and related search queries.",
)
def analyze_keywords(
    request: TopicRequest,
    ai_service: AIService = Depends(get_ai_service),
) -> dict:
    """Analyze keywords for a topic."""
    topic = _require_topic(request)
    try:
        return ai_service.analyze_keywords(topic).to_dict()
    except AIServiceError as e:
        logger.error(f"Keyword analysis failed for '{topic}': {e}")
        raise HTTPException(status_code=502, detail=f"Keyword analysis failed: {e}")
