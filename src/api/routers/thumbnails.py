"""Thumbnail generation routes for the YouTube AI Studio API."""

import logging

from api.dependencies import get_thumbnail_service
from api.schemas import ThumbnailRequest
from fastapi import APIRouter, Depends, HTTPException
from services.ai_service import AIServiceError
from services.thumbnail_service import ThumbnailService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Thumbnails"])


@router.post(
    "/api/thumbnails/generate",
    summary="Generate a thumbnail",
    description=(
        "Writes an image prompt for the title with Gemini and renders it. "
        "If rendering fails a placeholder image is returned with fallback=true."
    ),
)
async def generate_thumbnail(
    request: ThumbnailRequest,
    thumbnail_service: ThumbnailService = Depends(get_thumbnail_service),
) -> dict:
    """Generate a thumbnail for a video title."""
    title = request.title.strip()
    if not title:
        raise HTTPException(status_code=400, detail="Title is required")

    try:
        result = await thumbnail_service.generate(title, request.keywords.strip())
    except AIServiceError as e:
        logger.error(f"Thumbnail prompt generation failed for '{title}': {e}")
        raise HTTPException(status_code=502, detail=f"Thumbnail generation failed: {e}")

    return result.to_dict()
