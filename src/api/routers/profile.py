"""Channel profile routes for the YouTube AI Studio API."""

import logging

from api.dependencies import get_profile_service
from fastapi import APIRouter, Depends, HTTPException
from services.profile_service import (
    ChannelNotFoundError,
    ProfileService,
    YouTubeNotConfiguredError,
)
from services.youtube_api_service import YouTubeAPIError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Profile"])


@router.get(
    "/api/profile/{channel_id}",
    summary="Channel analytics",
    description="Returns channel statistics and its recent uploads ranked by smart score.",
)
def get_channel_profile(
    channel_id: str,
    profile_service: ProfileService = Depends(get_profile_service),
) -> dict:
    """Get a channel profile."""
    if not channel_id.strip():
        raise HTTPException(status_code=400, detail="Channel ID is required")

    try:
        return profile_service.get_profile(channel_id).to_dict()
    except YouTubeNotConfiguredError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except ChannelNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except YouTubeAPIError as e:
        logger.error(f"Profile lookup failed for {channel_id}: {e}")
        raise HTTPException(status_code=502, detail=f"YouTube API error: {e}")
