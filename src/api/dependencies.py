"""Service singletons and dependency injection for the YouTube AI Studio API."""

import logging

from fastapi import HTTPException

from services.ai_service import AIService
from services.image_generation_service import ImageGenerationService
from services.profile_service import ProfileService
from services.scoring import DEFAULT_SCORING_CONFIG, ScoringConfig
from services.thumbnail_service import ThumbnailService
from services.video_search_service import VideoSearchService
from services.youtube_api_service import YouTubeAPIService
from utils.config import load_config

logger = logging.getLogger(__name__)

# Service singletons
_config: dict | None = None
_youtube_service: YouTubeAPIService | None = None
_search_service: VideoSearchService | None = None
_ai_service: AIService | None = None
_image_gen_service: ImageGenerationService | None = None
_thumbnail_service: ThumbnailService | None = None
_profile_service: ProfileService | None = None


def get_config() -> dict:
    """Get the application config (loaded once)."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def get_scoring_config() -> ScoringConfig:
    """Scoring policy from the application config.

    An invalid direction or weight set is logged and replaced by the
    default policy so search and scoring keep serving.
    """
    try:
        return ScoringConfig.from_config(get_config())
    except ValueError as e:
        logger.error(f"Invalid scoring config, using defaults: {e}")
        return DEFAULT_SCORING_CONFIG


def get_youtube_service() -> YouTubeAPIService | None:
    """Get the YouTube API service, or None when no key is configured."""
    global _youtube_service
    if _youtube_service is None:
        api_key = get_config().get("youtube_api_key")
        if not api_key:
            return None
        _youtube_service = YouTubeAPIService(api_key)
    return _youtube_service


def get_search_service() -> VideoSearchService:
    """Get or create the video search service instance."""
    global _search_service
    if _search_service is None:
        config = get_config()
        _search_service = VideoSearchService(
            youtube=get_youtube_service(),
            max_results=config.get("search_max_results", 12),
            scoring_config=get_scoring_config(),
        )
    return _search_service


def get_ai_service() -> AIService:
    """Get or create the AI service instance.

    Raises:
        HTTPException: 503 when GEMINI_API_KEY is not configured
    """
    global _ai_service
    if _ai_service is None:
        config = get_config()
        if not config.get("gemini_api_key"):
            raise HTTPException(status_code=503, detail="GEMINI_API_KEY is not configured")
        _ai_service = AIService(
            api_key=config["gemini_api_key"],
            model_name=config.get("gemini_model", "gemini-2.5-flash"),
        )
    return _ai_service


def get_optional_ai_service() -> AIService | None:
    """Get the AI service, or None when GEMINI_API_KEY is not configured."""
    if not get_config().get("gemini_api_key"):
        return None
    return get_ai_service()


def get_image_gen_service() -> ImageGenerationService:
    """Get or create the image generation service instance."""
    global _image_gen_service
    if _image_gen_service is None:
        config = get_config()
        _image_gen_service = ImageGenerationService(
            api_key=config.get("gemini_api_key", ""),
            model=config.get("gemini_image_model", "gemini-2.5-flash-image"),
        )
    return _image_gen_service


def get_thumbnail_service() -> ThumbnailService:
    """Get or create the thumbnail service instance."""
    global _thumbnail_service
    if _thumbnail_service is None:
        _thumbnail_service = ThumbnailService(
            ai_service=get_ai_service(),
            image_service=get_image_gen_service(),
        )
    return _thumbnail_service


def get_profile_service() -> ProfileService:
    """Get or create the channel profile service instance."""
    global _profile_service
    if _profile_service is None:
        _profile_service = ProfileService(
            youtube=get_youtube_service(),
            recent_videos=get_config().get("profile_recent_videos", 5),
        )
    return _profile_service


async def close_services() -> None:
    """Release network clients held by the singletons."""
    global _image_gen_service, _thumbnail_service
    if _image_gen_service is not None:
        await _image_gen_service.close()
        _image_gen_service = None
        _thumbnail_service = None
