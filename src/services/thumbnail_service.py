"""Thumbnail generation: Gemini writes the prompt, the image service renders it."""

import asyncio
import logging

from models.content import ThumbnailResult
from models.image_generation import ImageGenerationRequest
from services.ai_service import AIService
from services.image_generation_service import (
    ImageGenerationService,
    ImageGenerationServiceError,
)
from services.mock_video_source import placeholder_thumbnail

logger = logging.getLogger(__name__)

THUMBNAIL_WIDTH = 1280
THUMBNAIL_HEIGHT = 720
PLACEHOLDER_COLOR = "1e293b"


class ThumbnailService:
    """Chains prompt writing and image generation for video thumbnails."""

    def __init__(self, ai_service: AIService, image_service: ImageGenerationService):
        self.ai_service = ai_service
        self.image_service = image_service

    async def generate(self, title: str, keywords: str = "") -> ThumbnailResult:
        """Generate a thumbnail for a video title.

        A failed image generation still returns a result: the prompt plus a
        placeholder image, flagged with ``fallback=True``.

        Args:
            title: Video title
            keywords: Optional keywords to steer the design

        Returns:
            ThumbnailResult

        Raises:
            AIServiceError: If the prompt itself cannot be generated
        """
        # The GenAI SDK call is blocking
        prompt = await asyncio.to_thread(
            self.ai_service.generate_thumbnail_prompt, title, keywords
        )

        try:
            result = await self.image_service.generate_image(
                ImageGenerationRequest(
                    prompt=prompt, width=THUMBNAIL_WIDTH, height=THUMBNAIL_HEIGHT
                )
            )
        except ImageGenerationServiceError as e:
            logger.warning(f"Thumbnail image generation failed, using placeholder: {e}")
            return ThumbnailResult(
                title=title,
                prompt=prompt,
                image_url=placeholder_thumbnail(
                    PLACEHOLDER_COLOR, title[:40], size=f"{THUMBNAIL_WIDTH}x{THUMBNAIL_HEIGHT}"
                ),
                provider="placeholder",
                fallback=True,
                error=str(e),
            )

        return ThumbnailResult(
            title=title,
            prompt=prompt,
            image_url=result.images[0].url,
            provider=result.model,
        )
