"""Image Generation Service - Gemini image model over the REST API."""

import logging
import time
from math import gcd

import httpx

from models.image_generation import (
    GeneratedImage,
    ImageGenerationRequest,
    ImageGenerationResult,
)

logger = logging.getLogger(__name__)

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"

# Aspect ratio mapping for Gemini (uses ratios, not pixels)
ASPECT_RATIO_MAP = {
    (1, 1): "1:1",
    (16, 9): "16:9",
    (9, 16): "9:16",
    (4, 3): "4:3",
    (3, 4): "3:4",
    (3, 2): "3:2",
    (2, 3): "2:3",
    (21, 9): "21:9",
}


def get_aspect_ratio(width: int, height: int) -> str:
    """Convert pixel dimensions to aspect ratio string for Gemini."""
    divisor = gcd(width, height) or 1
    ratio = (width // divisor, height // divisor)

    if ratio in ASPECT_RATIO_MAP:
        return ASPECT_RATIO_MAP[ratio]

    # Closest matching ratio
    actual_ratio = width / height if height else 1.0
    best_match, best_diff = "1:1", float("inf")
    for (w, h), ar in ASPECT_RATIO_MAP.items():
        diff = abs(actual_ratio - w / h)
        if diff < best_diff:
            best_diff, best_match = diff, ar

    if best_diff < 0.05:
        return best_match

    logger.warning(f"No matching aspect ratio for {width}x{height}. Defaulting to 1:1")
    return "1:1"


class ImageGenerationServiceError(Exception):
    """Error from image generation service."""

    pass


class ImageGenerationService:
    """Text-to-image generation through the Gemini image model."""

    def __init__(
        self,
        api_key: str = "",
        model: str = "gemini-2.5-flash-image",
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the image generation service.

        Args:
            api_key: Gemini API key
            model: Gemini image model name
            client: HTTP client (tests inject one with a mock transport)
        """
        self.api_key = api_key
        self.model = model
        # Long timeout for image generation (can take a while)
        self.client = client or httpx.AsyncClient(timeout=120.0)

    def is_configured(self) -> bool:
        """Check if the Gemini API key is configured."""
        return bool(self.api_key)

    async def generate_image(
        self, request: ImageGenerationRequest
    ) -> ImageGenerationResult:
        """Generate images for a prompt.

        Args:
            request: The generation request

        Returns:
            ImageGenerationResult with inline data-URL images

        Raises:
            ImageGenerationServiceError: If unconfigured, the API fails, or no
                image comes back
        """
        if not self.is_configured():
            raise ImageGenerationServiceError(
                "GEMINI_API_KEY not configured. Set it in your .env file."
            )

        url = f"{GEMINI_API_BASE}/models/{self.model}:generateContent"
        headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }
        aspect_ratio = get_aspect_ratio(request.width, request.height)
        payload = {
            "contents": [{"parts": [{"text": request.prompt}]}],
            "generationConfig": {
                "responseModalities": ["IMAGE"],
                "imageConfig": {"aspectRatio": aspect_ratio},
            },
        }

        logger.info(f"Generating image with {self.model} (aspect={aspect_ratio})")
        start_time = time.time()

        try:
            response = await self.client.post(url, headers=headers, json=payload)
            response.raise_for_status()
            result_data = response.json()
        except httpx.HTTPStatusError as e:
            try:
                error_detail = e.response.json().get("error", {}).get("message", str(e))
            except ValueError:
                error_detail = e.response.text or str(e)
            raise ImageGenerationServiceError(f"Gemini API error: {error_detail}") from e
        except httpx.HTTPError as e:
            raise ImageGenerationServiceError(f"Gemini image generation failed: {e}") from e
        except ValueError as e:
            raise ImageGenerationServiceError(f"Gemini returned invalid JSON: {e}") from e

        if not isinstance(result_data, dict):
            raise ImageGenerationServiceError("Gemini returned an unexpected response body")

        generation_time_ms = int((time.time() - start_time) * 1000)

        images = []
        candidates = result_data.get("candidates", [])
        if candidates:
            parts = candidates[0].get("content", {}).get("parts", [])
            for part in parts:
                inline_data = part.get("inlineData", {})
                if inline_data.get("data"):
                    mime_type = inline_data.get("mimeType", "image/png")
                    images.append(
                        GeneratedImage(
                            url=f"data:{mime_type};base64,{inline_data['data']}",
                            width=request.width,
                            height=request.height,
                            content_type=mime_type,
                        )
                    )

        if not images:
            raise ImageGenerationServiceError("Gemini returned no image data")

        logger.info(f"Gemini generated {len(images)} image(s) in {generation_time_ms}ms")

        return ImageGenerationResult(
            images=images,
            model=self.model,
            prompt=request.prompt,
            generation_time_ms=generation_time_ms,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()
