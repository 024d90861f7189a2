"""AI service for creator content generation using Google GenAI (Gemini).

Covers titles/descriptions/tags, SEO keyword analysis, similar-video search
tags and thumbnail image prompts. Replies are requested as JSON; when the
model wraps JSON in prose or markdown, the first brace- or bracket-delimited
block is extracted.
"""

import json
import logging
import re
from typing import List, Optional

from google.genai import Client
from google.genai import types

from models.content import GeneratedContent, KeywordAnalysis
from models.video import VideoMetric

logger = logging.getLogger(__name__)

_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")
_JSON_ARRAY_RE = re.compile(r"\[[\s\S]*\]")

FALLBACK_TAGS = ["tutorial", "guide", "tips"]


class AIServiceError(Exception):
    """Error from the AI service (API failure or unusable reply)."""

    pass


def strip_markdown_code_blocks(text: str) -> str:
    """Strip markdown code blocks from AI response text.

    Args:
        text: Raw text that may contain markdown code blocks

    Returns:
        Cleaned text with markdown code blocks removed
    """
    text = text.strip()
    if text.startswith("```json"):
        text = text[7:]  # Remove ```json
    elif text.startswith("```"):
        text = text[3:]  # Remove ```
    if text.endswith("```"):
        text = text[:-3]  # Remove ```
    return text.strip()


def _extract_json(text: Optional[str], pattern: re.Pattern, expected: type):
    if not text:
        raise AIServiceError("AI response is empty")

    cleaned = strip_markdown_code_blocks(text)
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError:
        match = pattern.search(cleaned)
        if not match:
            raise AIServiceError(f"No JSON {expected.__name__} found in AI response")
        try:
            parsed = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise AIServiceError(f"Invalid JSON in AI response: {e}") from e

    if not isinstance(parsed, expected):
        raise AIServiceError(f"AI response is not a JSON {expected.__name__}")
    return parsed


def extract_json_object(text: Optional[str]) -> dict:
    """Parse a JSON object from a model reply that may contain extra text."""
    return _extract_json(text, _JSON_OBJECT_RE, dict)


def extract_json_array(text: Optional[str]) -> list:
    """Parse a JSON array from a model reply that may contain extra text."""
    return _extract_json(text, _JSON_ARRAY_RE, list)


def fallback_tags(video: VideoMetric) -> List[str]:
    """Heuristic tags used when the model cannot suggest any."""
    head = " ".join(video.title.split()[:3])
    return ([head] if head else []) + FALLBACK_TAGS


class AIService:
    """Service for AI-powered creator content using Gemini."""

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-2.5-flash",
        client: Optional[Client] = None,
    ):
        """Initialize Google GenAI client.

        Args:
            api_key: Google GenAI API key
            model_name: Gemini model to use
            client: Prebuilt client (tests inject a mock here)
        """
        self.api_key = api_key
        self.model_name = model_name
        self.client = client or Client(api_key=api_key)

        logger.info(f"Initialized AI service with model: {model_name}")

    def _generate(self, prompt: str, temperature: float, max_output_tokens: int) -> str:
        """Send one prompt to Gemini and return the reply text.

        Raises:
            AIServiceError: If the API call fails or returns no text
        """
        try:
            response = self.client.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=types.GenerateContentConfig(
                    temperature=temperature,
                    top_k=40,
                    top_p=0.95,
                    max_output_tokens=max_output_tokens,
                ),
            )
        except Exception as e:
            logger.error(f"Gemini API error: {e}")
            raise AIServiceError(f"Gemini API error: {e}") from e

        if not response.text:
            logger.error("AI response is empty")
            raise AIServiceError("Invalid response from Gemini API")
        return response.text

    def generate_content(self, topic: str) -> GeneratedContent:
        """Generate SEO titles, a description, tags and thumbnail prompts.

        Args:
            topic: Video topic or working title

        Returns:
            GeneratedContent parsed from the model's JSON reply
        """
        prompt = f"""You are an expert YouTube SEO strategist. For the topic "{topic}", reply with JSON only (no markdown, no commentary) containing:
1. Three SEO-optimized video titles, each with an SEO score from 1 to 100.
2. A compelling video description.
3. 10 relevant video tags.
4. Two thumbnail image prompts, each with a 3-5 word heading to show on the image and a professional illustration concept.

Format:
{{
  "titles": [{{"title": "...", "seo_score": 87}}],
  "description": "...",
  "tags": ["tag1", "tag2"],
  "image_prompts": [{{"heading": "...", "prompt": "..."}}]
}}"""

        text = self._generate(prompt, temperature=0.7, max_output_tokens=2048)
        try:
            data = extract_json_object(text)
        except AIServiceError:
            logger.warning(f"Content generation reply was not JSON: {text[:200]}")
            raise

        content = GeneratedContent.from_dict(topic, data)
        logger.info(
            f"Generated {len(content.titles)} titles and {len(content.tags)} tags for: {topic}"
        )
        return content

    def analyze_keywords(self, topic: str) -> KeywordAnalysis:
        """Extract SEO keywords with scores and related search phrases.

        Args:
            topic: Main keyword or topic

        Returns:
            KeywordAnalysis with keywords sorted by score (highest first)
        """
        prompt = f"""Given the topic "{topic}", extract high-ranking SEO keywords for YouTube video optimization.
For each keyword assign an SEO score (1-100) based on search potential and relevance, and list a few related search queries.

Reply with JSON only:
{{
  "main_keyword": "{topic}",
  "keywords": [{{"keyword": "...", "score": 85, "related_queries": ["...", "..."]}}]
}}"""

        text = self._generate(prompt, temperature=0.7, max_output_tokens=2048)
        analysis = KeywordAnalysis.from_dict(topic, extract_json_object(text))
        logger.info(f"Analyzed {len(analysis.keywords)} keywords for: {topic}")
        return analysis

    def suggest_tags(self, video: VideoMetric) -> List[str]:
        """Suggest 5-8 search tags for finding videos similar to this one.

        Never raises; falls back to heuristic tags on any failure.

        Args:
            video: Video to describe

        Returns:
            List of tag strings
        """
        prompt = f"""Analyze this YouTube video and generate relevant search tags:
Title: "{video.title}"
Channel: "{video.channel_title}"
Existing tags: {", ".join(video.tags)}

Generate 5-8 search tags that would find similar videos or thumbnails. Focus on the main topic, style and content type.
Return only a JSON array of strings."""

        try:
            text = self._generate(prompt, temperature=0.5, max_output_tokens=1024)
            tags = [str(t).strip() for t in extract_json_array(text) if str(t).strip()]
        except AIServiceError as e:
            logger.warning(f"Tag suggestion failed for '{video.title}', using fallback: {e}")
            return fallback_tags(video)

        return tags[:8] or fallback_tags(video)

    def generate_thumbnail_prompt(self, title: str, keywords: str = "") -> str:
        """Write an image-generation prompt for a video thumbnail.

        Args:
            title: Video title
            keywords: Optional comma-separated keywords

        Returns:
            Prompt text (under ~200 words)
        """
        prompt = f"""Write a detailed image generation prompt for a YouTube thumbnail for the video "{title}" with keywords: {keywords or "none"}.
Describe colors and visual style, text placement and typography, composition, emotions and expressions, background and lighting.
Keep it under 200 words. Reply with the prompt text only."""

        text = strip_markdown_code_blocks(
            self._generate(prompt, temperature=0.8, max_output_tokens=1024)
        )
        logger.debug(f"Thumbnail prompt for '{title}': {text[:120]}")
        return text
