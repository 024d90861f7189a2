"""Models for AI-generated creator content (titles, keywords, thumbnails)."""

from dataclasses import asdict, dataclass, field
from typing import Optional


def _clamp_score(value) -> int:
    """Clamp an AI-reported 1-100 score into range (0 when missing)."""
    try:
        score = int(float(value))
    except (TypeError, ValueError):
        return 0
    return max(0, min(100, score))


def _string_list(value) -> list[str]:
    """Non-blank strings from a JSON list; anything else yields an empty list."""
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if str(item).strip()]


@dataclass
class TitleSuggestion:
    """A suggested video title with its estimated SEO score (1-100)."""

    title: str
    seo_score: int = 0


@dataclass
class ImagePrompt:
    """A thumbnail image prompt with the short heading to overlay."""

    heading: str
    prompt: str


@dataclass
class GeneratedContent:
    """Titles, description, tags and thumbnail prompts for one topic."""

    topic: str
    titles: list[TitleSuggestion] = field(default_factory=list)
    description: str = ""
    tags: list[str] = field(default_factory=list)
    image_prompts: list[ImagePrompt] = field(default_factory=list)

    @classmethod
    def from_dict(cls, topic: str, data: dict) -> "GeneratedContent":
        """Build from the model's JSON reply, skipping malformed entries."""
        titles = [
            TitleSuggestion(title=str(t["title"]), seo_score=_clamp_score(t.get("seo_score")))
            for t in data.get("titles") or []
            if isinstance(t, dict) and t.get("title")
        ]
        prompts = [
            ImagePrompt(heading=str(p.get("heading", "")), prompt=str(p["prompt"]))
            for p in data.get("image_prompts") or []
            if isinstance(p, dict) and p.get("prompt")
        ]
        return cls(
            topic=topic,
            titles=titles,
            description=str(data.get("description") or ""),
            tags=_string_list(data.get("tags")),
            image_prompts=prompts,
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class KeywordScore:
    """One SEO keyword with its score and related search phrases."""

    keyword: str
    score: int = 0
    related_queries: list[str] = field(default_factory=list)


@dataclass
class KeywordAnalysis:
    """Keyword analysis for a main topic, keywords sorted by score."""

    main_keyword: str
    keywords: list[KeywordScore] = field(default_factory=list)

    @classmethod
    def from_dict(cls, topic: str, data: dict) -> "KeywordAnalysis":
        keywords = [
            KeywordScore(
                keyword=str(k["keyword"]),
                score=_clamp_score(k.get("score")),
                related_queries=_string_list(k.get("related_queries")),
            )
            for k in data.get("keywords") or []
            if isinstance(k, dict) and k.get("keyword")
        ]
        keywords.sort(key=lambda k: k.score, reverse=True)
        return cls(main_keyword=str(data.get("main_keyword") or topic), keywords=keywords)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ThumbnailResult:
    """A generated thumbnail: the prompt used and the resulting image."""

    title: str
    prompt: str
    image_url: str
    provider: str
    fallback: bool = False  # True when a placeholder replaced a failed generation
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)
