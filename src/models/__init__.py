# Data models for YouTube AI Studio
from .video import (
    VideoMetric,
    ScoredVideoMetric,
    BatchStatistics,
    SearchResult,
    OutlierDetectionResult,
    coerce_count,
    parse_published_at,
)
from .content import (
    TitleSuggestion,
    ImagePrompt,
    GeneratedContent,
    KeywordScore,
    KeywordAnalysis,
    ThumbnailResult,
)
from .image_generation import (
    ImageGenerationRequest,
    GeneratedImage,
    ImageGenerationResult,
)

__all__ = [
    # Videos and scoring
    "VideoMetric",
    "ScoredVideoMetric",
    "BatchStatistics",
    "SearchResult",
    "OutlierDetectionResult",
    "coerce_count",
    "parse_published_at",
    # AI content
    "TitleSuggestion",
    "ImagePrompt",
    "GeneratedContent",
    "KeywordScore",
    "KeywordAnalysis",
    "ThumbnailResult",
    # Image Generation
    "ImageGenerationRequest",
    "GeneratedImage",
    "ImageGenerationResult",
]
