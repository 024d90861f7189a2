"""Video search service with real-or-mock sourcing.

Responsibilities:
- Search YouTube through the Data API when a key is configured
- Fall back to deterministic mock data when the API is unavailable,
  fails, or returns nothing
- Find similar videos from AI-suggested tags
- Run search-then-score outlier detection over one batch
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Tuple

from models.video import OutlierDetectionResult, SearchResult, VideoMetric
from services.ai_service import AIService, fallback_tags
from services.mock_video_source import generate_mock_videos
from services.scoring import ScoringConfig, score_batch_with_statistics
from services.youtube_api_service import YouTubeAPIError

if TYPE_CHECKING:
    from services.youtube_api_service import YouTubeAPIService

logger = logging.getLogger(__name__)


class VideoSearchService:
    """Searches for video batches and scores them for outliers."""

    def __init__(
        self,
        youtube: Optional["YouTubeAPIService"] = None,
        max_results: int = 12,
        scoring_config: Optional[ScoringConfig] = None,
    ):
        """Initialize the video search service.

        Args:
            youtube: YouTube API service (None = always use mock data)
            max_results: Maximum videos per real search (default: 12)
            scoring_config: Default policy for outlier detection
        """
        self.youtube = youtube
        self.max_results = max_results
        self.scoring_config = scoring_config or ScoringConfig()

        logger.info(
            f"[VideoSearchService] Initialized "
            f"({'YouTube Data API' if youtube else 'mock data only'}, "
            f"max_results={max_results})"
        )

    @property
    def uses_real_data(self) -> bool:
        """Whether searches go to the YouTube Data API first."""
        return self.youtube is not None

    def search(self, query: str) -> SearchResult:
        """Search for videos, falling back to mock data.

        Args:
            query: Search query

        Returns:
            SearchResult tagged with its source ("youtube" or "mock")

        Raises:
            ValueError: If the query is empty
        """
        query = (query or "").strip()
        if not query:
            raise ValueError("Search query is required")

        if self.youtube:
            try:
                videos = self.youtube.search_videos(query, max_results=self.max_results)
                if videos:
                    return SearchResult(query=query, videos=videos, source="youtube")
                logger.info(f"No YouTube results for '{query}', using mock data")
            except YouTubeAPIError as e:
                logger.warning(f"YouTube search failed for '{query}', using mock data: {e}")

        return SearchResult(query=query, videos=generate_mock_videos(query), source="mock")

    def find_similar(
        self, video: VideoMetric, ai_service: Optional[AIService] = None
    ) -> Tuple[List[str], SearchResult]:
        """Search for videos similar to the given one.

        Args:
            video: Video to find look-alikes for
            ai_service: AI service used to suggest search tags (None = heuristic tags)

        Returns:
            Tuple of (suggested tags, search result for the joined tags)
        """
        tags = ai_service.suggest_tags(video) if ai_service else fallback_tags(video)
        similar_query = " ".join(tags).strip() or video.title
        logger.info(f"Searching for videos similar to '{video.title}' using: {tags}")
        return tags, self.search(similar_query)

    def detect_outliers(
        self, query: str, scoring_config: Optional[ScoringConfig] = None
    ) -> OutlierDetectionResult:
        """Search a query and score the resulting batch.

        Args:
            query: Search query
            scoring_config: Policy override (defaults to the service's policy)

        Returns:
            OutlierDetectionResult with videos ranked by smart score
        """
        result = self.search(query)
        scored, stats = score_batch_with_statistics(
            result.videos, config=scoring_config or self.scoring_config
        )

        logger.info(
            f"Outlier detection for '{result.query}': {len(scored)} videos, "
            f"{stats.outlier_count} outliers ({result.source} data)"
        )
        return OutlierDetectionResult(
            query=result.query,
            source=result.source,
            videos=scored,
            statistics=stats,
        )
