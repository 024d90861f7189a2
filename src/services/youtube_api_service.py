"""YouTube Data API Service for video search and channel analytics.

Uses the official YouTube Data API v3 through google-api-python-client.

Quota Budget (10,000 units/day free):
- search.list: 100 units
- channels.list: 1 unit
- videos.list: 1 unit (batched, 50 per request)

One dashboard search costs ~101 units; one profile lookup ~102 units.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from models.video import VideoMetric, coerce_count, parse_published_at

logger = logging.getLogger(__name__)


class YouTubeAPIError(Exception):
    """Error talking to the YouTube Data API."""

    pass


@dataclass
class ChannelInfo:
    """Channel information from YouTube API."""

    channel_id: str
    channel_name: str
    subscriber_count: int
    video_count: int
    view_count: int
    description: str = ""
    custom_url: str = ""
    thumbnail_url: str = ""
    published_at: str = ""
    thumbnails: Dict[str, str] = field(default_factory=dict)


def best_thumbnail_url(thumbnails: dict, preferred: tuple = ("medium", "default")) -> str:
    """Pick the first available thumbnail URL in order of preference."""
    for key in preferred:
        url = (thumbnails.get(key) or {}).get("url")
        if url:
            return url
    return ""


class YouTubeAPIService:
    """Service for interacting with YouTube Data API v3.

    Features:
    - Batched statistics requests (50 items per request)
    - Quota tracking
    - Video search with statistics and channel analytics
    """

    # Batch sizes for API requests
    MAX_BATCH_SIZE = 50  # YouTube API limit

    # Quota costs
    QUOTA_SEARCH = 100
    QUOTA_CHANNELS = 1
    QUOTA_VIDEOS = 1

    def __init__(self, api_key: str, youtube=None):
        """Initialize the YouTube API service.

        Args:
            api_key: YouTube Data API v3 key
            youtube: Prebuilt API resource (tests inject a mock here)
        """
        self.api_key = api_key
        self.youtube = youtube or build(
            "youtube", "v3", developerKey=api_key, cache_discovery=False
        )
        self._quota_used = 0
        self._lock = threading.RLock()  # Thread safety for API calls

    @property
    def quota_used(self) -> int:
        """Get total quota units used in this session."""
        return self._quota_used

    def _execute_request(self, request, cost: int):
        """Execute an API request with thread safety and quota accounting.

        Args:
            request: Google API request object
            cost: Quota units charged for this request

        Returns:
            API response

        Raises:
            YouTubeAPIError: If the API rejects the request
        """
        with self._lock:
            try:
                response = request.execute()
            except HttpError as e:
                logger.error(f"YouTube API error: {e}")
                raise YouTubeAPIError(f"YouTube API error: {e}") from e
            self._quota_used += cost
            return response

    def _search_video_ids(self, **params) -> List[str]:
        """Run search.list for videos and return the IDs in result order."""
        request = self.youtube.search().list(part="snippet", type="video", **params)
        response = self._execute_request(request, self.QUOTA_SEARCH)
        return [
            item["id"]["videoId"]
            for item in response.get("items", [])
            if item.get("id", {}).get("videoId")
        ]

    def get_video_metrics(
        self, video_ids: List[str], default_tags: Optional[List[str]] = None
    ) -> List[VideoMetric]:
        """Get snippet and statistics for multiple videos (batched).

        Args:
            video_ids: List of video IDs
            default_tags: Tags to use for videos that publish none

        Returns:
            VideoMetric list in the same order as video_ids (missing IDs dropped)
        """
        found: Dict[str, VideoMetric] = {}

        # Process in batches of 50
        for i in range(0, len(video_ids), self.MAX_BATCH_SIZE):
            batch = video_ids[i:i + self.MAX_BATCH_SIZE]

            request = self.youtube.videos().list(
                part="snippet,statistics",
                id=",".join(batch),
            )
            response = self._execute_request(request, self.QUOTA_VIDEOS)

            for item in response.get("items", []):
                snippet = item.get("snippet", {})
                stats = item.get("statistics", {})
                video_id = item["id"]

                found[video_id] = VideoMetric(
                    id=video_id,
                    view_count=coerce_count(stats.get("viewCount")),
                    like_count=coerce_count(stats.get("likeCount")),
                    comment_count=coerce_count(stats.get("commentCount")),
                    published_at=parse_published_at(snippet.get("publishedAt")),
                    title=snippet.get("title", ""),
                    channel_title=snippet.get("channelTitle", ""),
                    thumbnail_url=best_thumbnail_url(snippet.get("thumbnails", {})),
                    description=snippet.get("description", ""),
                    tags=snippet.get("tags") or list(default_tags or []),
                )

        return [found[vid] for vid in video_ids if vid in found]

    def search_videos(self, query: str, max_results: int = 12) -> List[VideoMetric]:
        """Search for videos by query and attach their statistics.

        Args:
            query: Search query
            max_results: Maximum number of videos to return (API caps at 50)

        Returns:
            List of VideoMetric objects in search relevance order
        """
        video_ids = self._search_video_ids(q=query, maxResults=min(50, max_results))
        if not video_ids:
            logger.info(f"YouTube search returned no videos for: {query}")
            return []

        videos = self.get_video_metrics(video_ids, default_tags=[query.lower()])
        logger.info(
            f"Fetched {len(videos)} YouTube videos for '{query}' "
            f"(quota used: {self.quota_used} units)"
        )
        return videos

    def get_channel_details(self, channel_id: str) -> Optional[ChannelInfo]:
        """Get snippet and statistics for a channel.

        Args:
            channel_id: YouTube channel ID (UC...)

        Returns:
            ChannelInfo, or None if the channel does not exist
        """
        request = self.youtube.channels().list(
            part="snippet,statistics",
            id=channel_id,
        )
        response = self._execute_request(request, self.QUOTA_CHANNELS)

        items = response.get("items") or []
        if not items:
            return None

        item = items[0]
        snippet = item.get("snippet", {})
        stats = item.get("statistics", {})
        thumbnails = snippet.get("thumbnails", {})

        return ChannelInfo(
            channel_id=item.get("id", channel_id),
            channel_name=snippet.get("title", ""),
            subscriber_count=coerce_count(stats.get("subscriberCount")),
            video_count=coerce_count(stats.get("videoCount")),
            view_count=coerce_count(stats.get("viewCount")),
            description=snippet.get("description", ""),
            custom_url=snippet.get("customUrl", ""),
            thumbnail_url=best_thumbnail_url(thumbnails, ("high", "medium", "default")),
            published_at=snippet.get("publishedAt", ""),
            thumbnails={
                key: value.get("url", "")
                for key, value in thumbnails.items()
                if isinstance(value, dict)
            },
        )

    def get_recent_videos(self, channel_id: str, max_results: int = 5) -> List[VideoMetric]:
        """Get a channel's most recent uploads with statistics.

        Args:
            channel_id: YouTube channel ID
            max_results: Number of uploads to return

        Returns:
            List of VideoMetric objects, newest first
        """
        video_ids = self._search_video_ids(
            channelId=channel_id,
            maxResults=min(50, max_results),
            order="date",
        )
        if not video_ids:
            return []
        return self.get_video_metrics(video_ids)
