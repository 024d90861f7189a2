"""Channel analytics profile built from the YouTube Data API."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from models.video import ScoredVideoMetric
from services.scoring import score_batch
from services.youtube_api_service import ChannelInfo, YouTubeAPIService

logger = logging.getLogger(__name__)


class YouTubeNotConfiguredError(Exception):
    """Raised when a profile is requested without a YouTube API key."""

    pass


class ChannelNotFoundError(Exception):
    """Raised when the channel ID does not resolve to a channel."""

    pass


@dataclass
class ChannelProfile:
    """Channel statistics plus its recent uploads, scored for display."""

    channel: ChannelInfo
    recent_videos: List[ScoredVideoMetric] = field(default_factory=list)

    @property
    def average_views(self) -> float:
        """Lifetime views per upload."""
        if self.channel.video_count <= 0:
            return 0.0
        return self.channel.view_count / self.channel.video_count

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON responses."""
        ch = self.channel
        return {
            "channel_id": ch.channel_id,
            "channel_title": ch.channel_name,
            "subscriber_count": ch.subscriber_count,
            "video_count": ch.video_count,
            "view_count": ch.view_count,
            "average_views_per_video": round(self.average_views, 0),
            "custom_url": ch.custom_url,
            "description": ch.description,
            "published_at": ch.published_at,
            "thumbnail_url": ch.thumbnail_url,
            "thumbnails": ch.thumbnails,
            "recent_videos": [v.to_dict() for v in self.recent_videos],
        }


class ProfileService:
    """Looks up a channel's statistics and recent uploads."""

    def __init__(self, youtube: Optional[YouTubeAPIService], recent_videos: int = 5):
        """Initialize the profile service.

        Args:
            youtube: YouTube API service (None when no key is configured)
            recent_videos: Number of recent uploads to include
        """
        self.youtube = youtube
        self.recent_videos = recent_videos

    def get_profile(self, channel_id: str) -> ChannelProfile:
        """Fetch a channel profile.

        Args:
            channel_id: YouTube channel ID

        Returns:
            ChannelProfile with recent uploads ranked by smart score

        Raises:
            YouTubeNotConfiguredError: If no YouTube API key is configured
            ChannelNotFoundError: If the channel does not exist
            YouTubeAPIError: If the API call fails
        """
        if not self.youtube:
            raise YouTubeNotConfiguredError("YOUTUBE_API_KEY is not configured")

        channel_id = channel_id.strip()
        channel = self.youtube.get_channel_details(channel_id)
        if channel is None:
            raise ChannelNotFoundError(f"Channel not found: {channel_id}")

        recent = self.youtube.get_recent_videos(channel_id, max_results=self.recent_videos)
        logger.info(
            f"Loaded profile for {channel.channel_name}: "
            f"{channel.subscriber_count} subscribers, {len(recent)} recent videos"
        )
        return ChannelProfile(channel=channel, recent_videos=score_batch(recent))
