"""Shared pytest fixtures for YouTube AI Studio tests."""

import sys
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Generator
from unittest.mock import Mock

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


NOW = datetime(2024, 2, 1, tzinfo=timezone.utc)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def now() -> datetime:
    """Fixed scoring clock."""
    return NOW


@pytest.fixture
def sample_config() -> Dict:
    """Sample configuration for testing (no provider keys)."""
    return {
        "gemini_api_key": "",
        "youtube_api_key": "",
        "gemini_model": "gemini-2.5-flash",
        "gemini_image_model": "gemini-2.5-flash-image",
        "search_max_results": 12,
        "profile_recent_videos": 5,
        "outlier_direction": "high",
        "view_weight": 0.5,
        "velocity_weight": 0.3,
        "engagement_weight": 0.2,
        "log_level": "INFO",
        "log_json": False,
        "cors_origins": ["http://localhost:5173"],
    }


@pytest.fixture
def make_video():
    """Factory for VideoMetric objects with sensible defaults."""
    from models.video import VideoMetric

    def _make(
        video_id: str,
        views: int = 1000,
        likes: int = 50,
        comments: int = 10,
        published_at: datetime = datetime(2024, 1, 1, tzinfo=timezone.utc),
        title: str = "",
    ) -> VideoMetric:
        return VideoMetric(
            id=video_id,
            view_count=views,
            like_count=likes,
            comment_count=comments,
            published_at=published_at,
            title=title or f"Video {video_id}",
        )

    return _make


@pytest.fixture
def sample_videos(make_video):
    """Five-video batch whose last entry is a clear high outlier."""
    return [
        make_video("a", views=10, likes=1, comments=0),
        make_video("b", views=20, likes=2, comments=0),
        make_video("c", views=30, likes=3, comments=0),
        make_video("d", views=40, likes=4, comments=0),
        make_video("e", views=1000, likes=50, comments=0),
    ]


@pytest.fixture
def mock_youtube_service():
    """Mock YouTubeAPIService for testing."""
    mock = Mock()
    mock.search_videos = Mock(return_value=[])
    mock.get_channel_details = Mock(return_value=None)
    mock.get_recent_videos = Mock(return_value=[])
    return mock


@pytest.fixture
def mock_ai_service():
    """Mock AIService for testing."""
    mock = Mock()
    mock.suggest_tags = Mock(return_value=["espresso", "coffee", "review"])
    mock.generate_content = Mock()
    mock.analyze_keywords = Mock()
    mock.generate_thumbnail_prompt = Mock(return_value="A bold thumbnail")
    return mock
