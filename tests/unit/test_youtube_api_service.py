"""Unit tests for YouTubeAPIService with a mocked API resource."""

from unittest.mock import MagicMock, Mock

import pytest
from googleapiclient.errors import HttpError

from services.youtube_api_service import (
    YouTubeAPIError,
    YouTubeAPIService,
    best_thumbnail_url,
)

pytestmark = pytest.mark.unit


def _video_item(video_id, views="1000", likes="50", comments="5", tags=None):
    snippet = {
        "title": f"Title {video_id}",
        "channelTitle": "Chan",
        "publishedAt": "2024-01-10T12:00:00Z",
        "description": "desc",
        "thumbnails": {"default": {"url": f"https://img/{video_id}/d.jpg"}},
    }
    if tags is not None:
        snippet["tags"] = tags
    return {
        "id": video_id,
        "snippet": snippet,
        "statistics": {"viewCount": views, "likeCount": likes, "commentCount": comments},
    }


@pytest.fixture
def youtube_resource():
    """Mock googleapiclient resource."""
    return MagicMock()


@pytest.fixture
def service(youtube_resource):
    return YouTubeAPIService(api_key="test_key", youtube=youtube_resource)


class TestSearchVideos:
    """Tests for search_videos()."""

    def test_returns_metrics_in_search_order(self, service, youtube_resource):
        youtube_resource.search().list().execute.return_value = {
            "items": [{"id": {"videoId": "v2"}}, {"id": {"videoId": "v1"}}, {"id": {}}]
        }
        youtube_resource.videos().list().execute.return_value = {
            "items": [_video_item("v1", tags=["own"]), _video_item("v2", views=None)]
        }

        videos = service.search_videos("Espresso", max_results=5)

        assert [v.id for v in videos] == ["v2", "v1"]
        assert videos[0].view_count == 0
        assert videos[0].tags == ["espresso"]
        assert videos[1].tags == ["own"]
        assert videos[1].thumbnail_url == "https://img/v1/d.jpg"
        assert videos[1].published_at.isoformat() == "2024-01-10T12:00:00+00:00"

    def test_search_request_parameters(self, service, youtube_resource):
        youtube_resource.search().list().execute.return_value = {"items": []}

        service.search_videos("espresso", max_results=100)

        youtube_resource.search().list.assert_called_with(
            part="snippet", type="video", q="espresso", maxResults=50
        )

    def test_no_results_skips_videos_call(self, service, youtube_resource):
        youtube_resource.search().list().execute.return_value = {"items": []}

        assert service.search_videos("nothing") == []
        youtube_resource.videos().list().execute.assert_not_called()

    def test_quota_accounting(self, service, youtube_resource):
        youtube_resource.search().list().execute.return_value = {"items": [{"id": {"videoId": "v1"}}]}
        youtube_resource.videos().list().execute.return_value = {"items": [_video_item("v1")]}

        service.search_videos("espresso")

        assert service.quota_used == 101

    def test_http_error_becomes_service_error(self, service, youtube_resource):
        youtube_resource.search().list().execute.side_effect = HttpError(
            Mock(status=403, reason="Forbidden"), b"quotaExceeded"
        )

        with pytest.raises(YouTubeAPIError):
            service.search_videos("espresso")
        assert service.quota_used == 0


class TestVideoMetricsBatching:
    """Tests for get_video_metrics() batching."""

    def test_batches_of_fifty(self, service, youtube_resource):
        youtube_resource.videos().list().execute.return_value = {"items": []}
        youtube_resource.videos().list.reset_mock()

        service.get_video_metrics([f"v{i}" for i in range(120)])

        assert youtube_resource.videos().list.call_count == 3


class TestChannels:
    """Tests for channel lookups."""

    def test_channel_details(self, service, youtube_resource):
        youtube_resource.channels().list().execute.return_value = {
            "items": [
                {
                    "id": "UC123",
                    "snippet": {
                        "title": "Coffee Lab",
                        "customUrl": "@coffeelab",
                        "publishedAt": "2015-03-01T00:00:00Z",
                        "thumbnails": {
                            "default": {"url": "https://img/d.jpg"},
                            "high": {"url": "https://img/h.jpg"},
                        },
                    },
                    "statistics": {"subscriberCount": "52000", "videoCount": "40", "viewCount": "800000"},
                }
            ]
        }

        channel = service.get_channel_details("UC123")

        assert channel.channel_name == "Coffee Lab"
        assert channel.subscriber_count == 52000
        assert channel.video_count == 40
        assert channel.thumbnail_url == "https://img/h.jpg"
        assert channel.thumbnails == {"default": "https://img/d.jpg", "high": "https://img/h.jpg"}

    def test_unknown_channel_returns_none(self, service, youtube_resource):
        youtube_resource.channels().list().execute.return_value = {"items": []}

        assert service.get_channel_details("UCmissing") is None

    def test_recent_videos_ordered_by_date(self, service, youtube_resource):
        youtube_resource.search().list().execute.return_value = {"items": [{"id": {"videoId": "v1"}}]}
        youtube_resource.videos().list().execute.return_value = {"items": [_video_item("v1")]}

        videos = service.get_recent_videos("UC123", max_results=3)

        youtube_resource.search().list.assert_called_with(
            part="snippet", type="video", channelId="UC123", maxResults=3, order="date"
        )
        assert [v.id for v in videos] == ["v1"]
        assert videos[0].tags == []


def test_best_thumbnail_url_preference():
    thumbnails = {"default": {"url": "d"}, "medium": {"url": "m"}}

    assert best_thumbnail_url(thumbnails) == "m"
    assert best_thumbnail_url({"default": {"url": "d"}}) == "d"
    assert best_thumbnail_url({}) == ""
