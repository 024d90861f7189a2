"""Unit tests for video and content data models."""

from datetime import date, datetime, timezone

import pytest

from models.content import GeneratedContent, KeywordAnalysis
from models.video import (
    OutlierDetectionResult,
    SearchResult,
    VideoMetric,
    coerce_count,
    parse_published_at,
)

pytestmark = pytest.mark.unit


class TestCoerceCount:
    """Tests for coerce_count()."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (42, 42),
            ("1500", 1500),
            (12.9, 12),
            (None, 0),
            (float("nan"), 0),
            (float("inf"), 0),
            (-5, 0),
            ("not a number", 0),
            (True, 0),
        ],
    )
    def test_coerce(self, value, expected):
        assert coerce_count(value) == expected


class TestParsePublishedAt:
    """Tests for parse_published_at()."""

    def test_zulu_timestamp(self):
        assert parse_published_at("2024-01-15T10:30:00Z") == datetime(
            2024, 1, 15, 10, 30, tzinfo=timezone.utc
        )

    def test_bare_date(self):
        assert parse_published_at("2024-01-15") == datetime(2024, 1, 15, tzinfo=timezone.utc)

    def test_calendar_date_is_midnight_utc(self):
        assert parse_published_at(date(2024, 1, 15)) == datetime(2024, 1, 15, tzinfo=timezone.utc)

    def test_naive_datetime_assumed_utc(self):
        parsed = parse_published_at(datetime(2024, 1, 15, 8))

        assert parsed.tzinfo is not None
        assert parsed.hour == 8

    @pytest.mark.parametrize("value", ["", "yesterday", None, 12345])
    def test_invalid_maps_to_epoch(self, value):
        assert parse_published_at(value) == datetime.fromtimestamp(0, tz=timezone.utc)


class TestVideoMetric:
    """Tests for VideoMetric serialization."""

    def test_from_dict_camel_case(self):
        video = VideoMetric.from_dict(
            {
                "id": "abc",
                "viewCount": "1200",
                "likeCount": 30,
                "commentCount": None,
                "publishedAt": "2024-01-10T00:00:00Z",
                "channelTitle": "Chan",
                "thumbnail": "https://img/1.jpg",
                "tags": ["a", "b"],
            }
        )

        assert video.view_count == 1200
        assert video.like_count == 30
        assert video.comment_count == 0
        assert video.channel_title == "Chan"
        assert video.thumbnail_url == "https://img/1.jpg"
        assert video.tags == ["a", "b"]

    def test_from_dict_snake_case(self):
        video = VideoMetric.from_dict(
            {"id": "x", "view_count": 5, "published_at": "2024-01-01", "tags": "oops"}
        )

        assert video.view_count == 5
        assert video.tags == []

    def test_to_dict_serializes_date(self, make_video):
        data = make_video("a").to_dict()

        assert data["published_at"] == "2024-01-01T00:00:00+00:00"
        assert data["id"] == "a"


class TestResults:
    """Tests for search and detection result containers."""

    def test_search_result_total(self, make_video):
        result = SearchResult(query="q", videos=[make_video("a"), make_video("b")], source="youtube")

        data = result.to_dict()

        assert data["total"] == 2
        assert data["source"] == "youtube"

    def test_detection_result_without_statistics(self):
        data = OutlierDetectionResult(query="q", source="mock").to_dict()

        assert data["videos_analyzed"] == 0
        assert data["outlier_count"] == 0
        assert data["statistics"] is None


class TestContentModels:
    """Tests for AI content models built from model replies."""

    def test_generated_content_skips_malformed_entries(self):
        content = GeneratedContent.from_dict(
            "espresso",
            {
                "titles": [{"title": "Best Espresso", "seo_score": 140}, {"seo_score": 50}, "junk"],
                "description": "All about espresso",
                "tags": ["coffee", "", "espresso"],
                "image_prompts": [{"heading": "SHOTS", "prompt": "A crema close-up"}, {"heading": "x"}],
            },
        )

        assert [t.title for t in content.titles] == ["Best Espresso"]
        assert content.titles[0].seo_score == 100
        assert content.tags == ["coffee", "espresso"]
        assert len(content.image_prompts) == 1

    def test_keyword_analysis_sorted_by_score(self):
        analysis = KeywordAnalysis.from_dict(
            "espresso",
            {
                "keywords": [
                    {"keyword": "latte art", "score": 40},
                    {"keyword": "espresso machine", "score": 90},
                ]
            },
        )

        assert analysis.main_keyword == "espresso"
        assert [k.keyword for k in analysis.keywords] == ["espresso machine", "latte art"]

    def test_string_lists_ignore_non_list_values(self):
        content = GeneratedContent.from_dict("espresso", {"tags": "coffee, espresso"})
        analysis = KeywordAnalysis.from_dict(
            "espresso",
            {"keywords": [{"keyword": "crema", "score": 70, "related_queries": "crema tips"}]},
        )

        assert content.tags == []
        assert analysis.keywords[0].related_queries == []
