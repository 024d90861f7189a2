"""Unit tests for the batch scoring engine."""

from dataclasses import asdict
from datetime import date, datetime, timezone

import pytest

from models.video import BatchStatistics
from services.scoring import (
    ScoringConfig,
    days_since_published,
    engagement_rate,
    quartile_bounds,
    score_batch,
    score_batch_with_statistics,
)

pytestmark = pytest.mark.unit


class TestQuartileBounds:
    """Tests for index-based IQR bounds."""

    def test_reads_quartiles_by_index(self):
        """q1 and q3 come from sorted[floor(n*.25)] and sorted[floor(n*.75)]."""
        q1, q3, iqr, lower, upper = quartile_bounds([1000, 40, 10, 30, 20])

        assert (q1, q3, iqr) == (20.0, 40.0, 20.0)
        assert lower == -10.0
        assert upper == 70.0

    def test_empty_input_is_all_zero(self):
        assert quartile_bounds([]) == (0.0, 0.0, 0.0, 0.0, 0.0)

    def test_single_value_has_zero_iqr(self):
        q1, q3, iqr, _, upper = quartile_bounds([500])

        assert q1 == q3 == 500.0
        assert iqr == 0.0
        assert upper == 500.0


class TestDerivedMetrics:
    """Tests for per-video derived metrics."""

    def test_engagement_rate_rounding(self):
        """1000 views, 40 likes, 10 comments -> 5.0%."""
        assert engagement_rate(1000, 40, 10) == 5.0

    def test_engagement_rate_zero_views(self):
        assert engagement_rate(0, 10, 10) == 0.0

    def test_published_today_counts_as_one_day(self):
        now = datetime(2024, 2, 1, 12, 0, tzinfo=timezone.utc)
        published = datetime(2024, 2, 1, 8, 0, tzinfo=timezone.utc)

        assert days_since_published(published, now) == 1

    def test_future_publish_date_counts_as_one_day(self):
        now = datetime(2024, 2, 1, tzinfo=timezone.utc)
        published = datetime(2024, 3, 1, tzinfo=timezone.utc)

        assert days_since_published(published, now) == 1

    def test_whole_days_are_floored(self):
        now = datetime(2024, 2, 1, 23, 0, tzinfo=timezone.utc)
        published = datetime(2024, 1, 1, tzinfo=timezone.utc)

        assert days_since_published(published, now) == 31


class TestScoreBatch:
    """Tests for score_batch()."""

    def test_outlier_boundary(self, sample_videos, now):
        """Only the 1000-view video is an outlier, scored (1000 - 70) / 20."""
        ranked, stats = score_batch_with_statistics(sample_videos, now=now)

        outliers = [v for v in ranked if v.is_outlier]
        assert [v.id for v in outliers] == ["e"]
        assert outliers[0].outlier_score == 46.5
        assert stats.upper_bound == 70.0
        assert stats.outlier_count == 1
        assert all(v.outlier_score == 0.0 for v in ranked if not v.is_outlier)

    def test_ranked_by_smart_score(self, sample_videos, now):
        ranked = score_batch(sample_videos, now=now)

        assert [v.id for v in ranked] == ["e", "d", "c", "b", "a"]
        assert ranked[0].smart_score == 2.67
        assert ranked[-1].smart_score == 0.22
        scores = [v.smart_score for v in ranked]
        assert scores == sorted(scores, reverse=True)

    def test_derived_fields(self, sample_videos, now):
        ranked = score_batch(sample_videos, now=now)
        top = ranked[0]

        assert top.days_since_published == 31
        assert top.views_per_day == 32
        assert top.engagement_rate == 5.0

    def test_deterministic(self, sample_videos, now):
        first = score_batch(sample_videos, now=now)
        second = score_batch(sample_videos, now=now)

        assert [asdict(v) for v in first] == [asdict(v) for v in second]

    @pytest.mark.parametrize("size", [0, 1, 2, 5, 9])
    def test_length_preserved(self, make_video, now, size):
        videos = [make_video(str(i), views=i * 100) for i in range(size)]

        assert len(score_batch(videos, now=now)) == size

    def test_empty_batch(self, now):
        ranked, stats = score_batch_with_statistics([], now=now)

        assert ranked == []
        assert stats == BatchStatistics()

    def test_equal_views_have_no_outliers(self, make_video, now):
        videos = [make_video(str(i), views=100) for i in range(4)]

        ranked, stats = score_batch_with_statistics(videos, now=now)

        assert stats.iqr == 0.0
        assert not any(v.is_outlier for v in ranked)
        assert all(v.outlier_score == 0.0 for v in ranked)

    def test_single_zero_view_video(self, make_video, now):
        """avgViews == 0 falls back to a view ratio of 1."""
        ranked = score_batch([make_video("z", views=0, likes=0, comments=0)], now=now)

        assert len(ranked) == 1
        assert ranked[0].engagement_rate == 0.0
        assert ranked[0].views_per_day == 0
        assert ranked[0].is_outlier is False
        assert ranked[0].smart_score == 0.5

    def test_all_zero_batch_does_not_raise(self, make_video, now):
        videos = [make_video(str(i), views=0, likes=0, comments=0) for i in range(3)]

        ranked = score_batch(videos, now=now)

        assert [v.smart_score for v in ranked] == [0.5, 0.5, 0.5]

    def test_stable_sort_for_equal_scores(self, make_video, now):
        videos = [make_video(video_id, views=500) for video_id in ("x", "y", "z")]

        ranked = score_batch(videos, now=now)

        assert [v.id for v in ranked] == ["x", "y", "z"]

    def test_input_not_mutated(self, sample_videos, now):
        before = [asdict(v) for v in sample_videos]

        ranked = score_batch(sample_videos, now=now)

        assert [asdict(v) for v in sample_videos] == before
        assert all(r is not v for r in ranked for v in sample_videos)

    def test_missing_counts_treated_as_zero(self, make_video, now):
        video = make_video("n", views=1000)
        video.like_count = None
        video.comment_count = float("nan")

        ranked = score_batch([video], now=now)

        assert ranked[0].like_count == 0
        assert ranked[0].comment_count == 0
        assert ranked[0].engagement_rate == 0.0

    def test_calendar_date_published_at(self, make_video, now):
        ranked = score_batch([make_video("d", views=3100, published_at=date(2024, 1, 1))], now=now)

        assert ranked[0].days_since_published == 31
        assert ranked[0].views_per_day == 100
        assert ranked[0].published_at == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_zero_iqr_still_flags_high_value(self, make_video, now):
        """With iqr == 0 a value above the bound is flagged with score 0."""
        views = [10, 10, 10, 10, 1000]
        videos = [make_video(str(i), views=v) for i, v in enumerate(views)]

        ranked, stats = score_batch_with_statistics(videos, now=now)

        assert stats.iqr == 0.0
        assert stats.upper_bound == 10.0
        assert stats.outlier_count == 1
        assert ranked[0].id == "4"
        assert ranked[0].is_outlier is True
        assert ranked[0].outlier_score == 0.0
        assert not any(v.is_outlier for v in ranked[1:])

    def test_counts_beyond_int64(self, make_video, now):
        videos = [make_video("big", views=10**19), make_video("a", views=10), make_video("b", views=20)]

        ranked, stats = score_batch_with_statistics(videos, now=now)

        assert ranked[0].id == "big"
        assert ranked[0].view_count == 10**19
        assert stats.q3 == float(10**19)

    def test_naive_now_treated_as_utc(self, sample_videos):
        aware = score_batch(sample_videos, now=datetime(2024, 2, 1, tzinfo=timezone.utc))
        naive = score_batch(sample_videos, now=datetime(2024, 2, 1))

        assert [asdict(v) for v in aware] == [asdict(v) for v in naive]


class TestOutlierDirection:
    """Tests for the high/both outlier policy."""

    @pytest.fixture
    def low_outlier_batch(self, make_video):
        views = [10, 100, 110, 120, 130, 140, 150, 160]
        return [make_video(f"v{v}", views=v) for v in views]

    def test_high_ignores_low_performers(self, low_outlier_batch, now):
        ranked = score_batch(low_outlier_batch, now=now)

        assert not any(v.is_outlier for v in ranked)

    def test_both_flags_low_performers(self, low_outlier_batch, now):
        config = ScoringConfig(outlier_direction="both")

        ranked, stats = score_batch_with_statistics(low_outlier_batch, now=now, config=config)

        assert stats.lower_bound == 50.0
        outliers = [v for v in ranked if v.is_outlier]
        assert [v.id for v in outliers] == ["v10"]
        assert outliers[0].outlier_score == 1.0
        assert stats.outlier_count == 1


class TestScoringConfig:
    """Tests for ScoringConfig validation."""

    def test_defaults(self):
        config = ScoringConfig()

        assert config.outlier_direction == "high"
        assert (config.view_weight, config.velocity_weight, config.engagement_weight) == (0.5, 0.3, 0.2)

    def test_rejects_weights_not_summing_to_one(self):
        with pytest.raises(ValueError, match="sum to 1.0"):
            ScoringConfig(view_weight=0.6)

    def test_rejects_negative_weights(self):
        with pytest.raises(ValueError, match="non-negative"):
            ScoringConfig(view_weight=1.2, velocity_weight=-0.4, engagement_weight=0.2)

    def test_rejects_unknown_direction(self):
        with pytest.raises(ValueError, match="outlier_direction"):
            ScoringConfig(outlier_direction="low")

    def test_from_config(self, sample_config):
        sample_config.update(outlier_direction="both", view_weight=1.0, velocity_weight=0.0, engagement_weight=0.0)

        config = ScoringConfig.from_config(sample_config)

        assert config.outlier_direction == "both"
        assert config.view_weight == 1.0

    def test_custom_weights_change_ranking_score(self, sample_videos, now):
        config = ScoringConfig(view_weight=1.0, velocity_weight=0.0, engagement_weight=0.0)

        ranked = score_batch(sample_videos, now=now, config=config)

        assert ranked[0].id == "e"
        assert ranked[0].smart_score == 4.55
