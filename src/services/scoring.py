"""Batch performance scoring for video search results.

Scores one batch of videos at a time. Every statistic (quartiles, mean
views, max velocity, max engagement) is recomputed from the batch on each
call, so results are a pure function of the batch and the evaluation time.

Pipeline:
1. Derived per-video metrics (age in days, views/day, engagement rate)
2. IQR outlier bounds over view counts (index-based quartiles)
3. Outlier flag and outlier score
4. Weighted smart score: views vs. batch mean, velocity vs. batch max,
   engagement vs. batch max
5. Stable sort by smart score, highest first
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

import numpy as np

from models.video import (
    BatchStatistics,
    ScoredVideoMetric,
    VideoMetric,
    coerce_count,
    parse_published_at,
)

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400
IQR_MULTIPLIER = 1.5

OUTLIER_DIRECTIONS = ("high", "both")


@dataclass(frozen=True)
class ScoringConfig:
    """Tunable scoring policy.

    Defaults reproduce the dashboard's observed ranking exactly.
    """

    outlier_direction: str = "high"
    view_weight: float = 0.5
    velocity_weight: float = 0.3
    engagement_weight: float = 0.2

    def __post_init__(self):
        if self.outlier_direction not in OUTLIER_DIRECTIONS:
            raise ValueError(
                f"outlier_direction must be one of {OUTLIER_DIRECTIONS}, "
                f"got {self.outlier_direction!r}"
            )
        weights = (self.view_weight, self.velocity_weight, self.engagement_weight)
        if any(w < 0 for w in weights):
            raise ValueError("Scoring weights must be non-negative")
        if not math.isclose(sum(weights), 1.0, abs_tol=1e-9):
            raise ValueError(f"Scoring weights must sum to 1.0, got {sum(weights)}")

    @classmethod
    def from_config(cls, config: dict) -> "ScoringConfig":
        """Build from the application config dict, falling back to defaults."""
        return cls(
            outlier_direction=config.get("outlier_direction") or "high",
            view_weight=float(config.get("view_weight", 0.5)),
            velocity_weight=float(config.get("velocity_weight", 0.3)),
            engagement_weight=float(config.get("engagement_weight", 0.2)),
        )


DEFAULT_SCORING_CONFIG = ScoringConfig()


def round2(value: float) -> float:
    """Round to two decimal places."""
    return round(float(value), 2)


def days_since_published(published_at: datetime, now: datetime) -> int:
    """Whole days between publish time and now, never less than 1."""
    published_at = parse_published_at(published_at)
    elapsed = (now - published_at).total_seconds()
    return max(1, math.floor(elapsed / SECONDS_PER_DAY))


def engagement_rate(view_count: int, like_count: int, comment_count: int) -> float:
    """(likes + comments) / views as a percentage, 0 for unviewed videos."""
    if view_count <= 0:
        return 0.0
    return round2((like_count + comment_count) / view_count * 100)


def quartile_bounds(view_counts: Iterable[int]) -> Tuple[float, float, float, float, float]:
    """Index-based IQR bounds over view counts.

    Quartiles are read straight from the sorted values at floor(n * 0.25)
    and floor(n * 0.75), with no interpolation between ranks.

    Returns:
        Tuple of (q1, q3, iqr, lower_bound, upper_bound). All zero for an
        empty input.
    """
    # Python ints; an int64 array overflows past 2**63
    values = sorted(view_counts)
    n = len(values)
    if n == 0:
        return 0.0, 0.0, 0.0, 0.0, 0.0

    q1 = float(values[math.floor(n * 0.25)])
    q3 = float(values[math.floor(n * 0.75)])
    iqr = q3 - q1
    return q1, q3, iqr, q1 - IQR_MULTIPLIER * iqr, q3 + IQR_MULTIPLIER * iqr


def _derive(video: VideoMetric, now: datetime) -> ScoredVideoMetric:
    """Copy a video into a scored record with its per-video metrics filled in."""
    views = coerce_count(video.view_count)
    likes = coerce_count(video.like_count)
    comments = coerce_count(video.comment_count)
    days = days_since_published(video.published_at, now)

    return ScoredVideoMetric(
        id=video.id,
        view_count=views,
        like_count=likes,
        comment_count=comments,
        published_at=parse_published_at(video.published_at),
        title=video.title,
        channel_title=video.channel_title,
        thumbnail_url=video.thumbnail_url,
        description=video.description,
        tags=list(video.tags),
        days_since_published=days,
        views_per_day=views // days,
        engagement_rate=engagement_rate(views, likes, comments),
    )


def _outlier_score(
    view_count: int, stats: BatchStatistics, direction: str
) -> Tuple[bool, float]:
    """Flag a view count against the batch bounds and measure how far out it is."""
    if view_count > stats.upper_bound:
        distance = view_count - stats.upper_bound
    elif direction == "both" and view_count < stats.lower_bound:
        distance = stats.lower_bound - view_count
    else:
        return False, 0.0

    if stats.iqr <= 0:
        return True, 0.0
    return True, max(0.0, round2(distance / stats.iqr))


def compute_batch_statistics(
    scored: List[ScoredVideoMetric],
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> BatchStatistics:
    """Batch-wide bounds and normalization maxima for already-derived videos."""
    if not scored:
        return BatchStatistics()

    view_counts = [v.view_count for v in scored]
    q1, q3, iqr, lower_bound, upper_bound = quartile_bounds(view_counts)

    stats = BatchStatistics(
        q1=q1,
        q3=q3,
        iqr=iqr,
        lower_bound=lower_bound,
        upper_bound=upper_bound,
        avg_views=float(np.mean(np.asarray(view_counts, dtype=float))),
        max_views_per_day=max(v.views_per_day for v in scored),
        max_engagement_rate=max(v.engagement_rate for v in scored),
    )
    stats.outlier_count = sum(
        1
        for v in scored
        if _outlier_score(v.view_count, stats, config.outlier_direction)[0]
    )
    return stats


def _smart_score(
    video: ScoredVideoMetric, stats: BatchStatistics, config: ScoringConfig
) -> float:
    """Weighted composite of relative views, velocity and engagement."""
    view_score = video.view_count / stats.avg_views if stats.avg_views > 0 else 1.0
    velocity_score = (
        video.views_per_day / stats.max_views_per_day
        if stats.max_views_per_day > 0
        else 0.0
    )
    engagement_score = (
        video.engagement_rate / stats.max_engagement_rate
        if stats.max_engagement_rate > 0
        else 0.0
    )
    return round2(
        view_score * config.view_weight
        + velocity_score * config.velocity_weight
        + engagement_score * config.engagement_weight
    )


def score_batch_with_statistics(
    videos: Iterable[VideoMetric],
    now: Optional[datetime] = None,
    config: Optional[ScoringConfig] = None,
) -> Tuple[List[ScoredVideoMetric], BatchStatistics]:
    """Score a batch and also return the statistics it was scored against.

    Args:
        videos: The batch. Never mutated; scored copies are returned.
        now: Evaluation time (defaults to the current UTC time)
        config: Scoring policy (defaults to high-side outliers, 0.5/0.3/0.2)

    Returns:
        Tuple of (scored videos sorted by smart score descending, statistics)
    """
    config = config or DEFAULT_SCORING_CONFIG
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    scored = [_derive(video, now) for video in videos]
    stats = compute_batch_statistics(scored, config)

    for video in scored:
        video.is_outlier, video.outlier_score = _outlier_score(
            video.view_count, stats, config.outlier_direction
        )
        video.smart_score = _smart_score(video, stats, config)

    # sorted() is stable, so equal scores keep their input order
    ranked = sorted(scored, key=lambda v: v.smart_score, reverse=True)

    logger.debug(
        f"Scored batch of {len(ranked)} videos: {stats.outlier_count} outliers "
        f"(upper bound {stats.upper_bound:.0f}, direction={config.outlier_direction})"
    )
    return ranked, stats


def score_batch(
    videos: Iterable[VideoMetric],
    now: Optional[datetime] = None,
    config: Optional[ScoringConfig] = None,
) -> List[ScoredVideoMetric]:
    """Score and rank a batch of videos by smart score."""
    ranked, _ = score_batch_with_statistics(videos, now=now, config=config)
    return ranked
