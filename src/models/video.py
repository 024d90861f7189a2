"""Video metric data models shared by search, scoring and profile services."""

import math
from dataclasses import asdict, dataclass, field
from datetime import date, datetime, time, timezone
from typing import Any, Optional


def coerce_count(value: Any) -> int:
    """Coerce a raw count (str, float, None, NaN) to a non-negative int."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number) or math.isinf(number) or number < 0:
        return 0
    return int(number)


def parse_published_at(value: Any) -> datetime:
    """Parse a publish date into an aware UTC datetime.

    Accepts datetimes, dates (taken as midnight UTC), ISO 8601 strings
    ("2024-01-15T10:00:00Z") and bare date strings ("2024-01-15"). Naive
    values are assumed to be UTC. Unparseable input maps to the Unix epoch
    so scoring never fails on it.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    elif isinstance(value, str) and value.strip():
        try:
            dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return datetime.fromtimestamp(0, tz=timezone.utc)
    else:
        return datetime.fromtimestamp(0, tz=timezone.utc)

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


@dataclass
class VideoMetric:
    """Raw performance metrics for one video in a batch."""

    id: str
    view_count: int
    like_count: int
    comment_count: int
    published_at: datetime

    # Passthrough fields, opaque to scoring
    title: str = ""
    channel_title: str = ""
    thumbnail_url: str = ""
    description: str = ""
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "VideoMetric":
        """Build a metric from loosely-typed JSON (camelCase or snake_case keys)."""

        def pick(*keys: str, default: Any = None) -> Any:
            for key in keys:
                if key in data and data[key] is not None:
                    return data[key]
            return default

        tags = pick("tags", default=[])
        return cls(
            id=str(pick("id", "video_id", default="")),
            view_count=coerce_count(pick("view_count", "viewCount")),
            like_count=coerce_count(pick("like_count", "likeCount")),
            comment_count=coerce_count(pick("comment_count", "commentCount")),
            published_at=parse_published_at(pick("published_at", "publishedAt")),
            title=str(pick("title", default="")),
            channel_title=str(pick("channel_title", "channelTitle", default="")),
            thumbnail_url=str(pick("thumbnail_url", "thumbnail", default="")),
            description=str(pick("description", default="")),
            tags=[str(t) for t in tags] if isinstance(tags, list) else [],
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON responses."""
        data = asdict(self)
        data["published_at"] = self.published_at.isoformat()
        return data


@dataclass
class ScoredVideoMetric(VideoMetric):
    """A video metric annotated with batch-relative performance scores."""

    days_since_published: int = 1
    views_per_day: int = 0
    engagement_rate: float = 0.0  # (likes + comments) / views * 100
    is_outlier: bool = False
    outlier_score: float = 0.0  # distance beyond the IQR bound, in IQR units
    smart_score: float = 0.0  # weighted view / velocity / engagement composite


@dataclass
class BatchStatistics:
    """Batch-wide statistics used to flag and rank videos."""

    q1: float = 0.0
    q3: float = 0.0
    iqr: float = 0.0
    lower_bound: float = 0.0
    upper_bound: float = 0.0
    avg_views: float = 0.0
    max_views_per_day: int = 0
    max_engagement_rate: float = 0.0
    outlier_count: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON responses."""
        return asdict(self)


@dataclass
class SearchResult:
    """A batch of videos returned by one search, with its origin."""

    query: str
    videos: list[VideoMetric] = field(default_factory=list)
    source: str = "mock"  # "youtube" or "mock"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON responses."""
        return {
            "query": self.query,
            "source": self.source,
            "total": len(self.videos),
            "videos": [v.to_dict() for v in self.videos],
        }


@dataclass
class OutlierDetectionResult:
    """Result of a search-then-score outlier detection run."""

    query: str
    source: str
    videos: list[ScoredVideoMetric] = field(default_factory=list)
    statistics: Optional[BatchStatistics] = None

    @property
    def outlier_count(self) -> int:
        """Number of videos flagged as outliers."""
        return sum(1 for v in self.videos if v.is_outlier)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON export."""
        return {
            "query": self.query,
            "source": self.source,
            "videos_analyzed": len(self.videos),
            "outlier_count": self.outlier_count,
            "statistics": self.statistics.to_dict() if self.statistics else None,
            "videos": [v.to_dict() for v in self.videos],
        }
