#!/usr/bin/env python3
"""CLI for scoring a batch of videos and flagging outliers.

Usage:
    # Search a query (YouTube when YOUTUBE_API_KEY is set, mock data otherwise)
    python -m cli.detect_outliers "sourdough bread"

    # Score a local JSON batch instead of searching
    python -m cli.detect_outliers "my channel" --file videos.json

    # Flag unusually low performers too, and print JSON
    python -m cli.detect_outliers "sourdough bread" --direction both --json
"""

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path

# Add src to path for imports
src_path = Path(__file__).parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from rich.console import Console
from rich.table import Table

from models.video import OutlierDetectionResult, VideoMetric
from services.scoring import ScoringConfig, score_batch_with_statistics
from services.video_search_service import VideoSearchService
from services.youtube_api_service import YouTubeAPIService
from utils.config import load_config, setup_logging

console = Console()


def load_videos_file(path: Path) -> list[VideoMetric]:
    """Load a video batch from a JSON file.

    The file holds either a list of video objects or an object with a
    ``videos`` list (the shape the search endpoints return).
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("videos", [])
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a list of videos")
    return [VideoMetric.from_dict(item) for item in data if isinstance(item, dict)]


def score_file(
    query: str, path: Path, config: ScoringConfig, now: datetime | None = None
) -> OutlierDetectionResult:
    """Score a batch loaded from disk."""
    videos, stats = score_batch_with_statistics(load_videos_file(path), now=now, config=config)
    return OutlierDetectionResult(query=query, source=f"file:{path.name}", videos=videos, statistics=stats)


def build_table(result: OutlierDetectionResult) -> Table:
    """Render a scored batch as a Rich table."""
    table = Table(title=f"Outlier Detection: {result.query} ({result.source})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title", style="cyan", max_width=50)
    table.add_column("Views", justify="right")
    table.add_column("Views/Day", justify="right")
    table.add_column("Engagement", justify="right")
    table.add_column("Outlier", justify="center")
    table.add_column("Smart Score", justify="right", style="bold")

    for rank, video in enumerate(result.videos, start=1):
        table.add_row(
            str(rank),
            video.title or video.id,
            f"{video.view_count:,}",
            f"{video.views_per_day:,}",
            f"{video.engagement_rate:.2f}%",
            f"[green]✓ {video.outlier_score:.2f}[/green]" if video.is_outlier else "",
            f"{video.smart_score:.2f}",
        )

    return table


def show_statistics(result: OutlierDetectionResult) -> None:
    """Print the batch statistics below the table."""
    stats = result.statistics
    if stats is None:
        return
    console.print(
        f"[dim]Q1 {stats.q1:,.0f} | Q3 {stats.q3:,.0f} | IQR {stats.iqr:,.0f} | "
        f"upper bound {stats.upper_bound:,.0f} | avg views {stats.avg_views:,.0f}[/dim]"
    )
    console.print(f"[bold green]{stats.outlier_count} outlier(s) in {len(result.videos)} videos[/bold green]")


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Rank a batch of videos by smart score and flag view-count outliers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m cli.detect_outliers "sourdough bread"
    python -m cli.detect_outliers "my channel" --file videos.json --direction both
        """,
    )

    parser.add_argument("query", type=str, help="Search query (or a label when using --file)")
    parser.add_argument(
        "--file",
        type=Path,
        help="Score videos from a JSON file instead of searching",
    )
    parser.add_argument(
        "--direction",
        type=str,
        choices=["high", "both"],
        help="Outlier direction (default: OUTLIER_DIRECTION or 'high')",
    )
    parser.add_argument(
        "--now",
        type=str,
        help="ISO timestamp to score a --file batch against (default: current time)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON instead of a table",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    config = load_config()
    if args.verbose:
        setup_logging("DEBUG")
    else:
        # Keep stdout clean for --json output
        setup_logging("WARNING" if args.json else config.get("log_level", "INFO"))

    if args.direction:
        config["outlier_direction"] = args.direction

    try:
        scoring_config = ScoringConfig.from_config(config)
        now = datetime.fromisoformat(args.now.replace("Z", "+00:00")) if args.now else None
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    if args.file:
        if not args.file.exists():
            console.print(f"[red]Error: file not found: {args.file}[/red]")
            sys.exit(1)
        try:
            result = score_file(args.query, args.file, scoring_config, now=now)
        except ValueError as e:
            console.print(f"[red]Error: could not read {args.file}: {e}[/red]")
            sys.exit(1)
    else:
        if not args.query.strip():
            console.print("[red]Error: query is required[/red]")
            sys.exit(1)
        youtube = None
        if config.get("youtube_api_key"):
            youtube = YouTubeAPIService(config["youtube_api_key"])
        elif not args.json:
            console.print("[dim]YOUTUBE_API_KEY not set, using mock data[/dim]")
        service = VideoSearchService(
            youtube=youtube,
            max_results=config.get("search_max_results", 12),
            scoring_config=scoring_config,
        )
        result = service.detect_outliers(args.query)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return

    console.print(build_table(result))
    show_statistics(result)


if __name__ == "__main__":
    main()
