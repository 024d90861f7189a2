"""Outlier detection routes for the YouTube AI Studio API."""

import dataclasses
import logging
from datetime import datetime

from api.dependencies import get_scoring_config, get_search_service
from api.schemas import OutlierDetectRequest, ScoreBatchRequest
from fastapi import APIRouter, Depends, HTTPException
from models.video import VideoMetric
from services.scoring import ScoringConfig, score_batch_with_statistics
from services.video_search_service import VideoSearchService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Outlier Detection"])


def _with_direction(config: ScoringConfig, direction: str | None) -> ScoringConfig:
    if direction is None:
        return config
    return dataclasses.replace(config, outlier_direction=direction)


@router.post(
    "/api/outliers/detect",
    summary="Detect outliers for a query",
    description="Searches a query and ranks the batch by smart score, flagging IQR outliers.",
)
def detect_outliers(
    request: OutlierDetectRequest,
    search_service: VideoSearchService = Depends(get_search_service),
    scoring_config: ScoringConfig = Depends(get_scoring_config),
) -> dict:
    """Search and score one batch."""
    if not request.query.strip():
        raise HTTPException(status_code=400, detail="Query is required")

    result = search_service.detect_outliers(
        request.query,
        scoring_config=_with_direction(scoring_config, request.outlier_direction),
    )
    return result.to_dict()


@router.post(
    "/api/outliers/score",
    summary="Score a batch of videos",
    description="Ranks a caller-supplied batch. Missing counts are treated as 0.",
)
def score_videos(
    request: ScoreBatchRequest,
    scoring_config: ScoringConfig = Depends(get_scoring_config),
) -> dict:
    """Score a caller-supplied batch."""
    now = None
    if request.now:
        try:
            now = datetime.fromisoformat(request.now.strip().replace("Z", "+00:00"))
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Invalid 'now' timestamp: {request.now}")

    videos = [VideoMetric.from_dict(v.model_dump()) for v in request.videos]
    ranked, stats = score_batch_with_statistics(
        videos,
        now=now,
        config=_with_direction(scoring_config, request.outlier_direction),
    )

    logger.info(f"Scored {len(ranked)} caller-supplied videos ({stats.outlier_count} outliers)")
    return {
        "videos_analyzed": len(ranked),
        "outlier_count": stats.outlier_count,
        "statistics": stats.to_dict(),
        "videos": [v.to_dict() for v in ranked],
    }
