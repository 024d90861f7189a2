"""Core routes for the YouTube AI Studio API (root and health check)."""

from api.dependencies import get_config
from api.schemas import HealthResponse, RootResponse
from fastapi import APIRouter, Depends

API_NAME = "YouTube AI Studio API"
API_VERSION = "1.0.0"

router = APIRouter(tags=["Core"])


@router.get(
    "/",
    response_model=RootResponse,
    summary="API root",
    description="Returns API name and version.",
)
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": API_NAME, "version": API_VERSION}


@router.get(
    "/api/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns server health and which providers have credentials.",
)
async def health(config: dict = Depends(get_config)) -> dict:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "providers": {
            "youtube": bool(config.get("youtube_api_key")),
            "gemini": bool(config.get("gemini_api_key")),
        },
    }
