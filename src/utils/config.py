"""Configuration loading and validation for YouTube AI Studio."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from rich.logging import RichHandler

# Get the project root directory (parent of src)
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Load environment variables from .env file in project root
load_dotenv(PROJECT_ROOT / ".env")

DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://localhost:3000"

NOISY_LOGGERS = [
    "httpx",
    "httpcore",
    "google_genai",
    "google_genai.models",
    "googleapiclient.discovery_cache",
    "urllib3.connectionpool",
]


def _get_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def load_config() -> dict:
    """Load configuration from environment variables."""
    config = {
        # API keys (both optional: without them search uses mock data)
        "gemini_api_key": os.getenv("GEMINI_API_KEY", ""),
        "youtube_api_key": os.getenv("YOUTUBE_API_KEY", ""),
        # Model configurations
        "gemini_model": os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
        "gemini_image_model": os.getenv("GEMINI_IMAGE_MODEL", "gemini-2.5-flash-image"),
        # Search settings
        "search_max_results": int(os.getenv("SEARCH_MAX_RESULTS", "12")),
        "profile_recent_videos": int(os.getenv("PROFILE_RECENT_VIDEOS", "5")),
        # Scoring engine
        "outlier_direction": os.getenv("OUTLIER_DIRECTION", "high").lower(),
        "view_weight": float(os.getenv("VIEW_WEIGHT", "0.5")),
        "velocity_weight": float(os.getenv("VELOCITY_WEIGHT", "0.3")),
        "engagement_weight": float(os.getenv("ENGAGEMENT_WEIGHT", "0.2")),
        # Logging
        "log_level": os.getenv("LOG_LEVEL", "INFO").upper(),
        "log_json": _get_bool("LOG_JSON", "false"),
        # Web server
        "cors_origins": [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS).split(",")
            if origin.strip()
        ],
    }

    return config


def validate_config(config: dict) -> list[str]:
    """Validate configuration and return list of problems.

    Every provider is optional, so the caller decides whether a problem is
    fatal. Missing keys are reported so the operator knows which features run
    in fallback mode.
    """
    errors = []

    if not config.get("youtube_api_key"):
        errors.append("YOUTUBE_API_KEY not set: search uses mock data, profiles are disabled")

    if not config.get("gemini_api_key"):
        errors.append("GEMINI_API_KEY not set: content, keyword and thumbnail generation are disabled")

    if config.get("outlier_direction") not in ("high", "both"):
        errors.append(
            f"OUTLIER_DIRECTION must be 'high' or 'both', got {config.get('outlier_direction')!r}"
        )

    weights = [
        config.get("view_weight", 0.0),
        config.get("velocity_weight", 0.0),
        config.get("engagement_weight", 0.0),
    ]
    if any(w < 0 for w in weights):
        errors.append("Scoring weights must be non-negative")
    if abs(sum(weights) - 1.0) > 1e-9:
        errors.append(f"Scoring weights must sum to 1.0, got {sum(weights):g}")

    if config.get("search_max_results", 0) < 1:
        errors.append("SEARCH_MAX_RESULTS must be at least 1")

    if config.get("profile_recent_videos", 0) < 1:
        errors.append("PROFILE_RECENT_VIDEOS must be at least 1")

    return errors


def setup_logging(log_level: str = "INFO") -> None:
    """Set up logging configuration with Rich for terminal output."""
    # Clear any existing handlers
    logging.root.handlers.clear()

    rich_handler = RichHandler(
        show_time=True,
        show_level=True,
        show_path=False,
        rich_tracebacks=True,
        markup=False,  # Disable markup to avoid conflicts
    )

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        handlers=[rich_handler],
        format="%(message)s",
    )

    # Suppress noisy third-party loggers
    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
