#!/usr/bin/env python
"""FastAPI server for the YouTube AI Studio web interface."""

import logging
import sys
import time
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

# Add src directory to Python path for imports
src_dir = Path(__file__).parent.parent
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from api.dependencies import close_services, get_config
from api.routers import content, core, outliers, profile, search, thumbnails
from api.routers.core import API_NAME, API_VERSION
from utils.config import validate_config
from utils.logging import clear_request_context, set_request_context, setup_logging

config = get_config()
setup_logging(config.get("log_level", "INFO"), json_output=config.get("log_json", False))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    for problem in validate_config(config):
        logger.warning(f"Config: {problem}")
    yield
    await close_services()


app = FastAPI(title=API_NAME, version=API_VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get("cors_origins", []),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Tag log records with a request ID and log each request's outcome."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    set_request_context(request_id)
    start_time = time.time()
    try:
        response = await call_next(request)
        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({duration_ms:.1f}ms)"
        )
        response.headers["X-Request-ID"] = request_id
        return response
    finally:
        clear_request_context()


app.include_router(core.router)
app.include_router(search.router)
app.include_router(outliers.router)
app.include_router(content.router)
app.include_router(thumbnails.router)
app.include_router(profile.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
