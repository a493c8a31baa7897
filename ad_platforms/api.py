"""
FastAPI service exposing the ad platform store.

Endpoints (under API_PREFIX, default /api/adplatform):
  POST /upload      - Replace the dataset with an uploaded .txt/.csv listing
  GET  /search      - Platforms serving a location or any of its ancestors
  GET  /statistics  - Platform and distinct location counts
  GET  /health      - Liveness probe
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from functools import lru_cache
from typing import IO, Optional

from fastapi import APIRouter, Depends, FastAPI, File, Query, UploadFile
from fastapi.responses import JSONResponse

from ad_platforms.config import get_settings
from ad_platforms.models import (
    ErrorResponse,
    HealthResponse,
    LoadResult,
    SearchResult,
    StatisticsResponse,
)
from ad_platforms.store import AdPlatformStore

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_store() -> AdPlatformStore:
    """Process-wide store. Overridden in tests via app.dependency_overrides."""
    return AdPlatformStore()


# ── Helpers ───────────────────────────────────────────────────────────

def _error(status_code: int, error: str, details: str) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


def _upload_size(file: UploadFile) -> int:
    if file.size is not None:
        return file.size
    stream: IO[bytes] = file.file
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ══════════════════════════════════════════════════════════════════════
# ENDPOINTS
# ══════════════════════════════════════════════════════════════════════

router = APIRouter()

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.post("/upload", response_model=LoadResult, responses=_ERROR_RESPONSES)
def upload_ad_platforms(
    file: Optional[UploadFile] = File(None, description="Text file with ad platforms"),
    store: AdPlatformStore = Depends(get_store),
):
    """
    Replace the loaded dataset with the uploaded listing.

    One platform per line: ``<name>:<loc1>,<loc2>,...``. Malformed lines are
    skipped and reported in ``errors``; they do not fail the upload.
    """
    settings = get_settings().upload
    try:
        if file is None:
            logger.warning("Upload attempt without a file")
            return _error(400, "File is required",
                          "Please provide a valid text file with ad platforms data")

        size = _upload_size(file)
        if size == 0:
            logger.warning("Upload attempt with empty file %s", file.filename)
            return _error(400, "File is required",
                          "Please provide a valid text file with ad platforms data")

        if size > settings.max_bytes:
            logger.warning("File too large: %d bytes", size)
            return _error(400, "File too large",
                          f"Maximum file size is {settings.max_bytes // (1024 * 1024)}MB")

        extension = os.path.splitext(file.filename or "")[1].lower()
        if extension not in settings.allowed_extensions:
            return _error(400, "Invalid file type",
                          f"Only {', '.join(settings.allowed_extensions)} files are supported")

        logger.info("Starting upload of file: %s, size: %d bytes", file.filename, size)
        result = store.load(file.file)

        if result.success:
            logger.info("Successfully uploaded %d ad platforms", result.processed_platforms)
        else:
            logger.warning("Upload failed: %s", result.message)
        return result
    except Exception:
        logger.exception("Error during file upload")
        return _error(500, "Internal server error",
                      "An error occurred while processing the file")


@router.get("/search", response_model=SearchResult, responses=_ERROR_RESPONSES)
def search_ad_platforms(
    location: Optional[str] = Query(None, description="Location to search, e.g. /ru/msk"),
    store: AdPlatformStore = Depends(get_store),
):
    """Platforms serving the location or any of its ancestor locations."""
    if location is None or not location.strip():
        return _error(400, "Location is required",
                      "Please provide a location parameter (e.g., /ru/msk)")
    try:
        result = store.search(location)
    except Exception:
        logger.exception("Error during search for location: %s", location)
        return _error(500, "Internal server error",
                      "An error occurred while searching ad platforms")

    logger.debug("Found %d ad platforms for location: %s", result.count, location)
    return result


@router.get("/statistics", response_model=StatisticsResponse, responses={500: {"model": ErrorResponse}})
def get_statistics(store: AdPlatformStore = Depends(get_store)):
    try:
        stats = store.statistics()
    except Exception:
        logger.exception("Error getting statistics")
        return _error(500, "Internal server error",
                      "An error occurred while getting statistics")

    return StatisticsResponse(
        platforms_count=stats.platforms_count,
        locations_count=stats.locations_count,
        timestamp=_now(),
    )


@router.get("/health", response_model=HealthResponse)
def health_check():
    return HealthResponse(timestamp=_now())


# ── App ───────────────────────────────────────────────────────────────

def create_app() -> FastAPI:
    app = FastAPI(
        title="Ad Platform Service",
        description="Find ad platforms serving a location or any of its parent locations",
        version="1.0.0",
    )
    app.include_router(router, prefix=get_settings().api.prefix)
    return app


app = create_app()
