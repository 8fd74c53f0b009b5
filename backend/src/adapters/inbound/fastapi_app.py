"""
FastAPI application - primary inbound adapter.
"""
from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.src.infrastructure.config import get_settings
from backend.src.infrastructure.logging_config import setup_logging

logger = logging.getLogger(__name__)

settings = get_settings()

API_VERSION = "0.1.0"

# Auth-exempt paths (no API key needed)
_AUTH_EXEMPT_PREFIXES = ("/api/health", "/docs", "/openapi.json", "/redoc")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown lifecycle."""
    setup_logging(settings.logging.level, settings.logging.file)
    settings.validate_production()
    logger.info("SplatStream backend starting up...")
    if not hasattr(app.state, "container"):
        from backend.src.infrastructure.container import ApplicationContainer
        app.state.container = ApplicationContainer(settings)
    yield
    logger.info("SplatStream backend shutting down...")


app = FastAPI(
    title="SplatStream API",
    description="Video frame extraction and volumetric splat frame decoding",
    version=API_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.web.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def api_key_middleware(request: Request, call_next):
    """Require ``X-API-Key`` when the container's settings define one."""
    path = request.url.path
    if request.method == "OPTIONS" or any(path.startswith(p) for p in _AUTH_EXEMPT_PREFIXES):
        return await call_next(request)

    container = getattr(request.app.state, "container", None)
    api_key = container.settings.web.api_key if container is not None else settings.web.api_key
    if api_key and request.headers.get("X-API-Key", "") != api_key:
        logger.warning("Rejected request to %s: invalid or missing API key", path)
        return JSONResponse(status_code=401, content={"detail": "Invalid or missing API key"})
    return await call_next(request)


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    """Log each request with method, path, status, and duration."""
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    if request.url.path.startswith("/api"):
        response.headers["cache-control"] = "no-store, no-cache, must-revalidate"
    logger.info(
        "%s %s -> %d (%.1fms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


from backend.src.core.exceptions import (
    DatasetNotFoundError,
    FrameDecodeError,
    FrameIndexError,
    GroupNotFoundError,
    InvalidFrameRateError,
    MetadataError,
    PlaneMergeError,
    SplatStreamError,
    VideoOpenError,
    VideoSourceError,
)


@app.exception_handler(DatasetNotFoundError)
@app.exception_handler(GroupNotFoundError)
@app.exception_handler(FrameIndexError)
async def not_found_handler(request: Request, exc: SplatStreamError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(InvalidFrameRateError)
async def invalid_frame_rate_handler(request: Request, exc: InvalidFrameRateError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(VideoSourceError)
async def source_error_handler(request: Request, exc: SplatStreamError):
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.exception_handler(VideoOpenError)
@app.exception_handler(FrameDecodeError)
@app.exception_handler(PlaneMergeError)
@app.exception_handler(MetadataError)
async def decode_error_handler(request: Request, exc: SplatStreamError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# ── API routes ─────────────────────────────────────────────────

from backend.src.adapters.inbound.api.datasets import router as datasets_router
from backend.src.adapters.inbound.api.videos import router as videos_router

app.include_router(videos_router, prefix="/api/videos", tags=["videos"])
app.include_router(datasets_router, prefix="/api/datasets", tags=["datasets"])


@app.get("/api/health")
async def health():
    return {
        "status": "ok",
        "version": API_VERSION,
    }
