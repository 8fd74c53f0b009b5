"""
Video frame extraction API routes.
"""
from __future__ import annotations

import uuid
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from backend.src.application.dto.extract_request import ExtractFramesRequest

router = APIRouter()


class VideoInfoRequest(BaseModel):
    url: str


class ExtractFramesBody(BaseModel):
    url: str
    frame_rate: Optional[int] = None
    color_mode: Optional[str] = Field(default=None, pattern="^(bgr|rgb|gray)$")
    max_frames: Optional[int] = Field(default=None, ge=0)
    export: bool = False


class ExtractFramesResponse(BaseModel):
    url: str
    frame_count: int
    frame_shape: Optional[list[int]] = None
    native_fps: float
    target_fps: int
    effective_fps: float
    source_indices: list[int]
    timestamps: list[float]
    truncated: bool
    downloaded: bool
    color_mode: str
    exported_paths: list[str]


def _get_process_video_service(request: Request):
    return request.app.state.container.process_video_service()


@router.post("/info")
async def video_info(body: VideoInfoRequest, request: Request):
    """Return container metadata for a video URL or path."""
    service = _get_process_video_service(request)
    info = await service.video_info(body.url)
    return info.to_dict()


@router.post("/frames", response_model=ExtractFramesResponse)
async def extract_frames(body: ExtractFramesBody, request: Request):
    """Decode a video at the requested frame rate.

    Images are not returned inline; set ``export`` to write them as JPEG
    files under the configured frames directory.
    """
    container = request.app.state.container
    settings = container.settings
    service = _get_process_video_service(request)

    export_dir = ""
    if body.export:
        export_dir = str(Path(settings.storage.frames_dir) / uuid.uuid4().hex)

    result = await service.execute(
        ExtractFramesRequest(
            url=body.url,
            frame_rate=body.frame_rate if body.frame_rate is not None else settings.frame_extraction.frame_rate,
            color_mode=body.color_mode,
            max_frames=body.max_frames,
            export_dir=export_dir,
        )
    )
    return ExtractFramesResponse(**result.to_dict())
