"""
Frame extraction use case: resolve a video URL, decode it at the requested
frame rate and hand back the sampled images.
"""
from __future__ import annotations

import logging
from pathlib import Path

from backend.src.application.dto.extract_request import ExtractFramesRequest
from backend.src.application.dto.extract_result import ExtractFramesResult
from backend.src.core.entities.video import VideoInfo
from backend.src.core.exceptions import InvalidFrameRateError

logger = logging.getLogger(__name__)


class ProcessVideoService:
    """Orchestrates fetch -> decode -> (export) -> release for one video."""

    def __init__(
        self,
        frame_extraction,  # FrameExtractionPort
        video_source,      # VideoSourcePort
    ):
        self._frame_extraction = frame_extraction
        self._video_source = video_source

    async def execute(self, request: ExtractFramesRequest) -> ExtractFramesResult:
        """Extract frames for *request*; temporary downloads are always released."""
        if request.frame_rate <= 0:
            raise InvalidFrameRateError(request.frame_rate)

        local_path = await self._video_source.fetch(request.url)
        try:
            frames = await self._frame_extraction.process_video(
                local_path,
                request.frame_rate,
                color_mode=request.color_mode,
                max_frames=request.max_frames,
            )

            exported: list[str] = []
            if request.export_dir:
                exported = await self._frame_extraction.export_frames(
                    frames, Path(request.export_dir)
                )
        finally:
            await self._video_source.release(local_path)

        logger.info(
            "Extracted %d frames from %s at %d fps", len(frames), request.url, request.frame_rate
        )
        return ExtractFramesResult(
            url=request.url,
            frames=frames,
            frame_count=len(frames),
            exported_paths=exported,
            downloaded=self._video_source.is_remote(request.url),
        )

    async def process_video(self, url: str, frame_rate: int) -> list:
        """Return the images of *url* sampled at *frame_rate*."""
        result = await self.execute(ExtractFramesRequest(url=url, frame_rate=frame_rate))
        return result.images

    async def video_info(self, url: str) -> VideoInfo:
        local_path = await self._video_source.fetch(url)
        try:
            info = self._frame_extraction.get_video_info(local_path)
        finally:
            await self._video_source.release(local_path)
        info.source = url
        return info
