"""OpenCV-based frame extraction adapter.

Decodes a video with ``cv2.VideoCapture``, keeps the frames selected by a
:class:`SamplingPlan` and implements :class:`FrameExtractionPort`.
"""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Optional

import cv2
import numpy as np

from backend.src.core.entities.extracted_frames import ExtractedFrames
from backend.src.core.entities.video import VideoInfo
from backend.src.core.exceptions import FrameDecodeError, VideoOpenError
from backend.src.core.value_objects.sampling_plan import SamplingPlan

logger = logging.getLogger(__name__)

# Default configuration values used when keys are absent.
_DEFAULT_COLOR_MODE: str = "bgr"
_DEFAULT_QUALITY: int = 95
_DEFAULT_MAX_FRAMES: int = 0

COLOR_MODES = ("bgr", "rgb", "gray")


def _convert_color(frame: np.ndarray, color_mode: str) -> np.ndarray:
    if color_mode == "gray":
        if frame.ndim == 2:
            return frame
        return cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)
    if color_mode == "rgb":
        return cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
    return frame


class OpenCVFrameExtractor:
    """Extracts video frames using OpenCV.

    Satisfies :class:`~backend.src.ports.outbound.frame_extraction_port.FrameExtractionPort`.
    """

    def __init__(self, config: dict[str, Any]) -> None:
        fe_cfg = config.get("frame_extraction", {})
        self._color_mode: str = fe_cfg.get("color_mode", _DEFAULT_COLOR_MODE)
        self._quality: int = fe_cfg.get("jpeg_quality", _DEFAULT_QUALITY)
        self._max_frames: int = fe_cfg.get("max_frames", _DEFAULT_MAX_FRAMES)
        if self._color_mode not in COLOR_MODES:
            raise ValueError(f"Unsupported color mode: {self._color_mode}")

    # -- Port interface --------------------------------------------------------

    async def process_video(
        self,
        video_path: str,
        frame_rate: int,
        color_mode: Optional[str] = None,
        max_frames: Optional[int] = None,
    ) -> ExtractedFrames:
        """Decode *video_path* and keep frames at *frame_rate* per second.

        ``color_mode`` and ``max_frames`` fall back to the configured
        defaults when not given. ``max_frames`` of 0 means no cap.
        """
        mode = color_mode or self._color_mode
        if mode not in COLOR_MODES:
            raise ValueError(f"Unsupported color mode: {mode}")
        cap_frames = self._max_frames if max_frames is None else max_frames

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None,
            self._process_video_sync,
            video_path,
            frame_rate,
            mode,
            cap_frames,
        )

    async def export_frames(self, frames: ExtractedFrames, output_dir: Path) -> list[str]:
        """Write extracted frames as JPEG files and return their paths."""
        out = Path(output_dir)
        out.mkdir(parents=True, exist_ok=True)

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._export_frames_sync, frames, out)

    async def extract_frame_at(
        self,
        video_path: str,
        timestamp: float,
        output_path: str,
    ) -> str:
        """Extract a single frame at an exact *timestamp* (seconds)."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, self._extract_frame_at_sync, video_path, timestamp, output_path
        )

    def get_video_info(self, video_path: str) -> VideoInfo:
        """Return basic video metadata via OpenCV."""
        cap = cv2.VideoCapture(video_path)
        if not cap.isOpened():
            raise VideoOpenError(video_path)

        try:
            return self._read_info(cap, video_path)
        finally:
            cap.release()

    # -- Private sync helpers --------------------------------------------------

    @staticmethod
    def _read_info(cap: cv2.VideoCapture, video_path: str) -> VideoInfo:
        return VideoInfo(
            source=video_path,
            fps=float(cap.get(cv2.CAP_PROP_FPS) or 0.0),
            total_frames=max(0, int(cap.get(cv2.CAP_PROP_FRAME_COUNT))),
            width=int(cap.get(cv2.CAP_PROP_FRAME_WIDTH)),
            height=int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT)),
        )

    def _process_video_sync(
        self,
        video_path: str,
        frame_rate: int,
        color_mode: str,
        max_frames: int,
    ) -> ExtractedFrames:
        cap = cv2.VideoCapture(video_path)
        if not cap.isOpened():
            raise VideoOpenError(video_path)

        try:
            info = self._read_info(cap, video_path)
            plan = SamplingPlan(native_fps=info.fps, target_fps=frame_rate)
            logger.info(
                "Starting frame extraction from: %s (native=%.2ffps, target=%dfps, frames=%d)",
                video_path, info.fps, frame_rate, info.total_frames,
            )

            result = ExtractedFrames(info=info, plan=plan, color_mode=color_mode)
            frame_count = 0

            # grab() advances without decoding; retrieve() only for kept frames.
            while cap.grab():
                if plan.should_keep(frame_count):
                    ret, frame = cap.retrieve()
                    if not ret or frame is None:
                        logger.warning("Failed to decode frame %d of %s", frame_count, video_path)
                    else:
                        result.append(
                            _convert_color(frame, color_mode),
                            frame_count,
                            plan.timestamp(frame_count),
                        )
                        if max_frames and len(result) >= max_frames:
                            logger.warning("Reached max frames limit: %d", max_frames)
                            result.truncated = True
                            break
                frame_count += 1
        finally:
            cap.release()

        logger.info(
            "Frame extraction completed: %d of %d frames kept from %s",
            len(result), frame_count, video_path,
        )
        return result

    def _export_frames_sync(self, frames: ExtractedFrames, output_dir: Path) -> list[str]:
        exported: list[str] = []
        for saved_count, (image, timestamp) in enumerate(zip(frames.images, frames.timestamps)):
            if frames.color_mode == "rgb":
                image = cv2.cvtColor(image, cv2.COLOR_RGB2BGR)
            frame_path = output_dir / f"frame_{saved_count:06d}_t{timestamp:.2f}s.jpg"
            if not cv2.imwrite(
                str(frame_path),
                image,
                [cv2.IMWRITE_JPEG_QUALITY, self._quality],
            ):
                raise FrameDecodeError(f"Failed to write frame image: {frame_path}")
            exported.append(str(frame_path))
            logger.debug("Exported frame %d at %.2fs", saved_count, timestamp)

        logger.info("Exported %d frames to %s", len(exported), output_dir)
        return exported

    def _extract_frame_at_sync(
        self,
        video_path: str,
        timestamp: float,
        output_path: str,
    ) -> str:
        cap = cv2.VideoCapture(video_path)
        if not cap.isOpened():
            raise VideoOpenError(video_path)

        try:
            fps: float = cap.get(cv2.CAP_PROP_FPS)
            target_frame = int(timestamp * fps)
            cap.set(cv2.CAP_PROP_POS_FRAMES, target_frame)

            ret, frame = cap.read()
            if not ret:
                raise FrameDecodeError(
                    f"Failed to read frame at timestamp {timestamp:.2f}s "
                    f"(frame {target_frame})"
                )

            Path(output_path).parent.mkdir(parents=True, exist_ok=True)
            cv2.imwrite(
                str(output_path),
                frame,
                [cv2.IMWRITE_JPEG_QUALITY, self._quality],
            )
            logger.info("Extracted single frame at %.2fs -> %s", timestamp, output_path)
            return str(output_path)
        finally:
            cap.release()
