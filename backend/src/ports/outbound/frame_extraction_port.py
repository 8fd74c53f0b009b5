"""Port for frame extraction from video files."""
from __future__ import annotations
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

from backend.src.core.entities.extracted_frames import ExtractedFrames
from backend.src.core.entities.video import VideoInfo


@runtime_checkable
class FrameExtractionPort(Protocol):
    async def process_video(self, video_path: str, frame_rate: int, color_mode: Optional[str] = None, max_frames: Optional[int] = None) -> ExtractedFrames: ...
    async def export_frames(self, frames: ExtractedFrames, output_dir: Path) -> list[str]: ...
    async def extract_frame_at(self, video_path: str, timestamp: float, output_path: str) -> str: ...
    def get_video_info(self, video_path: str) -> VideoInfo: ...
