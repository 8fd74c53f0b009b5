"""DTO for frame extraction results."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from backend.src.core.entities.extracted_frames import ExtractedFrames


@dataclass
class ExtractFramesResult:
    url: str
    frames: Optional[ExtractedFrames] = None
    frame_count: int = 0
    exported_paths: list = field(default_factory=list)
    downloaded: bool = False

    @property
    def images(self) -> list:
        if self.frames is None:
            return []
        return self.frames.images

    def to_dict(self) -> dict:
        summary = self.frames.summary() if self.frames is not None else {}
        return {
            "url": self.url,
            "frame_count": self.frame_count,
            "downloaded": self.downloaded,
            "exported_paths": self.exported_paths,
            **{k: v for k, v in summary.items() if k != "frame_count"},
        }
