"""Video entity representing a decodable video source and its metadata."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class VideoInfo:
    """Container-level metadata reported by the decoder."""

    source: str = ""
    fps: float = 0.0
    total_frames: int = 0
    width: int = 0
    height: int = 0

    @property
    def duration(self) -> float:
        if self.fps <= 0:
            return 0.0
        return self.total_frames / self.fps

    @property
    def resolution_str(self) -> str:
        return f"{self.width}x{self.height}"

    @property
    def duration_formatted(self) -> str:
        minutes = int(self.duration // 60)
        seconds = int(self.duration % 60)
        return f"{minutes}:{seconds:02d}"

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "fps": self.fps,
            "total_frames": self.total_frames,
            "width": self.width,
            "height": self.height,
            "duration": self.duration,
            "duration_formatted": self.duration_formatted,
        }
