"""DTO for frame extraction requests."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass
class ExtractFramesRequest:
    url: str
    frame_rate: int = 25
    color_mode: Optional[str] = None
    max_frames: Optional[int] = None
    export_dir: str = ""
