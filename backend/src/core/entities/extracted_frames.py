"""ExtractedFrames entity - the ordered images sampled from one video."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from backend.src.core.entities.video import VideoInfo
from backend.src.core.value_objects.sampling_plan import SamplingPlan


@dataclass
class ExtractedFrames:
    """Images sampled from a video, in decode order.

    ``images[i]`` was decoded from native frame ``source_indices[i]`` at
    ``timestamps[i]`` seconds.
    """

    info: VideoInfo
    plan: SamplingPlan
    images: list[np.ndarray] = field(default_factory=list)
    source_indices: list[int] = field(default_factory=list)
    timestamps: list[float] = field(default_factory=list)
    truncated: bool = False
    color_mode: str = "bgr"

    def __post_init__(self) -> None:
        if not (len(self.images) == len(self.source_indices) == len(self.timestamps)):
            raise ValueError("images, source_indices and timestamps must have equal length")

    def __len__(self) -> int:
        return len(self.images)

    def append(self, image: np.ndarray, source_index: int, timestamp: float) -> None:
        if self.source_indices and source_index <= self.source_indices[-1]:
            raise ValueError(
                f"source index {source_index} must follow {self.source_indices[-1]}"
            )
        self.images.append(image)
        self.source_indices.append(source_index)
        self.timestamps.append(timestamp)

    @property
    def frame_shape(self) -> Optional[tuple[int, ...]]:
        if not self.images:
            return None
        return tuple(self.images[0].shape)

    def summary(self) -> dict:
        return {
            "source": self.info.source,
            "frame_count": len(self),
            "frame_shape": list(self.frame_shape) if self.frame_shape else None,
            "native_fps": self.plan.native_fps,
            "target_fps": self.plan.target_fps,
            "effective_fps": self.plan.effective_fps,
            "source_indices": list(self.source_indices),
            "timestamps": [round(t, 4) for t in self.timestamps],
            "truncated": self.truncated,
            "color_mode": self.color_mode,
        }
