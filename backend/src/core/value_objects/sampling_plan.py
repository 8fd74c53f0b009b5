"""SamplingPlan value object - which decoded frames a requested rate keeps."""

from __future__ import annotations

import math
from dataclasses import dataclass

from backend.src.core.exceptions import InvalidFrameRateError


@dataclass(frozen=True)
class SamplingPlan:
    """Uniform resampling of a native frame rate down to a target rate.

    Frame ``i`` falls into bucket ``floor(i * target / native)``; the first
    frame of every bucket is kept. When the native rate is unknown or not
    higher than the target, every frame is kept.
    """

    native_fps: float
    target_fps: int

    def __post_init__(self) -> None:
        if self.target_fps <= 0:
            raise InvalidFrameRateError(self.target_fps)
        if self.native_fps < 0 or math.isnan(self.native_fps):
            object.__setattr__(self, "native_fps", 0.0)

    @property
    def keeps_every_frame(self) -> bool:
        return self.native_fps <= 0 or self.target_fps >= self.native_fps

    @property
    def effective_fps(self) -> float:
        if self.keeps_every_frame:
            return self.native_fps
        return float(self.target_fps)

    def _bucket(self, index: int) -> int:
        return math.floor(index * self.target_fps / self.native_fps)

    def should_keep(self, index: int) -> bool:
        if index < 0:
            return False
        if self.keeps_every_frame or index == 0:
            return True
        return self._bucket(index) != self._bucket(index - 1)

    def expected_count(self, total_frames: int) -> int:
        if total_frames <= 0:
            return 0
        if self.keeps_every_frame:
            return total_frames
        return self._bucket(total_frames - 1) + 1

    def timestamp(self, index: int) -> float:
        if self.native_fps <= 0:
            return 0.0
        return index / self.native_fps
