"""FrameSpan value object representing the global frames owned by a group."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FrameSpan:
    """Immutable inclusive range of global frame indices."""

    start_frame: int
    end_frame: int

    def __post_init__(self) -> None:
        if self.start_frame < 0:
            raise ValueError(f"start_frame ({self.start_frame}) must be non-negative")
        if self.end_frame < self.start_frame:
            raise ValueError(
                f"end_frame ({self.end_frame}) must not be less than start_frame ({self.start_frame})"
            )

    @property
    def length(self) -> int:
        return self.end_frame - self.start_frame + 1

    def contains(self, frame_index: int) -> bool:
        return self.start_frame <= frame_index <= self.end_frame

    def to_local(self, frame_index: int) -> int:
        if not self.contains(frame_index):
            raise ValueError(f"Frame {frame_index} is outside {self.start_frame}..{self.end_frame}")
        return frame_index - self.start_frame

    def to_global(self, local_index: int) -> int:
        if not 0 <= local_index < self.length:
            raise ValueError(f"Local index {local_index} is outside 0..{self.length - 1}")
        return self.start_frame + local_index
