"""MinMaxTable entity holding per-frame dequantization ranges."""

from __future__ import annotations

from dataclasses import dataclass, field

from backend.src.core.exceptions import FrameIndexError


@dataclass
class MinMaxTable:
    """Per-frame ``[min0, max0, min1, max1, ...]`` lists, one pair per plane."""

    values: dict[int, list[float]] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.values)

    def __contains__(self, frame_index: int) -> bool:
        return frame_index in self.values

    def for_frame(self, frame_index: int) -> list[float]:
        try:
            return self.values[frame_index]
        except KeyError:
            raise FrameIndexError(frame_index) from None

    @property
    def frame_indices(self) -> list[int]:
        return sorted(self.values)
