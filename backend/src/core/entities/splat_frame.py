"""DecodedSplatFrame entity - dequantized attribute planes for one frame."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np


@dataclass
class DecodedSplatFrame:
    """All attribute planes of one volumetric frame.

    Each plane has one value per splat; splats are laid out on the pixel
    grid of the source streams, so every plane shares ``shape``.
    """

    dataset: str
    group_index: int
    frame_index: int
    planes: list[np.ndarray] = field(default_factory=list)
    shape: Optional[tuple[int, int]] = None

    @property
    def plane_count(self) -> int:
        return len(self.planes)

    @property
    def point_count(self) -> int:
        if self.shape is None:
            return 0
        return self.shape[0] * self.shape[1]

    def stacked(self) -> np.ndarray:
        """Planes as one ``(plane_count, h, w)`` float32 array."""
        if not self.planes:
            return np.empty((0, 0, 0), dtype=np.float32)
        return np.stack([p.reshape(self.shape) for p in self.planes]).astype(np.float32)

    def summary(self) -> dict:
        return {
            "dataset": self.dataset,
            "group_index": self.group_index,
            "frame_index": self.frame_index,
            "shape": list(self.shape) if self.shape else None,
            "point_count": self.point_count,
            "plane_count": self.plane_count,
            "planes": [
                {
                    "index": i,
                    "min": float(p.min()) if p.size else 0.0,
                    "max": float(p.max()) if p.size else 0.0,
                    "mean": float(p.mean()) if p.size else 0.0,
                }
                for i, p in enumerate(self.planes)
            ],
        }
