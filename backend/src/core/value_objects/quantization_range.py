"""QuantizationRange value object - maps integer codes back to floats."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

LEVELS_16BIT = 65535.0
LEVELS_8BIT = 255.0


@dataclass(frozen=True)
class QuantizationRange:
    """Linear range used to dequantize one attribute plane."""

    minimum: float
    maximum: float
    levels: float = LEVELS_8BIT

    def __post_init__(self) -> None:
        if self.levels <= 0:
            raise ValueError(f"levels must be positive, got {self.levels}")

    @property
    def scale(self) -> float:
        return (self.maximum - self.minimum) / self.levels

    def dequantize(self, values: np.ndarray) -> np.ndarray:
        data = np.asarray(values, dtype=np.float32)
        return data * np.float32(self.scale) + np.float32(self.minimum)
