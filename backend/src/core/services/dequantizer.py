"""Dequantization of assembled attribute planes - pure domain logic."""
from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from backend.src.core.value_objects.quantization_range import (
    LEVELS_8BIT,
    LEVELS_16BIT,
    QuantizationRange,
)

logger = logging.getLogger(__name__)


class Dequantizer:
    """Maps quantized planes back to attribute values.

    Plane ``i`` uses ``minmax[2 * i]`` and ``minmax[2 * i + 1]``. The first
    ``sixteen_bit_planes`` planes span 65535 levels, the rest 255.
    """

    def __init__(self, sixteen_bit_planes: int = 3) -> None:
        self._sixteen_bit_planes = sixteen_bit_planes

    def range_for(self, plane_index: int, minmax: Sequence[float]) -> QuantizationRange:
        levels = LEVELS_16BIT if plane_index < self._sixteen_bit_planes else LEVELS_8BIT
        return QuantizationRange(
            minimum=float(minmax[plane_index * 2]),
            maximum=float(minmax[plane_index * 2 + 1]),
            levels=levels,
        )

    def dequantize(
        self,
        planes: Sequence[np.ndarray],
        minmax: Sequence[float],
    ) -> list[np.ndarray]:
        out: list[np.ndarray] = []
        for index, plane in enumerate(planes):
            if len(minmax) <= index * 2 + 1:
                logger.warning("Insufficient min/max values for plane at index %d", index)
                continue
            out.append(self.range_for(index, minmax).dequantize(plane))
        return out
