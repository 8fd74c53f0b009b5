"""Inspection helpers for decoded frames and planes."""
from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np

from backend.src.core.services.plane_assembler import to_gray_bytes

logger = logging.getLogger(__name__)


def gray_pixel_value(image: np.ndarray, x: int, y: int) -> Optional[int]:
    """Gray value at column *x*, row *y*; ``None`` when outside the image."""
    gray = to_gray_bytes(image)
    height, width = gray.shape
    if x < 0 or y < 0 or x >= width or y >= height:
        return None
    return int(gray[y, x])


def images_pixel_identical(first: np.ndarray, second: np.ndarray) -> bool:
    if first.shape != second.shape:
        return False
    return bool(np.array_equal(first, second))


def describe_streams(videos_frames: Sequence[Sequence[np.ndarray]]) -> list[dict]:
    """One row per stream: position and decoded frame count."""
    rows = []
    for position, frames in enumerate(videos_frames):
        rows.append({"stream": position, "frames": len(frames)})
        logger.debug("Stream %d: %d frames", position, len(frames))
    return rows


def describe_planes(planes: Sequence[np.ndarray]) -> list[dict]:
    """One row per plane: dtype and element count."""
    logger.debug("Total number of planes: %d", len(planes))
    rows = []
    for index, plane in enumerate(planes):
        rows.append({"plane": index, "dtype": str(plane.dtype), "length": int(plane.size)})
        logger.debug("Plane %d: %s, length %d", index, plane.dtype, plane.size)
    return rows
