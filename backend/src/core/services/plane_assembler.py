"""
Plane assembly - turns the decoded frames of a stream group into
attribute planes. Pure domain logic on numpy arrays.

Streams come in a fixed order. The first ``pair_count`` pairs of streams
carry the low and high bytes of 16-bit attributes; every remaining stream
is an 8-bit attribute on its own.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np

from backend.src.core.exceptions import PlaneMergeError

logger = logging.getLogger(__name__)

# ITU-R BT.601 luma weights, applied to BGR channel order.
_BGR_LUMA = np.array([0.114, 0.587, 0.299], dtype=np.float32)

DEFAULT_PAIR_COUNT = 3


def to_gray_bytes(image: np.ndarray) -> np.ndarray:
    """Return *image* as a 2-D uint8 gray plane.

    Two-dimensional images are taken as already gray. Three-channel images
    are treated as BGR, four-channel images as BGRA (alpha dropped).
    """
    img = np.asarray(image)
    if img.ndim == 2:
        return img.astype(np.uint8, copy=False)
    if img.ndim == 3 and img.shape[2] == 1:
        return img[:, :, 0].astype(np.uint8, copy=False)
    if img.ndim == 3 and img.shape[2] in (3, 4):
        luma = img[:, :, :3].astype(np.float32) @ _BGR_LUMA
        return np.clip(np.rint(luma), 0, 255).astype(np.uint8)
    raise ValueError(f"Unsupported image shape for gray conversion: {img.shape}")


def merge_to_uint16(low: np.ndarray, high: np.ndarray) -> np.ndarray:
    """Combine two byte planes into ``low | high << 8`` as float32."""
    if low is None or high is None:
        raise PlaneMergeError("Cannot merge a missing byte plane")
    if low.shape != high.shape:
        raise PlaneMergeError(
            f"Byte planes differ in shape: {low.shape} vs {high.shape}"
        )
    merged = low.astype(np.uint16) | (high.astype(np.uint16) << 8)
    return merged.astype(np.float32)


class PlaneAssembler:
    """Builds the attribute planes of one frame from a group's streams."""

    def __init__(self, pair_count: int = DEFAULT_PAIR_COUNT) -> None:
        self._pair_count = pair_count

    @property
    def pair_count(self) -> int:
        return self._pair_count

    def is_low_byte_stream(self, stream_position: int) -> bool:
        return stream_position < 2 * self._pair_count and stream_position % 2 == 0

    def is_high_byte_stream(self, stream_position: int) -> bool:
        return stream_position < 2 * self._pair_count and stream_position % 2 == 1

    def assemble(
        self,
        videos_frames: Sequence[Sequence[np.ndarray]],
        frame_index: int,
    ) -> list[np.ndarray]:
        """Return float32 planes for *frame_index*: 16-bit pairs first.

        Streams too short for *frame_index* and pairs that fail to merge are
        skipped with a warning, so a damaged group still yields the planes
        it can.
        """
        planes: list[np.ndarray] = []
        pending_low: Optional[np.ndarray] = None

        for position, frames in enumerate(videos_frames):
            if frame_index >= len(frames):
                logger.warning(
                    "Index %d out of range for stream at position %d (%d frames)",
                    frame_index, position, len(frames),
                )
                continue

            current = to_gray_bytes(frames[frame_index])

            if self.is_low_byte_stream(position):
                pending_low = current
            elif self.is_high_byte_stream(position):
                if pending_low is None:
                    logger.warning("No low byte plane to merge at stream position %d", position)
                    continue
                try:
                    planes.append(merge_to_uint16(pending_low, current))
                except PlaneMergeError as exc:
                    logger.warning("Failed to merge planes at stream position %d: %s", position, exc)
                finally:
                    pending_low = None
            else:
                planes.append(current.astype(np.float32))

        return planes
