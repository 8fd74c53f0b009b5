"""Selection of the min/max values a frame's planes need."""
from __future__ import annotations

from typing import Sequence

from backend.src.core.exceptions import MetadataError

# Viewer records carry extra camera data between the ranges that matter:
# the first six values, values 12..17 and the trailing sixteen.
_HEAD = slice(0, 6)
_MIDDLE = slice(12, 18)
_TAIL_LENGTH = 16
_MIN_INFO_LENGTH = 18


def extract_needed_values(info: Sequence[float]) -> list[float]:
    """Reduce a viewer ``info`` record to 14 min/max pairs."""
    if len(info) < _MIN_INFO_LENGTH:
        raise MetadataError(
            f"Viewer info has {len(info)} values, expected at least {_MIN_INFO_LENGTH}"
        )
    values = list(info)
    return [float(v) for v in values[_HEAD] + values[_MIDDLE] + values[-_TAIL_LENGTH:]]
