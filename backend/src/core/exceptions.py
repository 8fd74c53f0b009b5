"""Custom exception hierarchy for SplatStream."""
from __future__ import annotations


class SplatStreamError(Exception):
    """Base exception for all SplatStream errors."""


class InvalidFrameRateError(SplatStreamError):
    """Raised when a requested sampling frame rate is not positive."""

    def __init__(self, frame_rate: int) -> None:
        self.frame_rate = frame_rate
        super().__init__(f"Frame rate must be a positive integer, got {frame_rate}")


class VideoOpenError(SplatStreamError):
    """Raised when OpenCV cannot open a video source."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"Cannot open video file: {source}")


class VideoSourceError(SplatStreamError):
    """Raised when a remote video cannot be fetched."""


class FrameDecodeError(SplatStreamError):
    """Raised when a specific frame cannot be decoded."""


class PlaneMergeError(SplatStreamError):
    """Raised when two byte planes cannot be merged into a 16-bit plane."""


class MetadataError(SplatStreamError):
    """Raised when min/max or group layout metadata is malformed."""


class DatasetNotFoundError(SplatStreamError):
    """Raised when a dataset name is not configured."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Dataset not found: {name}")


class GroupNotFoundError(SplatStreamError):
    """Raised when a group index is missing from the layout."""

    def __init__(self, group_index: int) -> None:
        self.group_index = group_index
        super().__init__(f"Group not found: {group_index}")


class FrameIndexError(SplatStreamError):
    """Raised when a frame index falls outside the decoded range."""

    def __init__(self, frame_index: int) -> None:
        self.frame_index = frame_index
        super().__init__(f"Frame index out of range: {frame_index}")
