from backend.src.core.entities.extracted_frames import ExtractedFrames
from backend.src.core.entities.group_layout import GroupLayout
from backend.src.core.entities.minmax_table import MinMaxTable
from backend.src.core.entities.splat_frame import DecodedSplatFrame
from backend.src.core.entities.video import VideoInfo

__all__ = [
    "ExtractedFrames", "GroupLayout", "MinMaxTable", "DecodedSplatFrame", "VideoInfo",
]
