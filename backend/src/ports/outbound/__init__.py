from backend.src.ports.outbound.frame_extraction_port import FrameExtractionPort
from backend.src.ports.outbound.frame_store_port import FrameStorePort
from backend.src.ports.outbound.splat_metadata_port import GroupLayoutRepositoryPort, MinMaxRepositoryPort
from backend.src.ports.outbound.video_source_port import VideoSourcePort

__all__ = [
    "FrameExtractionPort",
    "FrameStorePort",
    "GroupLayoutRepositoryPort",
    "MinMaxRepositoryPort",
    "VideoSourcePort",
]
