from backend.src.application.process_video_service import ProcessVideoService
from backend.src.application.splat_decode_service import SplatDecodeService

__all__ = [
    "ProcessVideoService",
    "SplatDecodeService",
]
