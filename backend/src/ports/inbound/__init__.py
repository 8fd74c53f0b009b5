from backend.src.ports.inbound.decode_splat_use_case import DecodeSplatUseCase
from backend.src.ports.inbound.process_video_use_case import ProcessVideoUseCase

__all__ = [
    "DecodeSplatUseCase",
    "ProcessVideoUseCase",
]
