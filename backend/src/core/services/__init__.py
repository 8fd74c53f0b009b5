from backend.src.core.services.dequantizer import Dequantizer
from backend.src.core.services.plane_assembler import PlaneAssembler, merge_to_uint16, to_gray_bytes

__all__ = [
    "Dequantizer",
    "PlaneAssembler",
    "merge_to_uint16",
    "to_gray_bytes",
]
