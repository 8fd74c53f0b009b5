"""Inbound port for decoding volumetric splat frames."""
from __future__ import annotations
from typing import TYPE_CHECKING, Protocol, runtime_checkable
if TYPE_CHECKING:
    from backend.src.core.entities.group_layout import GroupLayout
    from backend.src.core.entities.splat_frame import DecodedSplatFrame


@runtime_checkable
class DecodeSplatUseCase(Protocol):
    async def decode_frame(self, dataset: str, frame_index: int) -> DecodedSplatFrame: ...
    async def decode_group(self, dataset: str, group_index: int) -> list[DecodedSplatFrame]: ...
    def layout(self, dataset: str) -> GroupLayout: ...
