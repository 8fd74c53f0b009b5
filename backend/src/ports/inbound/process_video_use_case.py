"""Inbound port for video frame extraction."""
from __future__ import annotations
from typing import TYPE_CHECKING, Protocol, runtime_checkable
if TYPE_CHECKING:
    from backend.src.application.dto.extract_request import ExtractFramesRequest
    from backend.src.application.dto.extract_result import ExtractFramesResult


@runtime_checkable
class ProcessVideoUseCase(Protocol):
    async def execute(self, request: ExtractFramesRequest) -> ExtractFramesResult: ...
