"""Port for persisting decoded splat frames."""
from __future__ import annotations
from pathlib import Path
from typing import Protocol, runtime_checkable

from backend.src.core.entities.splat_frame import DecodedSplatFrame


@runtime_checkable
class FrameStorePort(Protocol):
    async def save_frame(self, frame: DecodedSplatFrame, directory: str = "") -> str: ...
    def encode_frame(self, frame: DecodedSplatFrame) -> bytes: ...
    def get_file_path(self, filename: str, directory: str = "") -> Path: ...
    async def delete_file(self, filepath: str) -> None: ...
    def list_files(self, directory: str = "") -> list[str]: ...
