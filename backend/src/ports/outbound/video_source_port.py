"""Port for resolving a video URL to a locally decodable file."""
from __future__ import annotations
from typing import Protocol, runtime_checkable


@runtime_checkable
class VideoSourcePort(Protocol):
    async def fetch(self, url: str) -> str: ...
    async def release(self, local_path: str) -> None: ...
    def is_remote(self, url: str) -> bool: ...
