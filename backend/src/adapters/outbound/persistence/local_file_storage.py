"""Local filesystem implementation of FrameStorePort."""

from __future__ import annotations

import asyncio
import io
import logging
from pathlib import Path

import numpy as np

from backend.src.core.entities.splat_frame import DecodedSplatFrame

logger = logging.getLogger(__name__)


class LocalFrameStore:
    """Implements :class:`FrameStorePort` using the local filesystem.

    Frames are written as compressed ``.npz`` archives holding one
    ``plane_NN`` array per attribute plane. All paths are resolved relative
    to a configurable *base_dir*.
    """

    def __init__(self, base_dir: str | Path) -> None:
        self._base = Path(base_dir).resolve()
        self._base.mkdir(parents=True, exist_ok=True)
        logger.info("LocalFrameStore initialised at %s", self._base)

    # -- helpers ---------------------------------------------------------------

    def _resolve(self, filename: str, directory: str = "") -> Path:
        """Return an absolute path under the base directory."""
        if directory:
            return self._base / directory / filename
        return self._base / filename

    @staticmethod
    def frame_filename(frame: DecodedSplatFrame) -> str:
        return f"{frame.dataset}_frame_{frame.frame_index:06d}.npz"

    # -- FrameStorePort implementation -----------------------------------------

    def encode_frame(self, frame: DecodedSplatFrame) -> bytes:
        """Serialise *frame* to ``.npz`` bytes."""
        arrays = {f"plane_{i:02d}": plane for i, plane in enumerate(frame.planes)}
        buffer = io.BytesIO()
        np.savez_compressed(
            buffer,
            frame_index=np.int64(frame.frame_index),
            group_index=np.int64(frame.group_index),
            **arrays,
        )
        return buffer.getvalue()

    async def save_frame(self, frame: DecodedSplatFrame, directory: str = "") -> str:
        """Write *frame* to disk and return the absolute path as a string."""
        target = self._resolve(self.frame_filename(frame), directory)
        target.parent.mkdir(parents=True, exist_ok=True)

        loop = asyncio.get_running_loop()
        content = await loop.run_in_executor(None, self.encode_frame, frame)
        await loop.run_in_executor(None, target.write_bytes, content)
        logger.debug("Saved frame %s (%d bytes)", target, len(content))
        return str(target)

    def get_file_path(self, filename: str, directory: str = "") -> Path:
        """Return the :class:`Path` object for a given filename."""
        return self._resolve(filename, directory)

    async def delete_file(self, filepath: str) -> None:
        """Delete a file by its absolute or relative path."""
        target = Path(filepath)
        if not target.is_absolute():
            target = self._base / target

        if not target.exists():
            logger.warning("File to delete does not exist: %s", target)
            return

        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, target.unlink)
        logger.debug("Deleted file %s", target)

    def list_files(self, directory: str = "") -> list[str]:
        """Return a sorted list of filenames in *directory* (non-recursive)."""
        search_dir = self._base / directory if directory else self._base
        if not search_dir.exists():
            logger.debug("Directory does not exist: %s", search_dir)
            return []
        return sorted(p.name for p in search_dir.iterdir() if p.is_file())
