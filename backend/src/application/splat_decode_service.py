"""
Volumetric frame decoding use case.

A dataset is split into groups; each group is stored as a fixed list of
grayscale streams (one attribute byte plane per stream). Decoding a frame
means decoding every stream of its group, assembling the byte planes and
dequantizing them with the frame's min/max record.
"""
from __future__ import annotations

import asyncio
import logging
from collections import OrderedDict
from typing import Any, Optional

import numpy as np

from backend.src.application.dto.extract_request import ExtractFramesRequest
from backend.src.core.entities.group_layout import GroupLayout
from backend.src.core.entities.minmax_table import MinMaxTable
from backend.src.core.entities.splat_frame import DecodedSplatFrame
from backend.src.core.exceptions import DatasetNotFoundError, FrameDecodeError, MetadataError
from backend.src.core.services.dequantizer import Dequantizer
from backend.src.core.services.frame_inspection import describe_planes, describe_streams
from backend.src.core.services.plane_assembler import PlaneAssembler

logger = logging.getLogger(__name__)

StreamFrames = list[list[np.ndarray]]


class SplatDecodeService:
    """Decodes groups and frames of configured splat datasets."""

    def __init__(
        self,
        process_video,       # ProcessVideoService
        minmax_repository,   # MinMaxRepositoryPort
        layout_repository,   # GroupLayoutRepositoryPort
        frame_store,         # FrameStorePort
        config: dict[str, Any],
        assembler: Optional[PlaneAssembler] = None,
        dequantizer: Optional[Dequantizer] = None,
    ):
        splat_cfg = config.get("splat", {})
        self._process_video = process_video
        self._minmax_repository = minmax_repository
        self._layout_repository = layout_repository
        self._frame_store = frame_store
        self._datasets: dict[str, dict] = splat_cfg.get("datasets", {})
        self._streams: list[str] = list(splat_cfg.get("streams", []))
        self._frame_rate: int = splat_cfg.get("frame_rate", 25)
        self._concurrency: int = splat_cfg.get("decode_concurrency", 4)
        self._cache_groups: int = splat_cfg.get("cache_groups", 1)
        self._assembler = assembler or PlaneAssembler()
        self._dequantizer = dequantizer or Dequantizer(
            sixteen_bit_planes=self._assembler.pair_count
        )
        self._layouts: dict[str, GroupLayout] = {}
        self._group_cache: OrderedDict[tuple[str, int], StreamFrames] = OrderedDict()

    # ── Catalogue ─────────────────────────────────────────────────

    def datasets(self) -> list[str]:
        return sorted(self._datasets)

    def _dataset(self, name: str) -> dict:
        try:
            return self._datasets[name]
        except KeyError:
            raise DatasetNotFoundError(name) from None

    def layout(self, dataset: str) -> GroupLayout:
        if dataset not in self._layouts:
            cfg = self._dataset(dataset)
            self._layouts[dataset] = self._layout_repository.load(cfg["group_info_path"])
        return self._layouts[dataset]

    def stream_urls(self, dataset: str, group_index: int) -> list[str]:
        root = self._dataset(dataset)["video_root"].rstrip("/")
        return [f"{root}/group{group_index}/{name}" for name in self._streams]

    # ── Stream decoding ───────────────────────────────────────────

    async def decode_streams(self, dataset: str, group_index: int) -> StreamFrames:
        """Decode every stream of a group, in configured stream order.

        A stream that fails to fetch or decode contributes an empty list,
        and a group with such a stream is not cached.
        """
        key = (dataset, group_index)
        if key in self._group_cache:
            self._group_cache.move_to_end(key)
            return self._group_cache[key]

        self.layout(dataset).span_for(group_index)
        urls = self.stream_urls(dataset, group_index)
        semaphore = asyncio.Semaphore(self._concurrency)

        async def _limited(url: str) -> list[np.ndarray]:
            async with semaphore:
                result = await self._process_video.execute(
                    ExtractFramesRequest(url=url, frame_rate=self._frame_rate, color_mode="gray")
                )
                return result.images

        results = await asyncio.gather(
            *[_limited(u) for u in urls],
            return_exceptions=True,
        )

        streams: StreamFrames = []
        failed = False
        for url, result in zip(urls, results):
            if isinstance(result, BaseException):
                logger.warning("Stream %s failed to decode: %s", url, result)
                streams.append([])
                failed = True
            else:
                streams.append(result)

        describe_streams(streams)
        if not failed:
            self._remember(key, streams)
        return streams

    def _remember(self, key: tuple[str, int], streams: StreamFrames) -> None:
        if self._cache_groups <= 0:
            return
        self._group_cache[key] = streams
        self._group_cache.move_to_end(key)
        while len(self._group_cache) > self._cache_groups:
            self._group_cache.popitem(last=False)

    # ── Frame decoding ────────────────────────────────────────────

    def _build_frame(
        self,
        dataset: str,
        group_index: int,
        frame_index: int,
        local_index: int,
        streams: StreamFrames,
        minmax: MinMaxTable,
    ) -> DecodedSplatFrame:
        planes = self._assembler.assemble(streams, local_index)
        if not planes:
            raise FrameDecodeError(
                f"No planes decoded for frame {frame_index} of group {group_index}"
            )
        dequantized = self._dequantizer.dequantize(planes, minmax.for_frame(frame_index))
        describe_planes(dequantized)
        height, width = dequantized[0].shape if dequantized else planes[0].shape
        return DecodedSplatFrame(
            dataset=dataset,
            group_index=group_index,
            frame_index=frame_index,
            planes=dequantized,
            shape=(int(height), int(width)),
        )

    async def decode_frame(self, dataset: str, frame_index: int) -> DecodedSplatFrame:
        """Decode one global frame of *dataset*."""
        layout = self.layout(dataset)
        group_index = layout.group_for_frame(frame_index)
        span = layout.span_for(group_index)

        minmax = self._minmax_repository.load_range(
            self._dataset(dataset)["minmax_path"], frame_index, frame_index
        )
        if frame_index not in minmax:
            raise MetadataError(f"No min/max record for frame {frame_index}")

        streams = await self.decode_streams(dataset, group_index)

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None,
            self._build_frame,
            dataset,
            group_index,
            frame_index,
            span.to_local(frame_index),
            streams,
            minmax,
        )

    async def decode_group(self, dataset: str, group_index: int) -> list[DecodedSplatFrame]:
        """Decode every frame of a group; undecodable frames are skipped."""
        span = self.layout(dataset).span_for(group_index)
        streams = await self.decode_streams(dataset, group_index)
        minmax = self._minmax_repository.load_range(
            self._dataset(dataset)["minmax_path"], span.start_frame, span.end_frame
        )

        loop = asyncio.get_running_loop()
        frames: list[DecodedSplatFrame] = []
        for local_index in range(span.length):
            frame_index = span.to_global(local_index)
            if frame_index not in minmax:
                logger.warning("Skipping frame %d: no min/max record", frame_index)
                continue
            try:
                frame = await loop.run_in_executor(
                    None,
                    self._build_frame,
                    dataset,
                    group_index,
                    frame_index,
                    local_index,
                    streams,
                    minmax,
                )
            except FrameDecodeError as exc:
                logger.warning("Skipping frame %d: %s", frame_index, exc)
                continue
            frames.append(frame)

        logger.info(
            "Decoded %d/%d frames of group %d (%s)",
            len(frames), span.length, group_index, dataset,
        )
        return frames

    async def export_frame(self, dataset: str, frame_index: int, directory: str = "") -> str:
        frame = await self.decode_frame(dataset, frame_index)
        return await self._frame_store.save_frame(frame, directory or dataset)

    def encode_frame(self, frame: DecodedSplatFrame) -> bytes:
        return self._frame_store.encode_frame(frame)
