"""
Dependency injection container.
Wires together ports and adapters based on configuration.
"""
from __future__ import annotations

import logging
from typing import Optional

from backend.src.infrastructure.config import Settings

logger = logging.getLogger(__name__)


class ApplicationContainer:
    """Simplified container that builds concrete instances from settings.

    Usage::

        container = ApplicationContainer(settings)
        service = container.process_video_service()
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self._cache: dict[str, object] = {}

    def _get_or_create(self, key: str, factory):
        if key not in self._cache:
            self._cache[key] = factory(self.settings)
        return self._cache[key]

    # ── Lazy factory helpers ──────────────────────────────────────

    @staticmethod
    def _build_frame_extraction(settings: Settings):
        from backend.src.adapters.outbound.media.opencv_frames import OpenCVFrameExtractor
        return OpenCVFrameExtractor(config=settings.to_adapter_config())

    @staticmethod
    def _build_video_source(settings: Settings):
        from backend.src.adapters.outbound.external.http_video_source import HttpVideoSource
        return HttpVideoSource(config=settings.to_adapter_config())

    @staticmethod
    def _build_minmax_repository(settings: Settings):
        from backend.src.adapters.outbound.persistence.json_metadata_repo import JsonMinMaxRepository
        return JsonMinMaxRepository()

    @staticmethod
    def _build_layout_repository(settings: Settings):
        from backend.src.adapters.outbound.persistence.json_metadata_repo import JsonGroupLayoutRepository
        return JsonGroupLayoutRepository()

    @staticmethod
    def _build_frame_store(settings: Settings):
        from backend.src.adapters.outbound.persistence.local_file_storage import LocalFrameStore
        return LocalFrameStore(base_dir=settings.storage.exports_dir)

    # ── Port accessors ─────────────────────────────────────────────

    def frame_extraction(self):
        return self._get_or_create("frame_extraction", self._build_frame_extraction)

    def video_source(self):
        return self._get_or_create("video_source", self._build_video_source)

    def minmax_repository(self):
        return self._get_or_create("minmax_repository", self._build_minmax_repository)

    def layout_repository(self):
        return self._get_or_create("layout_repository", self._build_layout_repository)

    def frame_store(self):
        return self._get_or_create("frame_store", self._build_frame_store)

    # ── Application services ───────────────────────────────────────

    def process_video_service(self):
        if "process_video_service" not in self._cache:
            from backend.src.application.process_video_service import ProcessVideoService
            self._cache["process_video_service"] = ProcessVideoService(
                frame_extraction=self.frame_extraction(),
                video_source=self.video_source(),
            )
        return self._cache["process_video_service"]

    def splat_decode_service(self):
        if "splat_decode_service" not in self._cache:
            from backend.src.application.splat_decode_service import SplatDecodeService
            self._cache["splat_decode_service"] = SplatDecodeService(
                process_video=self.process_video_service(),
                minmax_repository=self.minmax_repository(),
                layout_repository=self.layout_repository(),
                frame_store=self.frame_store(),
                config=self.settings.to_adapter_config(),
            )
        return self._cache["splat_decode_service"]
