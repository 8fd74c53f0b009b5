"""Video source adapter resolving URLs to local files.

Plain paths and ``file://`` URLs are used in place. ``http``/``https``
URLs are downloaded into a cache directory with retry and exponential
backoff, and deleted again by :meth:`release`.
"""
from __future__ import annotations

import asyncio
import logging
import time
import uuid
from pathlib import Path
from typing import Any
from urllib.parse import unquote, urlparse

import requests

from backend.src.core.exceptions import VideoSourceError

logger = logging.getLogger(__name__)

# Retry configuration
MAX_RETRIES = 3
INITIAL_BACKOFF = 1.0  # seconds
CHUNK_SIZE = 1024 * 1024  # 1MB

_REMOTE_SCHEMES = ("http", "https")

# Failures worth another attempt; the body may have been cut off midway.
_TRANSIENT_ERRORS = (
    requests.exceptions.Timeout,
    requests.exceptions.ConnectionError,
    requests.exceptions.ChunkedEncodingError,
)


class HttpVideoSource:
    """Implements VideoSourcePort on top of ``requests``."""

    def __init__(self, config: dict[str, Any]) -> None:
        src_cfg = config.get("source", {})
        self._download_dir = Path(src_cfg.get("download_dir", "./media/downloads"))
        self._timeout: float = src_cfg.get("timeout", 60)
        self._max_retries: int = src_cfg.get("max_retries", MAX_RETRIES)
        self._initial_backoff: float = src_cfg.get("initial_backoff", INITIAL_BACKOFF)
        self._chunk_size: int = src_cfg.get("chunk_size", CHUNK_SIZE)
        self._keep_downloads: bool = src_cfg.get("keep_downloads", False)
        self._downloaded: set[str] = set()

    # ------------------------------------------------------------------
    # VideoSourcePort interface
    # ------------------------------------------------------------------

    def is_remote(self, url: str) -> bool:
        return urlparse(url).scheme.lower() in _REMOTE_SCHEMES

    async def fetch(self, url: str) -> str:
        """Return a local path for *url*, downloading it when remote."""
        if not self.is_remote(url):
            return self._local_path(url)

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._download_sync, url)

    async def release(self, local_path: str) -> None:
        """Delete *local_path* if this source downloaded it."""
        if local_path not in self._downloaded:
            return
        self._downloaded.discard(local_path)
        if self._keep_downloads:
            logger.debug("Keeping downloaded file %s", local_path)
            return

        target = Path(local_path)
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, target.unlink)
            logger.debug("Deleted downloaded file %s", target)
        except FileNotFoundError:
            logger.warning("Downloaded file already removed: %s", target)

    # ------------------------------------------------------------------
    # Internal / synchronous helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _local_path(url: str) -> str:
        parsed = urlparse(url)
        if parsed.scheme.lower() == "file":
            return unquote(parsed.path)
        return url

    def _destination(self, url: str) -> Path:
        name = Path(urlparse(url).path).name or "video"
        # Streams of different groups share file names ("0.mp4").
        return self._download_dir / f"{uuid.uuid4().hex[:12]}_{name}"

    def _download_sync(self, url: str) -> str:
        self._download_dir.mkdir(parents=True, exist_ok=True)
        destination = self._destination(url)
        last_exc: Exception | None = None

        for attempt in range(self._max_retries):
            try:
                self._stream_to_file(url, destination)
                self._downloaded.add(str(destination))
                logger.info("Downloaded %s -> %s", url, destination)
                return str(destination)
            except _TRANSIENT_ERRORS as exc:
                last_exc = exc
            except requests.exceptions.HTTPError as exc:
                # Don't retry on 4xx errors
                if exc.response is not None and 400 <= exc.response.status_code < 500:
                    raise VideoSourceError(f"Failed to download {url}: {exc}") from exc
                last_exc = exc
            except (requests.exceptions.RequestException, OSError) as exc:
                raise VideoSourceError(f"Failed to download {url}: {exc}") from exc

            backoff = self._initial_backoff * (2 ** attempt)
            logger.warning(
                "Download attempt %d/%d for %s failed (%s), retrying in %.1fs",
                attempt + 1, self._max_retries, url, last_exc, backoff,
            )
            time.sleep(backoff)

        raise VideoSourceError(
            f"Failed to download {url} after {self._max_retries} attempts: {last_exc}"
        ) from last_exc

    def _stream_to_file(self, url: str, destination: Path) -> None:
        """Write *url* to *destination*; a failed attempt leaves no file behind."""
        try:
            with requests.get(url, stream=True, timeout=self._timeout) as response:
                response.raise_for_status()
                with open(destination, "wb") as f:
                    for chunk in response.iter_content(chunk_size=self._chunk_size):
                        if chunk:
                            f.write(chunk)
        except BaseException:
            destination.unlink(missing_ok=True)
            raise
