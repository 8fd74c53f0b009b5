"""Shared test fixtures for all tests."""
from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock

import cv2
import numpy as np
import pytest

from backend.src.core.entities.extracted_frames import ExtractedFrames
from backend.src.core.entities.video import VideoInfo
from backend.src.core.value_objects.sampling_plan import SamplingPlan


# ── Video Fixtures ─────────────────────────────────────────────────────────

@pytest.fixture
def make_video(tmp_path):
    """Factory writing a small MJPG video whose frame ``i`` is filled with ``i * step``."""

    def _make(
        name: str = "clip.avi",
        frame_count: int = 30,
        fps: float = 30.0,
        size: tuple[int, int] = (32, 24),
        step: int = 8,
    ) -> str:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        width, height = size
        writer = cv2.VideoWriter(
            str(path), cv2.VideoWriter_fourcc(*"MJPG"), fps, (width, height)
        )
        try:
            for i in range(frame_count):
                value = (i * step) % 256
                writer.write(np.full((height, width, 3), value, dtype=np.uint8))
        finally:
            writer.release()
        return str(path)

    return _make


@pytest.fixture
def sample_video(make_video) -> str:
    return make_video()


# ── Entity Fixtures ────────────────────────────────────────────────────────

@pytest.fixture
def sample_info() -> VideoInfo:
    return VideoInfo(source="/tmp/clip.avi", fps=30.0, total_frames=90, width=32, height=24)


@pytest.fixture
def sample_extracted(sample_info) -> ExtractedFrames:
    frames = ExtractedFrames(info=sample_info, plan=SamplingPlan(native_fps=30.0, target_fps=10))
    for i in range(3):
        frames.append(np.full((24, 32), i, dtype=np.uint8), i * 3, i * 0.1)
    return frames


def _viewer_info(frame_index: int) -> list[float]:
    """A 40-value viewer record whose needed values are easy to recognise."""
    info = [float(-100 - i) for i in range(40)]
    info[0:6] = [-1.0, 1.0, -2.0, 2.0, -3.0, 3.0]
    info[12:18] = [0.0, 1.0, 0.0, 2.0, 0.0, 4.0]
    info[-16:] = [float(frame_index), float(frame_index) + 255.0] * 8
    return info


@pytest.fixture
def dataset_files(tmp_path) -> dict[str, str]:
    """Group layout and min/max JSON files for a two-group dataset of six frames."""
    group_info = {
        "1": {"frame_index": [3, 5]},
        "0": {"frame_index": [0, 2]},
    }
    viewers = {
        "viewers": {
            str(i): {"num": i, "info": _viewer_info(i)} for i in range(6)
        }
    }
    group_path = tmp_path / "group_info.json"
    minmax_path = tmp_path / "viewer_min_max.json"
    group_path.write_text(json.dumps(group_info), encoding="utf-8")
    minmax_path.write_text(json.dumps(viewers), encoding="utf-8")
    return {
        "video_root": str(tmp_path / "videos"),
        "group_info_path": str(group_path),
        "minmax_path": str(minmax_path),
    }


# ── Mock Port Fixtures ─────────────────────────────────────────────────────

@pytest.fixture
def mock_frame_extraction_port(sample_extracted):
    mock = AsyncMock()
    mock.process_video.return_value = sample_extracted
    mock.export_frames.return_value = ["/tmp/frames/frame_000000_t0.00s.jpg"]
    mock.get_video_info = MagicMock(
        return_value=VideoInfo(source="/tmp/local.avi", fps=30.0, total_frames=90, width=32, height=24)
    )
    return mock


@pytest.fixture
def mock_video_source():
    mock = AsyncMock()
    mock.fetch.side_effect = lambda url: url
    mock.release.return_value = None
    mock.is_remote = MagicMock(return_value=False)
    return mock


@pytest.fixture
def mock_frame_store():
    mock = AsyncMock()
    mock.save_frame.return_value = "/tmp/exports/coser_frame_000000.npz"
    mock.encode_frame = MagicMock(return_value=b"npz-bytes")
    return mock


@pytest.fixture
def viewer_info():
    return _viewer_info


@pytest.fixture
def make_group_streams(make_video):
    """Write one synthetic video per stream name under ``videos/group<N>/``."""

    def _make(group_index: int, streams: list[str], frame_count: int = 3) -> None:
        for position, name in enumerate(streams):
            make_video(
                name=f"videos/group{group_index}/{name}",
                frame_count=frame_count,
                fps=25.0,
                step=position + 1,
            )

    return _make
