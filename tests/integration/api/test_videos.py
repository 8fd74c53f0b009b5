"""Integration tests for video frame extraction endpoints."""
from __future__ import annotations

from pathlib import Path

import pytest


class TestVideoInfo:
    @pytest.mark.asyncio
    async def test_info(self, async_client, sample_video):
        response = await async_client.post("/api/videos/info", json={"url": sample_video})

        assert response.status_code == 200
        data = response.json()
        assert data["source"] == sample_video
        assert data["total_frames"] == 30
        assert data["width"] == 32

    @pytest.mark.asyncio
    async def test_info_missing_file(self, async_client, tmp_path):
        response = await async_client.post(
            "/api/videos/info", json={"url": str(tmp_path / "missing.avi")}
        )
        assert response.status_code == 422
        assert "Cannot open video file" in response.json()["detail"]


class TestExtractFrames:
    @pytest.mark.asyncio
    async def test_extract(self, async_client, sample_video):
        response = await async_client.post(
            "/api/videos/frames", json={"url": sample_video, "frame_rate": 10}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["frame_count"] == 10
        assert data["source_indices"][:3] == [0, 3, 6]
        assert data["frame_shape"] == [24, 32, 3]
        assert data["downloaded"] is False
        assert data["exported_paths"] == []

    @pytest.mark.asyncio
    async def test_default_rate_from_settings(self, async_client, sample_video):
        response = await async_client.post("/api/videos/frames", json={"url": sample_video})
        assert response.json()["target_fps"] == 25

    @pytest.mark.asyncio
    async def test_extract_gray_with_cap(self, async_client, sample_video):
        response = await async_client.post(
            "/api/videos/frames",
            json={"url": sample_video, "frame_rate": 30, "color_mode": "gray", "max_frames": 5},
        )
        data = response.json()
        assert data["frame_count"] == 5
        assert data["truncated"] is True
        assert data["frame_shape"] == [24, 32]

    @pytest.mark.asyncio
    async def test_export(self, async_client, sample_video, test_settings):
        response = await async_client.post(
            "/api/videos/frames", json={"url": sample_video, "frame_rate": 5, "export": True}
        )
        paths = response.json()["exported_paths"]
        assert len(paths) == 5
        assert all(Path(p).is_file() for p in paths)
        assert Path(paths[0]).parent.parent == Path(test_settings.storage.frames_dir)

    @pytest.mark.asyncio
    async def test_zero_rate_rejected(self, async_client, sample_video):
        response = await async_client.post(
            "/api/videos/frames", json={"url": sample_video, "frame_rate": 0}
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_bad_color_mode(self, async_client, sample_video):
        response = await async_client.post(
            "/api/videos/frames", json={"url": sample_video, "color_mode": "hsv"}
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_missing_video(self, async_client, tmp_path):
        response = await async_client.post(
            "/api/videos/frames", json={"url": str(tmp_path / "gone.avi"), "frame_rate": 5}
        )
        assert response.status_code == 422
