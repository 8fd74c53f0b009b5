"""Integration test fixtures for API testing."""
from __future__ import annotations

import pytest
from httpx import AsyncClient, ASGITransport

from backend.src.adapters.inbound.fastapi_app import app
from backend.src.infrastructure.config import (
    DatasetSettings,
    Settings,
    SourceSettings,
    SplatSettings,
    StorageSettings,
)
from backend.src.infrastructure.container import ApplicationContainer

STREAMS = [f"{i}.avi" for i in (0, 1, 2, 3, 4, 5, *range(9, 20))]


@pytest.fixture
def test_settings(tmp_path, dataset_files):
    """Create test settings pointing at a synthetic dataset under tmp_path."""
    return Settings(
        app_env="test",
        source=SourceSettings(download_dir=str(tmp_path / "downloads")),
        splat=SplatSettings(
            streams=STREAMS,
            default_dataset="test",
            datasets={"test": DatasetSettings(**dataset_files)},
        ),
        storage=StorageSettings(
            media_root=str(tmp_path / "media"),
            frames_dir=str(tmp_path / "media" / "frames"),
            exports_dir=str(tmp_path / "media" / "exports"),
        ),
    )


@pytest.fixture
def dataset_streams(make_group_streams):
    """Write the stream videos of both groups of the test dataset."""
    make_group_streams(0, STREAMS, frame_count=3)
    make_group_streams(1, STREAMS, frame_count=3)
    return STREAMS


@pytest.fixture
def test_container(test_settings):
    """Create a test container wired to real adapters."""
    return ApplicationContainer(test_settings)


@pytest.fixture
async def async_client(test_container):
    """Create an async test client for the FastAPI app."""
    app.state.container = test_container

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
