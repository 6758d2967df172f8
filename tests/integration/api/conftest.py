"""Integration test fixtures for API testing."""
from __future__ import annotations

import pytest
from httpx import AsyncClient, ASGITransport

from framesampler.adapters.inbound.fastapi_app import app
from framesampler.infrastructure.config import Settings
from framesampler.infrastructure.container import ApplicationContainer


@pytest.fixture
def test_settings(tmp_path):
    """Create test settings writing into a temporary directory."""
    settings = Settings()
    settings.app_env = "test"
    settings.upload.upload_dir = str(tmp_path / "uploads")
    settings.extraction.frames_dir = str(tmp_path / "frames")
    return settings


@pytest.fixture
def test_container(test_settings, mock_extraction_service):
    """Create a container whose extraction service is mocked."""
    container = ApplicationContainer(test_settings)
    container.override("extraction_service", mock_extraction_service)
    return container


@pytest.fixture
async def async_client(test_container):
    """Create an async test client for the FastAPI app."""
    app.state.container = test_container

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    await test_container.task_queue().shutdown()
