"""Unit tests for ApplicationContainer wiring."""
from __future__ import annotations

import pytest

from framesampler.infrastructure.config import Settings
from framesampler.infrastructure.container import EXTRACT_TASK, ApplicationContainer


class TestApplicationContainer:
    """Test that all container accessors return wired instances."""

    @pytest.fixture
    def container(self, tmp_path) -> ApplicationContainer:
        settings = Settings(app_env="test")
        settings.upload.upload_dir = str(tmp_path / "uploads")
        settings.ffmpeg.ffmpeg_path = "/usr/bin/ffmpeg"
        settings.ffmpeg.ffprobe_path = "/usr/bin/ffprobe"
        return ApplicationContainer(settings)

    def test_prober(self, container):
        prober = container.prober()
        assert type(prober).__name__ == "FFprobeVideoProber"
        assert prober.build_args("x.mp4")[0] == "/usr/bin/ffprobe"

    def test_frame_extractor(self, container):
        assert type(container.frame_extractor()).__name__ == "FFmpegFrameExtractor"

    def test_extraction_service_is_cached(self, container):
        assert container.extraction_service() is container.extraction_service()

    def test_file_storage_creates_upload_dir(self, container, tmp_path):
        container.file_storage()
        assert (tmp_path / "uploads").is_dir()

    def test_task_queue_has_extraction_registered(self, container):
        queue = container.task_queue()
        assert EXTRACT_TASK in queue._registry

    def test_override(self, container, mock_extraction_service):
        container.override("extraction_service", mock_extraction_service)
        assert container.extraction_service() is mock_extraction_service


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.upload.max_upload_size_bytes == 1024 ** 3
        assert "video/mp4" in settings.upload.allowed_mime_types
        assert settings.extraction.server_max_frames == 200
        assert settings.extraction.cli_default_output == "./frames"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("EXTRACTION_SERVER_MAX_FRAMES", "50")
        monkeypatch.setenv("FFMPEG_EXTRACT_TIMEOUT_SECONDS", "12.5")
        settings = Settings()
        assert settings.extraction.server_max_frames == 50
        assert settings.ffmpeg.extract_timeout_seconds == 12.5


class TestPortConformance:
    """Adapters built by the container satisfy their ports."""

    @pytest.fixture
    def container(self, tmp_path) -> ApplicationContainer:
        settings = Settings()
        settings.upload.upload_dir = str(tmp_path / "uploads")
        return ApplicationContainer(settings)

    def test_adapters_match_ports(self, container):
        from framesampler.ports.outbound import (
            FileStoragePort,
            FrameExtractionPort,
            TaskQueuePort,
            VideoProbePort,
        )

        assert isinstance(container.prober(), VideoProbePort)
        assert isinstance(container.frame_extractor(), FrameExtractionPort)
        assert isinstance(container.file_storage(), FileStoragePort)
        assert isinstance(container.task_queue(), TaskQueuePort)
