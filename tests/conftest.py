"""Shared test fixtures for all tests."""
from __future__ import annotations

from pathlib import Path

import pytest
from unittest.mock import AsyncMock

from framesampler.application.dto.extraction_summary import ExtractionSummary
from framesampler.core.entities.video_info import VideoInfo


# ── Entity Fixtures ────────────────────────────────────────────────────────

@pytest.fixture
def sample_video_info() -> VideoInfo:
    return VideoInfo(frame_rate=30.0, total_frames=1000)


@pytest.fixture
def sample_summary(tmp_path: Path) -> ExtractionSummary:
    return ExtractionSummary(
        input_path=str(tmp_path / "input.mp4"),
        output_dir=str(tmp_path / "frames"),
        strategy="prefix",
        frame_interval=1,
        effective_max_frames=200,
        total_frames=1000,
        frame_rate=30.0,
        frame_paths=[str(tmp_path / "frames" / "frame_0.jpg")],
    )


# ── Mock Port Fixtures ─────────────────────────────────────────────────────

@pytest.fixture
def mock_prober(sample_video_info):
    mock = AsyncMock()
    mock.probe.return_value = sample_video_info
    return mock


@pytest.fixture
def mock_extractor():
    mock = AsyncMock()
    mock.extract.return_value = None
    return mock


@pytest.fixture
def mock_extraction_service(sample_summary):
    mock = AsyncMock()
    mock.run.return_value = sample_summary
    return mock
