"""Integration tests for upload and job status endpoints."""
from __future__ import annotations

import io
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from framesampler.core.exceptions import ExtractionError, FilesystemError
from framesampler.core.value_objects.sampling_plan import SamplingStrategy


def _video(content: bytes = b"\x00" * 1024, name: str = "test_video.mp4", mime: str = "video/mp4"):
    return {"video": (name, io.BytesIO(content), mime)}


class TestUploadAPI:
    """Tests for /upload endpoint."""

    @pytest.mark.asyncio
    async def test_upload_valid_mp4(self, async_client, test_settings):
        response = await async_client.post("/upload", files=_video())

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "File uploaded successfully"
        info = data["file"]
        assert info["originalName"] == "test_video.mp4"
        assert info["size"] == 1024
        assert info["mimetype"] == "video/mp4"
        assert info["filename"].startswith("video-")
        assert info["filename"].endswith(".mp4")
        stored = Path(info["path"])
        assert stored.parent == Path(test_settings.upload.upload_dir)
        assert stored.read_bytes() == b"\x00" * 1024
        assert data["job_id"]

    @pytest.mark.asyncio
    async def test_upload_starts_server_profile_extraction(
        self, async_client, test_container, test_settings, mock_extraction_service
    ):
        response = await async_client.post("/upload", files=_video())
        data = response.json()

        status = await test_container.task_queue().wait(data["job_id"])

        assert status["status"] == "SUCCESS"
        job = mock_extraction_service.run.await_args.args[0]
        assert job.input_path == data["file"]["path"]
        assert job.profile.strategy is SamplingStrategy.PREFIX
        assert job.profile.max_frames == 200
        assert job.output_dir.parent == Path(test_settings.extraction.frames_dir)
        assert job.output_dir.name == Path(data["file"]["filename"]).stem

    @pytest.mark.asyncio
    async def test_each_upload_gets_its_own_output_dir(
        self, async_client, test_container, mock_extraction_service
    ):
        ids = []
        for _ in range(2):
            response = await async_client.post("/upload", files=_video())
            ids.append(response.json()["job_id"])
        for job_id in ids:
            await test_container.task_queue().wait(job_id)

        dirs = {call.args[0].output_dir for call in mock_extraction_service.run.await_args_list}
        assert len(dirs) == 2

    @pytest.mark.asyncio
    async def test_extraction_failure_does_not_change_response(
        self, async_client, test_container, mock_extraction_service
    ):
        mock_extraction_service.run.side_effect = ExtractionError(
            "ffmpeg process exited with code 1", returncode=1
        )

        response = await async_client.post("/upload", files=_video())
        assert response.status_code == 200

        status = await test_container.task_queue().wait(response.json()["job_id"])
        assert status["status"] == "FAILURE"
        assert "code 1" in status["error"]

    @pytest.mark.asyncio
    async def test_upload_valid_webm(self, async_client):
        response = await async_client.post(
            "/upload", files=_video(b"\x00" * 512, "clip.webm", "video/webm")
        )
        assert response.status_code == 200
        assert response.json()["file"]["mimetype"] == "video/webm"

    @pytest.mark.asyncio
    async def test_upload_invalid_mimetype(self, async_client, test_settings):
        response = await async_client.post(
            "/upload", files=_video(b"not a video", "test.txt", "text/plain")
        )
        assert response.status_code == 400
        assert "Invalid file type" in response.json()["detail"]
        upload_dir = Path(test_settings.upload.upload_dir)
        assert not upload_dir.exists() or list(upload_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_upload_without_file(self, async_client, mock_extraction_service):
        response = await async_client.post(
            "/upload",
            files={"document": ("a.mp4", io.BytesIO(b"\x00"), "video/mp4")},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "No file uploaded"
        mock_extraction_service.run.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_upload_too_large(self, async_client, test_settings, mock_extraction_service):
        test_settings.upload.max_upload_size_bytes = 1024

        response = await async_client.post("/upload", files=_video(b"\x00" * 2048))

        assert response.status_code == 400
        assert response.json()["detail"] == "File size too large. Maximum size is 1KB"
        assert list(Path(test_settings.upload.upload_dir).iterdir()) == []
        mock_extraction_service.run.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_upload_filename_sanitized(self, async_client, test_settings):
        response = await async_client.post(
            "/upload", files=_video(name="../../../etc/passwd.mp4")
        )
        assert response.status_code == 200
        stored = Path(response.json()["file"]["path"])
        assert ".." not in stored.name
        assert stored.parent == Path(test_settings.upload.upload_dir)

    @pytest.mark.asyncio
    async def test_storage_failure_returns_500(
        self, async_client, test_container, mock_extraction_service
    ):
        storage = MagicMock()
        storage.generate_filename.return_value = "video-1-2.mp4"
        storage.save_stream = AsyncMock(side_effect=FilesystemError("disk full"))
        test_container.override("file_storage", storage)

        response = await async_client.post("/upload", files=_video())

        assert response.status_code == 500
        assert response.json() == {"detail": "disk full"}
        mock_extraction_service.run.assert_not_awaited()


class TestJobsAPI:
    """Tests for /jobs/{job_id} endpoint."""

    @pytest.mark.asyncio
    async def test_job_not_found(self, async_client):
        response = await async_client.get("/jobs/nonexistent-job-id")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_job_result_after_completion(self, async_client, test_container):
        upload = await async_client.post("/upload", files=_video())
        job_id = upload.json()["job_id"]
        await test_container.task_queue().wait(job_id)

        response = await async_client.get(f"/jobs/{job_id}")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "SUCCESS"
        assert data["result"]["frame_count"] == 1
        assert data["result"]["strategy"] == "prefix"
