"""
Video upload and extraction job routes.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, File, HTTPException, Request, UploadFile

from framesampler.application.dto.extraction_job import ExtractionJob, ExtractionProfile
from framesampler.core.exceptions import UploadValidationError
from framesampler.infrastructure.container import EXTRACT_TASK

logger = logging.getLogger(__name__)

router = APIRouter()


def _validate_mimetype(file: UploadFile, allowed: list[str]) -> str:
    mimetype = file.content_type or ""
    if mimetype not in allowed:
        raise UploadValidationError("Invalid file type. Only video files are allowed.")
    return mimetype


@router.post("/upload")
async def upload_video(request: Request, video: Optional[UploadFile] = File(None)):
    """Store an uploaded video and start frame extraction in the background.

    The response is sent as soon as the file is stored; extraction failures
    are only logged and recorded in the job status.
    """
    container = request.app.state.container
    settings = container.settings
    max_bytes = settings.upload.max_upload_size_bytes

    if video is None:
        raise UploadValidationError("No file uploaded")

    mimetype = _validate_mimetype(video, settings.upload.allowed_mime_types)

    storage = container.file_storage()
    original_name = video.filename or "upload"
    filename = storage.generate_filename(settings.upload.filename_prefix, original_name)
    stored_path, size = await storage.save_stream(video, filename, max_bytes)

    job = ExtractionJob(
        input_path=str(stored_path),
        output_dir=Path(settings.extraction.frames_dir) / stored_path.stem,
        profile=ExtractionProfile.server(settings.extraction.server_max_frames),
    )
    job_id = container.task_queue().enqueue(EXTRACT_TASK, {"job": job})
    logger.info("Stored upload %s (%d bytes), extraction job %s", stored_path, size, job_id)

    return {
        "message": "File uploaded successfully",
        "file": {
            "filename": stored_path.name,
            "originalName": original_name,
            "size": size,
            "mimetype": mimetype,
            "path": str(stored_path),
        },
        "job_id": job_id,
    }


@router.get("/jobs/{job_id}")
async def get_job(request: Request, job_id: str):
    """Report the outcome of a background extraction job."""
    status = request.app.state.container.task_queue().get_status(job_id)
    if status["status"] == "UNKNOWN":
        raise HTTPException(status_code=404, detail="Job not found")
    return status
