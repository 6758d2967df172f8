"""Custom exception hierarchy for FrameSampler."""
from __future__ import annotations

from typing import Optional


class FrameSamplerError(Exception):
    """Base exception for all FrameSampler errors."""


class ProbeError(FrameSamplerError):
    """Raised when ffprobe fails or its metadata cannot be parsed."""

    def __init__(
        self,
        message: str,
        returncode: Optional[int] = None,
        timed_out: bool = False,
    ) -> None:
        self.returncode = returncode
        self.timed_out = timed_out
        super().__init__(message)


class UnknownFrameCountError(ProbeError):
    """Raised when the video stream does not report a numeric ``nb_frames``."""

    def __init__(self, raw_value: object) -> None:
        self.raw_value = raw_value
        super().__init__(f"Video stream does not report a frame count (nb_frames={raw_value!r})")


class ExtractionError(FrameSamplerError):
    """Raised when the ffmpeg decode process exits non-zero or times out."""

    def __init__(
        self,
        message: str,
        returncode: Optional[int] = None,
        timed_out: bool = False,
    ) -> None:
        self.returncode = returncode
        self.timed_out = timed_out
        super().__init__(message)


class FilesystemError(FrameSamplerError):
    """Raised when an output directory cannot be created."""


class UploadValidationError(FrameSamplerError):
    """Raised when an uploaded file fails validation."""
