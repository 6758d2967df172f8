"""
FrameSampler configuration using Pydantic Settings.
Every section can be overridden through environment variables or a .env file.
"""

from __future__ import annotations

from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Load .env before any BaseSettings subclass reads env vars
load_dotenv()

ONE_GIB = 1024 * 1024 * 1024


class FFmpegSettings(BaseSettings):
    ffmpeg_path: str = ""
    ffprobe_path: str = ""
    probe_timeout_seconds: Optional[float] = 60.0
    extract_timeout_seconds: Optional[float] = 3600.0

    model_config = {"env_prefix": "FFMPEG_"}


class UploadSettings(BaseSettings):
    upload_dir: str = "uploads"
    filename_prefix: str = "video"
    max_upload_size_bytes: int = ONE_GIB
    allowed_mime_types: list[str] = Field(
        default_factory=lambda: [
            "video/mp4",
            "video/webm",
            "video/ogg",
            "video/quicktime",
            "video/x-msvideo",
            "video/x-matroska",
        ]
    )

    model_config = {"env_prefix": "UPLOAD_"}


class ExtractionSettings(BaseSettings):
    frames_dir: str = "./frames"
    server_max_frames: int = 200
    cli_default_output: str = "./frames"
    job_history_size: int = 1000

    model_config = {"env_prefix": "EXTRACTION_"}


class WebSettings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = Field(3000, validation_alias="PORT")
    allowed_origins: list[str] = Field(default_factory=lambda: ["*"])


class LoggingSettings(BaseSettings):
    level: str = "INFO"

    model_config = {"env_prefix": "LOG_"}


class Settings(BaseSettings):
    """Root settings aggregating all configuration sections."""

    app_env: str = "development"

    ffmpeg: FFmpegSettings = Field(default_factory=FFmpegSettings)
    upload: UploadSettings = Field(default_factory=UploadSettings)
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)
    web: WebSettings = Field(default_factory=WebSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
