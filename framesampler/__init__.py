"""FrameSampler: sample video frames to JPEG via ffprobe/ffmpeg."""

__version__ = "0.1.0"
