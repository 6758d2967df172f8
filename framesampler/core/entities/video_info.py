"""VideoInfo entity describing the probed first video stream."""

from __future__ import annotations

from dataclasses import dataclass

from framesampler.core.exceptions import ProbeError


@dataclass(frozen=True)
class VideoInfo:
    """Frame rate and encoded frame count of a source video."""

    frame_rate: float
    total_frames: int

    def __post_init__(self) -> None:
        if self.total_frames < 0:
            raise ValueError(f"total_frames must be >= 0, got {self.total_frames}")
        if self.frame_rate <= 0:
            raise ValueError(f"frame_rate must be > 0, got {self.frame_rate}")

    @staticmethod
    def parse_frame_rate(rational: str) -> float:
        """Parse an ffprobe ``num/den`` rate such as ``30000/1001``."""
        parts = str(rational).split("/")
        if len(parts) != 2:
            raise ProbeError(f"Malformed frame rate: {rational!r}")
        try:
            num = float(parts[0])
            den = float(parts[1])
        except ValueError:
            raise ProbeError(f"Non-numeric frame rate: {rational!r}") from None
        if den == 0:
            raise ProbeError(f"Frame rate has a zero denominator: {rational!r}")
        return num / den

    @classmethod
    def from_rational(cls, rational: str, total_frames: int) -> VideoInfo:
        frame_rate = cls.parse_frame_rate(rational)
        if frame_rate <= 0:
            raise ProbeError(f"Frame rate must be positive: {rational!r}")
        return cls(frame_rate=frame_rate, total_frames=total_frames)
