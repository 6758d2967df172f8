"""Port for reading source video metadata."""
from __future__ import annotations
from typing import Protocol, runtime_checkable

from framesampler.core.entities.video_info import VideoInfo


@runtime_checkable
class VideoProbePort(Protocol):
    async def probe(self, input_path: str) -> VideoInfo: ...
