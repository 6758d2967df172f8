"""FFprobe adapter reading frame count and frame rate of the first video stream."""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Optional

from framesampler.adapters.outbound.ffmpeg.ffmpeg_base import (
    get_ffprobe_path,
    log_stream_lines,
    run_process,
)
from framesampler.core.entities.video_info import VideoInfo
from framesampler.core.exceptions import ProbeError, UnknownFrameCountError

logger = logging.getLogger(__name__)


class FFprobeVideoProber:
    """Implements VideoProbePort using ffprobe's JSON output."""

    def __init__(self, ffprobe_path: str = "", timeout: Optional[float] = None) -> None:
        self._ffprobe = get_ffprobe_path(ffprobe_path)
        self._timeout = timeout

    def build_args(self, input_path: str) -> list[str]:
        return [
            self._ffprobe,
            "-v", "error",
            "-select_streams", "v:0",
            "-show_entries", "stream=nb_frames,r_frame_rate",
            "-of", "json",
            input_path,
        ]

    async def probe(self, input_path: str) -> VideoInfo:
        try:
            result = await run_process(
                self.build_args(input_path),
                timeout=self._timeout,
                on_stderr=log_stream_lines("ffprobe", logging.DEBUG),
            )
        except asyncio.TimeoutError:
            raise ProbeError(
                f"ffprobe timed out after {self._timeout}s on {input_path}", timed_out=True
            ) from None
        except OSError as exc:
            raise ProbeError(f"Cannot run ffprobe ({self._ffprobe}): {exc}") from exc

        if result.returncode != 0:
            raise ProbeError(
                f"Failed to get video information (ffprobe exited with code {result.returncode})",
                returncode=result.returncode,
            )

        info = self.parse_output(result.stdout)
        logger.debug(
            "Probed %s: %d frames at %.3f fps", input_path, info.total_frames, info.frame_rate
        )
        return info

    @staticmethod
    def parse_output(payload: str) -> VideoInfo:
        """Turn ffprobe's JSON payload into a :class:`VideoInfo`."""
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise ProbeError(f"ffprobe returned malformed JSON: {exc}") from exc

        streams = data.get("streams") if isinstance(data, dict) else None
        if not streams:
            raise ProbeError("No video stream found")
        stream = streams[0]

        rate = stream.get("r_frame_rate")
        if rate is None:
            raise ProbeError("Video stream has no r_frame_rate")

        raw_frames = stream.get("nb_frames")
        try:
            total_frames = int(raw_frames)
        except (TypeError, ValueError):
            raise UnknownFrameCountError(raw_frames) from None
        if total_frames < 0:
            raise ProbeError(f"Negative frame count: {total_frames}")

        return VideoInfo.from_rational(rate, total_frames)
