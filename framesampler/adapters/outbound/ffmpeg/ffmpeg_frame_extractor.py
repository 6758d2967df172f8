"""FFmpeg adapter writing sampled frames as a numbered JPEG sequence."""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

from framesampler.adapters.outbound.ffmpeg.ffmpeg_base import (
    get_ffmpeg_path,
    log_stream_lines,
    run_process,
)
from framesampler.core.exceptions import ExtractionError, FilesystemError
from framesampler.core.value_objects.sampling_plan import SamplingPlan, SamplingStrategy

logger = logging.getLogger(__name__)

FRAME_PATTERN = "frame_%d.jpg"


class FFmpegFrameExtractor:
    """Implements FrameExtractionPort using ffmpeg's image2 muxer.

    ``-vsync 0`` keeps selection index-based instead of timestamp-based and
    ``-frame_pts 1`` numbers each file by its source presentation index.
    """

    def __init__(self, ffmpeg_path: str = "", timeout: Optional[float] = None) -> None:
        self._ffmpeg = get_ffmpeg_path(ffmpeg_path)
        self._timeout = timeout

    # -- port interface ---------------------------------------------------------

    async def extract(self, input_path: str, output_dir: Path, plan: SamplingPlan) -> None:
        out = Path(output_dir)
        try:
            out.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(f"Cannot create output directory {out}: {exc}") from exc

        args = self.build_args(input_path, out, plan)
        logger.info(
            "Extracting frames from %s -> %s (%s, interval=%d, max=%d)",
            input_path, out, plan.strategy.value, plan.frame_interval, plan.effective_max_frames,
        )

        try:
            result = await run_process(
                args,
                timeout=self._timeout,
                on_stderr=log_stream_lines("ffmpeg"),
            )
        except asyncio.TimeoutError:
            raise ExtractionError(
                f"ffmpeg timed out after {self._timeout}s on {input_path}", timed_out=True
            ) from None
        except OSError as exc:
            raise ExtractionError(f"Cannot run ffmpeg ({self._ffmpeg}): {exc}") from exc

        if result.returncode != 0:
            raise ExtractionError(
                f"ffmpeg process exited with code {result.returncode}",
                returncode=result.returncode,
            )
        logger.info("Frame extraction completed: %s", out)

    # -- argument construction --------------------------------------------------

    def build_args(self, input_path: str, output_dir: Path, plan: SamplingPlan) -> list[str]:
        args = [self._ffmpeg, "-y", "-i", str(input_path)]
        if plan.has_cap:
            args += ["-vframes", str(plan.effective_max_frames)]
        if plan.strategy is SamplingStrategy.UNIFORM:
            args += ["-vf", f"select='not(mod(n,{plan.frame_interval}))'"]
        args += [
            "-vsync", "0",
            "-frame_pts", "1",
            "-f", "image2",
            str(Path(output_dir) / FRAME_PATTERN),
        ]
        return args
