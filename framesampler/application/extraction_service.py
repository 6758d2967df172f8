"""
Frame extraction use case.
Probe -> plan -> extract, shared by the upload pipeline and the CLI.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional

from framesampler.application.dto.extraction_job import ExtractionJob
from framesampler.application.dto.extraction_summary import ExtractionSummary
from framesampler.core.entities.video_info import VideoInfo
from framesampler.core.exceptions import UnknownFrameCountError

logger = logging.getLogger(__name__)

_FRAME_INDEX = re.compile(r"frame_(\d+)\.jpg$")


class FrameExtractionService:
    """Orchestrates one extraction run."""

    def __init__(
        self,
        prober,     # VideoProbePort
        extractor,  # FrameExtractionPort
    ):
        self._prober = prober
        self._extractor = extractor

    async def run(self, job: ExtractionJob) -> ExtractionSummary:
        """Execute probe, planning and extraction for *job*.

        Raises ProbeError, ExtractionError or FilesystemError; nothing is
        retried.
        """
        info = await self._probe(job)
        total_frames = info.total_frames if info else None
        plan = job.profile.build_plan(total_frames)

        logger.info("Input file: %s", job.input_path)
        logger.info("Output directory: %s", job.output_dir)
        logger.info(
            "Total frames in video: %s",
            total_frames if total_frames is not None else "unknown",
        )
        if job.profile.needs_frame_count:
            logger.info(
                "Extracting every %dth frame (%s%%)", plan.frame_interval, job.profile.percentage
            )
        logger.info("Maximum frames to extract: %d", plan.effective_max_frames)

        output_dir = Path(job.output_dir)
        await self._extractor.extract(job.input_path, output_dir, plan)

        frames = list_frames(output_dir)
        logger.info("Extracted %d frame(s) into %s", len(frames), output_dir)
        return ExtractionSummary(
            input_path=str(job.input_path),
            output_dir=str(output_dir),
            strategy=plan.strategy.value,
            frame_interval=plan.frame_interval,
            effective_max_frames=plan.effective_max_frames,
            total_frames=total_frames,
            frame_rate=info.frame_rate if info else None,
            frame_paths=[str(p) for p in frames],
        )

    async def _probe(self, job: ExtractionJob) -> Optional[VideoInfo]:
        try:
            return await self._prober.probe(job.input_path)
        except UnknownFrameCountError as exc:
            if job.profile.needs_frame_count:
                raise
            # the fixed prefix profile only reports the count
            logger.warning("%s; continuing with fixed prefix extraction", exc)
            return None


def list_frames(output_dir: Path) -> list[Path]:
    """Frame files in *output_dir*, ordered by their source frame index."""
    if not output_dir.is_dir():
        return []
    found = []
    for path in output_dir.iterdir():
        match = _FRAME_INDEX.match(path.name)
        if match:
            found.append((int(match.group(1)), path))
    return [path for _, path in sorted(found)]
