"""
Dependency container.
Wires together ports and adapters based on configuration.
"""
from __future__ import annotations

import logging
from typing import Optional

from framesampler.infrastructure.config import Settings

logger = logging.getLogger(__name__)

EXTRACT_TASK = "extract_frames"


class ApplicationContainer:
    """Simplified container that builds concrete instances from settings.

    Usage::

        container = ApplicationContainer(settings)
        service = container.extraction_service()
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self._cache: dict[str, object] = {}

    def _get_or_create(self, key: str, factory):
        if key not in self._cache:
            self._cache[key] = factory(self.settings)
        return self._cache[key]

    def override(self, key: str, instance: object) -> None:
        """Replace a cached component, e.g. with a test double."""
        self._cache[key] = instance

    # ── Lazy factory helpers ──────────────────────────────────────

    @staticmethod
    def _build_prober(settings: Settings):
        from framesampler.adapters.outbound.ffmpeg.ffprobe_prober import FFprobeVideoProber
        return FFprobeVideoProber(
            ffprobe_path=settings.ffmpeg.ffprobe_path,
            timeout=settings.ffmpeg.probe_timeout_seconds,
        )

    @staticmethod
    def _build_frame_extractor(settings: Settings):
        from framesampler.adapters.outbound.ffmpeg.ffmpeg_frame_extractor import FFmpegFrameExtractor
        return FFmpegFrameExtractor(
            ffmpeg_path=settings.ffmpeg.ffmpeg_path,
            timeout=settings.ffmpeg.extract_timeout_seconds,
        )

    @staticmethod
    def _build_file_storage(settings: Settings):
        from framesampler.adapters.outbound.persistence.local_file_storage import LocalFileStorage
        return LocalFileStorage(settings.upload.upload_dir)

    @staticmethod
    def _build_task_queue(settings: Settings):
        from framesampler.adapters.outbound.queue.in_process_queue import InProcessTaskQueue
        return InProcessTaskQueue(max_finished_jobs=settings.extraction.job_history_size)

    # ── Public accessors ──────────────────────────────────────────

    def prober(self):
        return self._get_or_create("prober", self._build_prober)

    def frame_extractor(self):
        return self._get_or_create("frame_extractor", self._build_frame_extractor)

    def file_storage(self):
        return self._get_or_create("file_storage", self._build_file_storage)

    def extraction_service(self):
        if "extraction_service" not in self._cache:
            from framesampler.application.extraction_service import FrameExtractionService
            self._cache["extraction_service"] = FrameExtractionService(
                prober=self.prober(),
                extractor=self.frame_extractor(),
            )
        return self._cache["extraction_service"]

    def task_queue(self):
        if "task_queue" not in self._cache:
            queue = self._build_task_queue(self.settings)
            queue.register(EXTRACT_TASK, self._run_extraction)
            self._cache["task_queue"] = queue
            logger.debug("Task queue ready with '%s' registered", EXTRACT_TASK)
        return self._cache["task_queue"]

    async def _run_extraction(self, job):
        return await self.extraction_service().run(job)
