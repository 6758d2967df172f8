"""Port for frame extraction from video files."""
from __future__ import annotations
from pathlib import Path
from typing import Protocol, runtime_checkable

from framesampler.core.value_objects.sampling_plan import SamplingPlan


@runtime_checkable
class FrameExtractionPort(Protocol):
    async def extract(self, input_path: str, output_dir: Path, plan: SamplingPlan) -> None: ...
