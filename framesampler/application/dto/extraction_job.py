"""DTOs describing an extraction run and the profile that plans it."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from framesampler.core.services.sampling_planner import (
    SERVER_MAX_FRAMES,
    fixed_prefix_plan,
    plan_sampling,
)
from framesampler.core.value_objects.sampling_plan import SamplingPlan, SamplingStrategy


@dataclass(frozen=True)
class ExtractionProfile:
    """Which sampling algorithm a deployment uses.

    The server profile takes a fixed prefix of frames and never looks at the
    frame count; the CLI profile samples uniformly by percentage.
    """

    strategy: SamplingStrategy
    percentage: float = 100
    max_frames: Optional[int] = None

    @classmethod
    def server(cls, max_frames: int = SERVER_MAX_FRAMES) -> ExtractionProfile:
        return cls(strategy=SamplingStrategy.PREFIX, max_frames=max_frames)

    @classmethod
    def cli(cls, percentage: float = 100, max_frames: Optional[int] = None) -> ExtractionProfile:
        return cls(strategy=SamplingStrategy.UNIFORM, percentage=percentage, max_frames=max_frames)

    @property
    def needs_frame_count(self) -> bool:
        return self.strategy is SamplingStrategy.UNIFORM

    def build_plan(self, total_frames: Optional[int]) -> SamplingPlan:
        if self.strategy is SamplingStrategy.PREFIX:
            return fixed_prefix_plan(self.max_frames or SERVER_MAX_FRAMES)
        if total_frames is None:
            raise ValueError("Uniform sampling needs the source frame count")
        return plan_sampling(total_frames, self.percentage, self.max_frames)


@dataclass(frozen=True)
class ExtractionJob:
    input_path: str
    output_dir: Path
    profile: ExtractionProfile
