"""
Frame sampling planning - pure domain logic.
Turns a frame count plus percentage/cap controls into a SamplingPlan.
"""
from __future__ import annotations

import math
from typing import Optional

from framesampler.core.value_objects.sampling_plan import SamplingPlan, SamplingStrategy

SERVER_MAX_FRAMES = 200


def _round_half_up(value: float) -> int:
    # round() would send 2.5 to 2; sampling rounds halves upwards
    return int(math.floor(value + 0.5))


def frame_interval_for(percentage: float) -> int:
    """Stride between kept frames for a sampling percentage in (0, 100]."""
    return max(1, _round_half_up(100 / percentage))


def plan_sampling(
    total_frames: int,
    percentage: float = 100,
    max_frames_cap: Optional[int] = None,
) -> SamplingPlan:
    """Uniform modulo sampling plan.

    The percentage range is not validated here; callers own that check.
    """
    interval = frame_interval_for(percentage)
    uncapped = math.ceil(total_frames / interval)
    effective = min(max_frames_cap, uncapped) if max_frames_cap else uncapped
    return SamplingPlan(
        strategy=SamplingStrategy.UNIFORM,
        frame_interval=interval,
        effective_max_frames=effective,
    )


def fixed_prefix_plan(max_frames: int = SERVER_MAX_FRAMES) -> SamplingPlan:
    """Take the first *max_frames* frames, ignoring the source frame count."""
    return SamplingPlan(
        strategy=SamplingStrategy.PREFIX,
        frame_interval=1,
        effective_max_frames=max_frames,
    )
