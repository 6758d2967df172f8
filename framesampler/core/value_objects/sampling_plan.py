"""SamplingPlan value object describing which frames to emit."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SamplingStrategy(str, Enum):
    """How the decoder selects frames.

    ``UNIFORM`` keeps every Nth frame through a modulo select filter.
    ``PREFIX`` keeps the first N frames of the stream.
    """

    UNIFORM = "uniform"
    PREFIX = "prefix"


@dataclass(frozen=True)
class SamplingPlan:
    """Immutable frame interval plus upper bound on emitted frames.

    ``effective_max_frames == 0`` means no cap is known (empty source), in
    which case the decoder is not given ``-vframes``.
    """

    strategy: SamplingStrategy
    frame_interval: int
    effective_max_frames: int

    def __post_init__(self) -> None:
        if self.frame_interval < 1:
            raise ValueError(f"frame_interval must be >= 1, got {self.frame_interval}")
        if self.effective_max_frames < 0:
            raise ValueError(
                f"effective_max_frames must be >= 0, got {self.effective_max_frames}"
            )
        if self.strategy is SamplingStrategy.PREFIX:
            if self.frame_interval != 1:
                raise ValueError("PREFIX sampling always uses frame_interval 1")
            if self.effective_max_frames < 1:
                raise ValueError("PREFIX sampling requires a positive frame cap")

    @property
    def has_cap(self) -> bool:
        return self.effective_max_frames > 0
