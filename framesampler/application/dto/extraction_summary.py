"""DTO for a finished extraction run."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ExtractionSummary:
    input_path: str
    output_dir: str
    strategy: str
    frame_interval: int
    effective_max_frames: int
    total_frames: Optional[int] = None
    frame_rate: Optional[float] = None
    frame_paths: list[str] = field(default_factory=list)

    @property
    def frame_count(self) -> int:
        return len(self.frame_paths)

    def to_dict(self) -> dict:
        return {
            "input_path": self.input_path,
            "output_dir": self.output_dir,
            "strategy": self.strategy,
            "frame_interval": self.frame_interval,
            "effective_max_frames": self.effective_max_frames,
            "total_frames": self.total_frames,
            "frame_rate": self.frame_rate,
            "frame_count": self.frame_count,
            "frame_paths": self.frame_paths,
        }
