from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class RunResult:
    seed: Optional[int]
    alive_time: int
    score: int
    crashed: bool
    frames: list[dict[str, Any]] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        return {
            "seed": self.seed,
            "alive_time": self.alive_time,
            "score": self.score,
            "crashed": self.crashed,
            "frames": self.frames,
        }


@dataclass(frozen=True)
class SimSummary:
    avg_alive: float
    std_alive: float
    min_alive: int
    max_alive: int
    avg_score: float
    std_score: float
    crash_rate: float
    runs: list[RunResult] = field(default_factory=list)
