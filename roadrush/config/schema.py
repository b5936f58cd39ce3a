from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from roadrush.engine.lanes import Track
from roadrush.engine.tuning import Tuning


@dataclass(frozen=True)
class Paths:
    project_dir: Path
    assets_dir: Path
    results_dir: Path

    simulation_json: Path

    def ensure_dirs(self) -> None:
        self.results_dir.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class Settings:
    paths: Paths

    width: int
    height: int
    fps: int
    seed: Optional[int]
    tuning: Tuning

    sims: int
    sim_workers: int
    batch_size: int
    max_frames: int

    def with_overrides(self, **kwargs) -> "Settings":
        return replace(self, **kwargs)

    @property
    def track(self) -> Track:
        return Track(width=self.width, height=self.height, lane_count=self.tuning.lane_count)
