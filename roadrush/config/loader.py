from __future__ import annotations

from typing import Optional

from .defaults import default_settings
from .schema import Settings


def load_settings(
    *,
    width: Optional[int] = None,
    height: Optional[int] = None,
    seed: Optional[int] = None,
    follow: Optional[bool] = None,
    max_speed: Optional[float] = None,
    sims: Optional[int] = None,
    max_frames: Optional[int] = None,
) -> Settings:
    """Load runtime settings, applying any non-None overrides on top of the defaults."""
    settings = default_settings()
    overrides = {
        k: v
        for k, v in (("width", width), ("height", height), ("seed", seed), ("sims", sims), ("max_frames", max_frames))
        if v is not None
    }
    if overrides:
        settings = settings.with_overrides(**overrides)

    tuning = settings.tuning
    if follow is not None:
        tuning = tuning.with_overrides(follow_enabled=follow)
    if max_speed is not None:
        tuning = tuning.with_overrides(max_speed=max_speed)
    if tuning is not settings.tuning:
        settings = settings.with_overrides(tuning=tuning)

    settings.paths.ensure_dirs()
    return settings
