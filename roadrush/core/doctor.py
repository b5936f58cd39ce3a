from __future__ import annotations

import importlib.util
from dataclasses import dataclass

from roadrush.config.schema import Settings


@dataclass(frozen=True)
class Check:
    name: str
    ok: bool
    detail: str


def _has_module(name: str) -> bool:
    return importlib.util.find_spec(name) is not None


def run_doctor(settings: Settings) -> list[Check]:
    checks: list[Check] = []
    checks.append(Check("pygame", _has_module("pygame"), "required for the play window"))
    checks.append(Check("numpy", _has_module("numpy"), "required for simulation summaries"))
    checks.append(Check("track", settings.width > 0 and settings.height > 0, f"{settings.width}x{settings.height}"))

    paths = settings.paths
    checks.append(Check("results_dir", paths.results_dir.exists(), str(paths.results_dir)))
    checks.append(Check("assets_dir", paths.assets_dir.exists(), f"{paths.assets_dir} (optional, fallback visuals used)"))
    return checks
