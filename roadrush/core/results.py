from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from roadrush.core.contracts import SimSummary

SCHEMA_VERSION = 1


def save_result_json(path: Path, payload: dict[str, Any]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = {"schema_version": SCHEMA_VERSION, **payload}
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
    return path


def load_result_json(path: Path) -> dict[str, Any]:
    with open(path, "r") as f:
        data = json.load(f)
    if isinstance(data, dict) and "schema_version" not in data:
        data = {"schema_version": 0, **data}
    return data


def summary_payload(summary: SimSummary) -> dict[str, Any]:
    """Flatten a summary for JSON; per-run frames are dropped to keep files small."""
    return {
        "avg_alive": summary.avg_alive,
        "std_alive": summary.std_alive,
        "min_alive": summary.min_alive,
        "max_alive": summary.max_alive,
        "avg_score": summary.avg_score,
        "std_score": summary.std_score,
        "crash_rate": summary.crash_rate,
        "seeds": [r.seed for r in summary.runs],
        "alive_times": [r.alive_time for r in summary.runs],
        "scores": [r.score for r in summary.runs],
    }


def save_summary(path: Path, summary: SimSummary, **extra: Any) -> Path:
    return save_result_json(path, {**extra, **summary_payload(summary)})
