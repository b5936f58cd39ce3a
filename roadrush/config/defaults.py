"""Default runtime settings for ROADRUSH."""

from __future__ import annotations

from pathlib import Path

from roadrush.engine.tuning import Tuning

from .schema import Paths, Settings

# Directories
PROJECT_DIR = Path(__file__).resolve().parents[2]
ASSETS_DIR = PROJECT_DIR / "assets"
RESULTS_DIR = PROJECT_DIR / "results"

# Window (the browser build capped the canvas at 480x800)
WIDTH, HEIGHT = 400, 700
FPS = 60

# Headless simulation
SIMS = 20
SIM_WORKERS = 2
BATCH_SIZE = 10
MAX_FRAMES = 12_000  # ~3 minutes at 60fps

# Asset files (all optional)
CAR_SHEET = "carSheet.png"
OBSTACLE_SHEET = "obstacleSheet.png"
EXHAUST_IMAGE = "exhaust.png"
MUSIC = "background.mp3"
HIT_SOUND = "hit.wav"


def default_settings() -> Settings:
    paths = Paths(
        project_dir=PROJECT_DIR,
        assets_dir=ASSETS_DIR,
        results_dir=RESULTS_DIR,
        simulation_json=RESULTS_DIR / "simulation.json",
    )
    return Settings(
        paths=paths,
        width=WIDTH,
        height=HEIGHT,
        fps=FPS,
        seed=None,
        tuning=Tuning(),
        sims=SIMS,
        sim_workers=SIM_WORKERS,
        batch_size=BATCH_SIZE,
        max_frames=MAX_FRAMES,
    )
