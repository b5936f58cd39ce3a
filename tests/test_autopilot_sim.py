"""Tests for roadrush.simulation: headless autopilot simulation and batch runner."""

import math
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from roadrush.config.schema import Paths, Settings
from roadrush.core.contracts import RunResult
from roadrush.core.results import load_result_json
from roadrush.engine.entities import Obstacle
from roadrush.engine.lanes import Track
from roadrush.engine.run import SimulationState
from roadrush.engine.tuning import Tuning
from roadrush.simulation.runner import run_and_save, run_simulations, summarize
from roadrush.simulation.simulator import lane_clearances, simulate


def _settings(tmp_path, **kw):
    paths = Paths(
        project_dir=tmp_path,
        assets_dir=tmp_path / "assets",
        results_dir=tmp_path / "results",
        simulation_json=tmp_path / "results" / "simulation.json",
    )
    base = dict(paths=paths, width=400, height=700, fps=60, seed=None, tuning=Tuning(),
                sims=3, sim_workers=0, batch_size=2, max_frames=300)
    base.update(kw)
    return Settings(**base)


class TestLaneClearances:
    def test_clear_track(self):
        """No obstacles: every lane is fully clear."""
        state = SimulationState.new(Track(400, 700), Tuning())
        assert lane_clearances(state) == [math.inf] * 3

    def test_obstacle_ahead_blocks_its_lane(self):
        """An obstacle above the player limits the clearance of the lane it overlaps."""
        state = SimulationState.new(Track(400, 700), Tuning())
        layout = state.track.lanes
        state.obstacles.append(Obstacle(lane=0, x=layout.lane_left(0) + 10, y=300, w=40, h=40))
        clearances = lane_clearances(state)
        assert clearances[0] == pytest.approx(state.player.y - 340)
        assert clearances[1:] == [math.inf, math.inf]

    def test_obstacle_behind_ignored(self):
        """Obstacles already below the player do not count."""
        state = SimulationState.new(Track(400, 700), Tuning())
        state.obstacles.append(Obstacle(lane=1, x=180, y=state.player.bottom + 5, w=40, h=40))
        assert lane_clearances(state) == [math.inf] * 3


class TestSimulate:
    def test_simulate_basic(self):
        """A simulation runs, survives some frames and records them."""
        result = simulate(42, max_frames=600)
        assert isinstance(result, RunResult)
        assert result.alive_time > 0
        assert result.seed == 42
        assert result.frames
        assert {"frame", "score", "speed", "x", "obs"} <= result.frames[0].keys()

    def test_simulate_deterministic(self):
        """Same seed = same run."""
        r1 = simulate(123, max_frames=600)
        r2 = simulate(123, max_frames=600)
        assert (r1.alive_time, r1.score, r1.crashed) == (r2.alive_time, r2.score, r2.crashed)
        assert r1.frames == r2.frames

    def test_frame_limit(self):
        """A run that survives stops at max_frames without crashing."""
        result = simulate(5, max_frames=30, record=False)
        assert result.alive_time == 30
        assert result.crashed is False
        assert result.frames == []


class TestRunner:
    def test_summarize(self):
        """Summary statistics are computed over all runs."""
        runs = [RunResult(seed=1, alive_time=100, score=10, crashed=True),
                RunResult(seed=2, alive_time=300, score=30, crashed=False)]
        s = summarize(runs)
        assert s.avg_alive == 200
        assert s.min_alive == 100 and s.max_alive == 300
        assert s.avg_score == 20
        assert s.crash_rate == 0.5

    def test_summarize_empty(self):
        """Summarizing nothing is an error."""
        with pytest.raises(ValueError):
            summarize([])

    def test_run_simulations_in_process(self, tmp_path):
        """Seeds run in the calling process when processes=0."""
        summary = run_simulations(_settings(tmp_path), seeds=[1, 2, 3], processes=0)
        assert [r.seed for r in summary.runs] == [1, 2, 3]
        assert all(0 < r.alive_time <= 300 for r in summary.runs)

    def test_run_and_save(self, tmp_path):
        """Saved summary is versioned and lists every run."""
        settings = _settings(tmp_path)
        run_and_save(settings, seeds=[4, 5], processes=0)
        data = load_result_json(settings.paths.simulation_json)
        assert data["schema_version"] == 1
        assert data["seeds"] == [4, 5]
        assert len(data["alive_times"]) == 2
