from __future__ import annotations

"""Parallel simulation runner."""

import multiprocessing
import random
import time
from itertools import islice
from typing import Optional

import numpy as np

from roadrush.config.schema import Settings
from roadrush.core.contracts import RunResult, SimSummary
from roadrush.core.results import save_summary
from roadrush.simulation.simulator import simulate


def _run_seed_batch(args) -> list[RunResult]:
    """Worker function: run one chunk of seeds without keeping replay frames."""
    settings, seeds = args
    return [
        simulate(seed, track=settings.track, tuning=settings.tuning, max_frames=settings.max_frames, record=False)
        for seed in seeds
    ]


def _chunked(items, chunk_size):
    if chunk_size <= 0:
        raise ValueError("chunk_size must be > 0")
    it = iter(items)
    while True:
        chunk = list(islice(it, chunk_size))
        if not chunk:
            return
        yield chunk


def summarize(runs: list[RunResult]) -> SimSummary:
    if not runs:
        raise ValueError("no runs to summarize")
    alive = np.array([r.alive_time for r in runs])
    scores = np.array([r.score for r in runs])
    return SimSummary(
        avg_alive=float(np.mean(alive)),
        std_alive=float(np.std(alive)),
        min_alive=int(np.min(alive)),
        max_alive=int(np.max(alive)),
        avg_score=float(np.mean(scores)),
        std_score=float(np.std(scores)),
        crash_rate=float(np.mean([r.crashed for r in runs])),
        runs=list(runs),
    )


def run_simulations(
    settings: Settings,
    *,
    n_sims: Optional[int] = None,
    seeds: Optional[list[int]] = None,
    processes: Optional[int] = None,
) -> SimSummary:
    """Run repeated autopilot simulations and aggregate survival metrics.

    ``processes=0`` runs everything in the calling process.
    """
    if seeds is None:
        n_sims = n_sims or settings.sims
        seeds = random.sample(range(100_000), n_sims)
    n_sims = len(seeds)
    batch_size = settings.batch_size
    workers = settings.sim_workers if processes is None else processes

    all_runs: list[RunResult] = []
    for batch_idx, batch_seeds in enumerate(_chunked(seeds, batch_size)):
        if workers <= 0:
            all_runs.extend(_run_seed_batch((settings, batch_seeds)))
        else:
            worker_count = min(len(batch_seeds), workers)
            per_worker = max(1, (len(batch_seeds) + worker_count - 1) // worker_count)
            args_list = [(settings, chunk) for chunk in _chunked(batch_seeds, per_worker)]
            with multiprocessing.Pool(processes=worker_count) as pool:
                for worker_runs in pool.map(_run_seed_batch, args_list):
                    all_runs.extend(worker_runs)

        avg_so_far = sum(r.alive_time for r in all_runs) / len(all_runs)
        print(
            f"[simulate] batch {batch_idx + 1} complete "
            f"({len(all_runs)}/{n_sims} sims, running avg: {avg_so_far:.0f} frames)"
        )
    return summarize(all_runs)


def run_and_save(settings: Settings, **kwargs) -> SimSummary:
    start = time.time()
    summary = run_simulations(settings, **kwargs)
    save_summary(
        settings.paths.simulation_json,
        summary,
        track=[settings.width, settings.height],
        max_speed=settings.tuning.max_speed,
    )
    print(f"[simulate] {len(summary.runs)} runs in {time.time() - start:.1f}s")
    print(
        f"[simulate] avg alive = {summary.avg_alive:.0f} frames ({summary.avg_alive / settings.fps:.1f}s), "
        f"avg score = {summary.avg_score:.1f}, crash rate = {summary.crash_rate:.0%}"
    )
    return summary
