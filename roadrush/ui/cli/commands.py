from __future__ import annotations

import random

from roadrush.config.loader import load_settings
from roadrush.core.doctor import run_doctor
from roadrush.core.results import load_result_json


def cmd_play(args):
    from roadrush.ui import app_game

    settings = load_settings(
        width=args.width,
        height=args.height,
        seed=args.seed,
        follow=False if args.keys else None,
        max_speed=args.max_speed,
    )
    try:
        app_game.main(settings)
    except RuntimeError as exc:
        print(f"[play] {exc}")
        return 1
    return 0


def cmd_simulate(args):
    from roadrush.simulation.runner import run_and_save

    settings = load_settings(seed=args.seed, max_speed=args.max_speed, sims=args.sims, max_frames=args.max_frames)
    seeds = None
    if settings.seed is not None:
        rng = random.Random(settings.seed)
        seeds = rng.sample(range(100_000), settings.sims)
    run_and_save(settings, seeds=seeds, processes=args.workers)
    return 0


def cmd_report(args):
    settings = load_settings()
    path = settings.paths.simulation_json
    if not path.exists():
        print(f"[report] Missing simulation results: {path}")
        return 1
    data = load_result_json(path)
    print(f"\nSIMULATION ({path})")
    print(f"  schema_version: {data.get('schema_version', 'n/a')}")
    print(f"  runs: {len(data.get('alive_times', []))}")
    for key in ("avg_alive", "std_alive", "min_alive", "max_alive", "avg_score", "std_score", "crash_rate"):
        if key in data:
            print(f"  {key}: {data[key]}")
    return 0


def cmd_doctor(args):
    settings = load_settings()
    checks = run_doctor(settings)
    ok_count = 0
    for chk in checks:
        mark = "OK" if chk.ok else "FAIL"
        print(f"[{mark}] {chk.name}: {chk.detail}")
        ok_count += int(chk.ok)
    print(f"\n{ok_count}/{len(checks)} checks passing")
    return 0
