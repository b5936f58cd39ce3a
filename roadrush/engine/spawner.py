"""Obstacle spawning: lane-safety checks, motion variants and spawn cadence."""

from __future__ import annotations

import logging
import math
import random

from roadrush.engine.entities import Obstacle, PatrolParams, SineParams
from roadrush.engine.lanes import LaneLayout, Track
from roadrush.engine.tuning import (
    ADJACENT_BLOCK_FACTOR,
    LANE_OBS_WIDTH_JITTER,
    LANE_OBS_WIDTH_RATIO,
    LANE_SIDE_PADDING,
    MIN_VERTICAL_GAP_BASE,
    MIN_VERTICAL_GAP_CAP,
    MIN_VERTICAL_GAP_SPEED_FACTOR,
    OBS_H_JITTER,
    OBS_MIN_H,
    OBS_MIN_W,
    PATROL_SPEED_JITTER,
    PATROL_SPEED_MIN,
    PLAYER_GAP_FACTOR,
    SINE_AMP_JITTER,
    SINE_AMP_LANE_RATIO,
    SINE_AMP_MIN,
    SINE_FREQ_JITTER,
    SINE_FREQ_MIN,
    SPAWN_SCORE_FACTOR,
    SPAWN_SPEED_FACTOR,
    SPAWN_Y,
    SPAWN_Y_PAD,
    Tuning,
)

logger = logging.getLogger(__name__)

DEFAULT_TUNING = Tuning()


def min_vertical_gap(player_h: float, speed: float) -> int:
    """Smallest allowed vertical distance between the spawn point and an obstacle in the same lane."""
    base = max(math.floor(player_h * PLAYER_GAP_FACTOR), MIN_VERTICAL_GAP_BASE)
    return base + min(MIN_VERTICAL_GAP_CAP, math.floor(speed * MIN_VERTICAL_GAP_SPEED_FACTOR))


def spawn_interval(score: int, speed: float, tuning: Tuning = DEFAULT_TUNING) -> float:
    """Nominal ms between spawns; shrinks with score and speed down to a floor."""
    interval = tuning.spawn_interval_base - score * SPAWN_SCORE_FACTOR - math.floor(speed * SPAWN_SPEED_FACTOR)
    return max(tuning.spawn_interval_floor, interval)


def nearest_in_lane(obstacles: list[Obstacle], lane: int, spawn_y: float = SPAWN_Y) -> float | None:
    """Smallest signed distance ``ob.y - spawn_y`` over obstacles in ``lane``."""
    nearest = None
    for ob in obstacles:
        if ob.lane == lane:
            dist = ob.y - spawn_y
            if nearest is None or dist < nearest:
                nearest = dist
    return nearest


def safe_lanes(obstacles: list[Obstacle], lanes: list[int], gap: float) -> list[int]:
    """Filter ``lanes`` (order kept) to those with no obstacle closer than ``gap``."""
    safe = []
    for lane in lanes:
        nearest = nearest_in_lane(obstacles, lane)
        if nearest is None or nearest >= gap:
            safe.append(lane)
    return safe


def create_obstacle_in_lane(
    layout: LaneLayout,
    lane: int,
    w: float,
    h: float,
    rng: random.Random,
    tuning: Tuning = DEFAULT_TUNING,
) -> Obstacle:
    """Build an obstacle above the top edge of ``lane`` with a randomly drawn motion variant."""
    obs_w = min(w, max(OBS_MIN_W, layout.lane_width - LANE_SIDE_PADDING * 2))
    x = layout.lane_left(lane) + (layout.lane_width - obs_w) / 2
    y = -h - SPAWN_Y_PAD - h

    r = rng.random()
    if r < tuning.sine_prob:
        params = SineParams(
            amplitude=min(layout.lane_width * SINE_AMP_LANE_RATIO, SINE_AMP_MIN + rng.random() * SINE_AMP_JITTER),
            phase=rng.random() * math.pi * 2,
            freq=SINE_FREQ_MIN + rng.random() * SINE_FREQ_JITTER,
        )
        return Obstacle(lane=lane, x=x, y=y, w=obs_w, h=h, kind="sine", params=params)
    if r < tuning.sine_prob + tuning.patrol_prob:
        step = -1 if rng.random() < 0.5 else 1
        other = max(0, min(layout.lane_count - 1, lane + step))
        x2 = layout.lane_left(other) + (layout.lane_width - obs_w) / 2
        params = PatrolParams(x1=x, x2=x2, speed=PATROL_SPEED_MIN + rng.random() * PATROL_SPEED_JITTER)
        return Obstacle(lane=lane, x=x, y=y, w=obs_w, h=h, kind="patrol", params=params)
    return Obstacle(lane=lane, x=x, y=y, w=obs_w, h=h)


def _blocks_player(obstacles: list[Obstacle], first: int, cand: int, gap: float) -> bool:
    """True if a third lane already holds an obstacle level with the spawn row."""
    return any(
        ob.lane != first and ob.lane != cand and abs(ob.y - SPAWN_Y) < gap * ADJACENT_BLOCK_FACTOR
        for ob in obstacles
    )


def try_spawn(
    track: Track,
    obstacles: list[Obstacle],
    speed: float,
    player_h: float,
    rng: random.Random,
    tuning: Tuning = DEFAULT_TUNING,
) -> bool:
    """Try to add one (sometimes two) obstacles to ``obstacles`` in place.

    Lanes are inspected in shuffled order. Returns ``False`` when every lane
    still has an obstacle within the minimum vertical gap; the caller is
    expected to retry after a short back-off.
    """
    layout = track.lanes
    h = OBS_MIN_H + rng.random() * OBS_H_JITTER
    base_w = layout.lane_width * (LANE_OBS_WIDTH_RATIO + rng.random() * LANE_OBS_WIDTH_JITTER)
    gap = min_vertical_gap(player_h, speed)

    lanes = list(range(layout.lane_count))
    rng.shuffle(lanes)
    safe = safe_lanes(obstacles, lanes, gap)
    if not safe:
        logger.debug("no safe lane (gap=%s, obstacles=%d)", gap, len(obstacles))
        return False

    first = rng.choice(safe)
    obstacles.append(create_obstacle_in_lane(layout, first, base_w, h, rng, tuning))

    if rng.random() < tuning.second_obs_prob and len(safe) > 1:
        others = [lane for lane in safe if lane != first]
        rng.shuffle(others)
        for cand in others:
            if tuning.avoid_adjacent_second and abs(cand - first) == 1:
                if _blocks_player(obstacles, first, cand, gap):
                    continue
            obstacles.append(create_obstacle_in_lane(layout, cand, base_w, h, rng, tuning))
            break
    return True
