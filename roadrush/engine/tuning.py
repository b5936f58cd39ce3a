from __future__ import annotations

"""Gameplay constants for ROADRUSH and the per-run ``Tuning`` bundle.

The engine never reads module constants directly; it reads them through a
``Tuning`` instance so tests and the CLI can override individual values.
"""

from dataclasses import dataclass, replace

# ─────────────────────────────────────────
# Track
# ─────────────────────────────────────────
LANE_COUNT = 3
ROAD_WIDTH_RATIO = 0.7
ROAD_MARGIN = 6

# ─────────────────────────────────────────
# Player
# ─────────────────────────────────────────
CAR_MAX_W = 64
CAR_WIDTH_RATIO = 0.12
CAR_MAX_H = 100
CAR_HEIGHT_RATIO = 0.16
CAR_HEIGHT_SCALE = 0.5
CAR_BOTTOM_PAD = 28
CAR_VERTICAL_OFFSET = 60

MOVE_SPEED_BASE = 12
MOVE_SPEED_FACTOR = 2.2
FOLLOW_GAIN = 0.18
FOLLOW_MAX_FACTOR = 1.6
VELOCITY_SMOOTHING = 0.22

CAR_TILT_MAX = 12
CAR_BOB_AMPLITUDE = 3
CAR_BOB_SPEED = 0.006

# ─────────────────────────────────────────
# Obstacles / spawning
# ─────────────────────────────────────────
LANE_OBS_WIDTH_RATIO = 0.46
LANE_OBS_WIDTH_JITTER = 0.12
LANE_SIDE_PADDING = 10
OBS_MIN_W = 12
OBS_MIN_H = 28
OBS_H_JITTER = 48
SPAWN_Y = -10
SPAWN_Y_PAD = 8

MIN_VERTICAL_GAP_BASE = 160
MIN_VERTICAL_GAP_SPEED_FACTOR = 9
MIN_VERTICAL_GAP_CAP = 200
PLAYER_GAP_FACTOR = 1.2

SECOND_OBS_PROB = 0.14
AVOID_ADJACENT_SECOND = True
ADJACENT_BLOCK_FACTOR = 0.9
SPAWN_RETRY_BACKOFF = 220

SINE_PROB = 0.18
PATROL_PROB = 0.16
SINE_AMP_LANE_RATIO = 0.28
SINE_AMP_MIN = 24
SINE_AMP_JITTER = 28
SINE_FREQ_MIN = 0.0015
SINE_FREQ_JITTER = 0.0025
PATROL_SPEED_MIN = 0.03
PATROL_SPEED_JITTER = 0.06

SCROLL_TIME_FACTOR = 0.0015
EXIT_MARGIN = 240
POINTS_PER_PASS = 10

# ─────────────────────────────────────────
# Difficulty curve
# ─────────────────────────────────────────
START_SPEED = 2.2
SPEED_GROWTH = 0.00005       # per ms
START_SPAWN_INTERVAL = 1000
SPAWN_INTERVAL_BASE = 1100
SPAWN_INTERVAL_FLOOR = 520
SPAWN_SCORE_FACTOR = 4
SPAWN_SPEED_FACTOR = 18

# ─────────────────────────────────────────
# Renderer notifications
# ─────────────────────────────────────────
EXHAUST_RATE = 60            # ms between exhaust puffs
EXHAUST_JITTER = 6
SKID_THRESHOLD = 14
SKID_PROB = 0.22
CRASH_PARTICLES = 28


@dataclass(frozen=True)
class Tuning:
    lane_count: int = LANE_COUNT
    road_margin: float = ROAD_MARGIN

    start_speed: float = START_SPEED
    speed_growth: float = SPEED_GROWTH
    max_speed: float | None = None

    move_speed_base: float = MOVE_SPEED_BASE
    move_speed_factor: float = MOVE_SPEED_FACTOR
    follow_enabled: bool = True
    follow_gain: float = FOLLOW_GAIN
    follow_max_factor: float = FOLLOW_MAX_FACTOR
    velocity_smoothing: float = VELOCITY_SMOOTHING

    second_obs_prob: float = SECOND_OBS_PROB
    avoid_adjacent_second: bool = AVOID_ADJACENT_SECOND
    sine_prob: float = SINE_PROB
    patrol_prob: float = PATROL_PROB

    start_spawn_interval: float = START_SPAWN_INTERVAL
    spawn_interval_base: float = SPAWN_INTERVAL_BASE
    spawn_interval_floor: float = SPAWN_INTERVAL_FLOOR
    spawn_retry_backoff: float = SPAWN_RETRY_BACKOFF

    points_per_pass: int = POINTS_PER_PASS

    def with_overrides(self, **kwargs) -> "Tuning":
        return replace(self, **kwargs)
