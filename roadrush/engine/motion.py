"""Player velocity control and obstacle motion."""

from __future__ import annotations

import math

from roadrush.engine.entities import Obstacle, Player, PlayerVisual
from roadrush.engine.inputs import InputState
from roadrush.engine.lanes import LaneLayout
from roadrush.engine.tuning import (
    CAR_BOB_AMPLITUDE,
    CAR_BOB_SPEED,
    CAR_TILT_MAX,
    MOVE_SPEED_BASE,
    SCROLL_TIME_FACTOR,
    Tuning,
)

DEFAULT_TUNING = Tuning()


def move_speed(speed: float, tuning: Tuning = DEFAULT_TUNING) -> float:
    """Key-driven lateral speed, growing with the scroll speed (rounded half up)."""
    return tuning.move_speed_base + math.floor(speed * tuning.move_speed_factor + 0.5)


def follow_velocity(target_x: float, x: float, speed: float, tuning: Tuning = DEFAULT_TUNING) -> float:
    """Proportional controller toward ``target_x``, clamped to +/- move_speed * 1.6."""
    limit = move_speed(speed, tuning) * tuning.follow_max_factor
    derived = (target_x - x) * tuning.follow_gain
    return max(-limit, min(limit, derived))


def target_velocity(inputs: InputState, player: Player, speed: float, tuning: Tuning = DEFAULT_TUNING) -> float:
    ms = move_speed(speed, tuning)
    target = 0.0
    if inputs.left:
        target -= ms
    if inputs.right:
        target += ms

    if not tuning.follow_enabled:
        if inputs.touch_side == "left":
            target -= ms
        elif inputs.touch_side == "right":
            target += ms
    elif inputs.following:
        # follow mode replaces the key contribution entirely
        target = follow_velocity(inputs.follow_target_x, player.x, speed, tuning)
    return target


def step_player(player: Player, target_vx: float, tuning: Tuning = DEFAULT_TUNING) -> None:
    """Ease velocity toward ``target_vx`` then integrate position (one frame)."""
    player.vx += (target_vx - player.vx) * tuning.velocity_smoothing
    player.x += player.vx


def confine_player(player: Player, layout: LaneLayout, margin: float) -> bool:
    """Clamp the player onto the road; velocity is zeroed on contact. Returns True if clamped."""
    min_x, max_x = layout.player_bounds(player.w, margin)
    clamped = False
    if player.x < min_x:
        player.x = min_x
        player.vx = 0.0
        clamped = True
    if player.x > max_x:
        player.x = max_x
        player.vx = 0.0
        clamped = True
    return clamped


def obstacle_x(ob: Obstacle, clock_ms: float) -> float:
    """Instantaneous left edge of an obstacle, shared by collision and rendering."""
    if ob.kind == "sine":
        p = ob.params
        return ob.x + math.sin(clock_ms * p.freq + p.phase) * p.amplitude
    if ob.kind == "patrol":
        p = ob.params
        progress = (math.sin(ob.t) + 1) / 2
        return p.x1 + (p.x2 - p.x1) * progress
    return ob.x


def advance_obstacle(ob: Obstacle, speed: float, dt: float) -> None:
    ob.y += speed * (1 + dt * SCROLL_TIME_FACTOR)
    if ob.kind == "patrol":
        ob.t += ob.params.speed * dt


def tilt_for(vx: float) -> float:
    return (-vx / (MOVE_SPEED_BASE + 8)) * CAR_TILT_MAX


def advance_visuals(visual: PlayerVisual, player: Player, dt: float) -> None:
    visual.tilt = tilt_for(player.vx)
    visual.bob_phase += CAR_BOB_SPEED * dt


def bob_offset(visual: PlayerVisual) -> float:
    return math.sin(visual.bob_phase) * CAR_BOB_AMPLITUDE
