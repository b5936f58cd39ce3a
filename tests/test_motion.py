"""Tests for roadrush.engine.motion: velocity control and obstacle motion."""

import math
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from roadrush.engine.entities import Obstacle, PatrolParams, Player, PlayerVisual, SineParams
from roadrush.engine.inputs import InputState
from roadrush.engine.lanes import lane_layout
from roadrush.engine.motion import (
    advance_obstacle,
    advance_visuals,
    confine_player,
    follow_velocity,
    move_speed,
    obstacle_x,
    step_player,
    target_velocity,
    tilt_for,
)
from roadrush.engine.tuning import Tuning


def _player(x=176.0):
    return Player(x=x, y=562, w=48, h=50)


class TestTargetVelocity:
    def test_move_speed_scales_with_speed(self):
        """Key speed is 12 + round(speed * 2.2)."""
        assert move_speed(2.2) == 17
        assert move_speed(0) == 12
        assert move_speed(10) == 34

    def test_no_input_is_zero(self):
        """Without input the target velocity is zero."""
        assert target_velocity(InputState(), _player(), 2.2) == 0

    def test_keys(self):
        """Left and right give -/+ move speed; both cancel out."""
        assert target_velocity(InputState(left=True), _player(), 2.2) == -17
        assert target_velocity(InputState(right=True), _player(), 2.2) == 17
        assert target_velocity(InputState(left=True, right=True), _player(), 2.2) == 0

    def test_follow_is_proportional(self):
        """Follow mode asks for k * distance to the target."""
        inputs = InputState(follow_target_x=226.0, pointer_id=1)
        assert target_velocity(inputs, _player(176), 2.2) == pytest.approx(0.18 * 50)

    def test_follow_is_clamped(self):
        """Far targets are limited to move_speed * 1.6 in either direction."""
        assert follow_velocity(1000, 0, 2.2) == pytest.approx(17 * 1.6)
        assert follow_velocity(-1000, 0, 2.2) == pytest.approx(-17 * 1.6)

    def test_follow_overrides_keys(self):
        """While a pointer is tracked the key flags do not contribute."""
        inputs = InputState(left=True, follow_target_x=226.0, pointer_id=1)
        assert target_velocity(inputs, _player(176), 2.2) == pytest.approx(9.0)

    def test_half_screen_touch_when_follow_disabled(self):
        """With follow disabled, a held screen half acts as a direction key."""
        tuning = Tuning(follow_enabled=False)
        assert target_velocity(InputState(touch_side="right"), _player(), 2.2, tuning) == 17
        assert target_velocity(InputState(touch_side="left", left=True), _player(), 2.2, tuning) == -34


class TestPlayerIntegration:
    def test_velocity_eases_toward_target(self):
        """One frame moves velocity 22% of the way to the target, then integrates x."""
        p = _player(100)
        step_player(p, 17)
        assert p.vx == pytest.approx(17 * 0.22)
        assert p.x == pytest.approx(100 + 17 * 0.22)

    def test_velocity_decays_without_input(self):
        """Velocity decays geometrically toward zero."""
        p = _player(176)
        p.vx = 10
        for _ in range(200):
            step_player(p, 0)
        assert abs(p.vx) < 1e-9

    def test_confine_left_wall(self):
        """Passing the left wall clamps x and zeroes velocity."""
        layout = lane_layout(400)
        p = _player(10)
        p.vx = -5
        assert confine_player(p, layout, 6) is True
        assert p.x == pytest.approx(66)
        assert p.vx == 0

    def test_confine_right_wall(self):
        """Passing the right wall clamps the right edge 6px inside the road."""
        layout = lane_layout(400)
        p = _player(390)
        p.vx = 5
        assert confine_player(p, layout, 6) is True
        assert p.x + p.w == pytest.approx(340 - 6)
        assert p.vx == 0

    def test_confine_inside_is_noop(self):
        """Inside the road nothing changes."""
        p = _player(176)
        p.vx = 3
        assert confine_player(p, lane_layout(400), 6) is False
        assert (p.x, p.vx) == (176, 3)


class TestObstacleMotion:
    def test_static_scrolls_down(self):
        """Static obstacles only move down, by speed * (1 + dt*0.0015)."""
        ob = Obstacle(lane=0, x=70, y=0, w=40, h=40)
        advance_obstacle(ob, 2.0, 16)
        assert ob.y == pytest.approx(2.0 * (1 + 16 * 0.0015))
        assert obstacle_x(ob, 12345) == 70

    def test_sine_offset_is_function_of_clock(self):
        """Sine offset is amplitude * sin(clock*freq + phase) around the anchor."""
        params = SineParams(amplitude=20, phase=0.5, freq=0.002)
        ob = Obstacle(lane=1, x=100, y=0, w=40, h=40, kind="sine", params=params)
        for clock in (0, 250, 1000, 7777):
            assert obstacle_x(ob, clock) == pytest.approx(100 + 20 * math.sin(clock * 0.002 + 0.5))
        # scrolling does not change the lateral offset
        before = obstacle_x(ob, 500)
        advance_obstacle(ob, 3, 16)
        assert obstacle_x(ob, 500) == before

    def test_patrol_accumulates_phase(self):
        """Patrol phase grows by speed * dt each tick."""
        ob = Obstacle(lane=0, x=70, y=0, w=40, h=40, kind="patrol", params=PatrolParams(x1=70, x2=163, speed=0.05))
        advance_obstacle(ob, 2.2, 20)
        advance_obstacle(ob, 2.2, 20)
        assert ob.t == pytest.approx(2.0)

    def test_patrol_stays_between_anchors(self):
        """A patrol obstacle never leaves [min(x1,x2), max(x1,x2)]."""
        for x1, x2 in ((70, 163), (250, 157)):
            ob = Obstacle(lane=0, x=x1, y=0, w=40, h=40, kind="patrol", params=PatrolParams(x1=x1, x2=x2, speed=0.07))
            seen = []
            for _ in range(2000):
                advance_obstacle(ob, 2.2, 16.7)
                x = obstacle_x(ob, 0)
                assert min(x1, x2) - 1e-9 <= x <= max(x1, x2) + 1e-9
                seen.append(x)
            # it actually visits both ends
            assert min(seen) == pytest.approx(min(x1, x2), abs=0.5)
            assert max(seen) == pytest.approx(max(x1, x2), abs=0.5)


class TestVisuals:
    def test_tilt_from_velocity(self):
        """Tilt leans against the direction of travel, 12 degrees at vx=20."""
        assert tilt_for(20) == pytest.approx(-12)
        assert tilt_for(0) == 0

    def test_visuals_do_not_touch_physics(self):
        """Advancing visuals only changes tilt and bob phase."""
        p = _player(176)
        p.vx = 5
        visual = PlayerVisual()
        advance_visuals(visual, p, 100)
        assert visual.bob_phase == pytest.approx(0.6)
        assert visual.tilt == pytest.approx(-3)
        assert (p.x, p.vx) == (176, 5)
