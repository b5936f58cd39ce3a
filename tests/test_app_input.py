"""Tests for roadrush.ui.app_game: routing pygame pointer events into the engine."""

import sys
from pathlib import Path

import pygame
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from roadrush.engine.lanes import Track
from roadrush.engine.run import Game
from roadrush.engine.tuning import Tuning
from roadrush.ui.app_game import MOUSE_POINTER, _handle_pointer

TRACK = Track(400, 700)


def _running_game(tuning=None):
    game = Game(TRACK, tuning, seed=1)
    game.start()
    return game


class TestPointerRouting:
    def test_mouse_press_tracks_mouse_pointer(self):
        """A real mouse press starts following with the mouse pointer id."""
        game = _running_game()
        _handle_pointer(game, pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(220, 300), touch=False), 400)
        assert game.inputs.pointer_id == MOUSE_POINTER
        assert game.inputs.follow_target_x == pytest.approx(196)

    def test_emulated_mouse_from_touch_is_ignored(self):
        """Mouse events synthesised from a touch do not register a second pointer."""
        game = _running_game()
        _handle_pointer(game, pygame.event.Event(pygame.FINGERDOWN, finger_id=3, x=0.55, y=0.5), 400)
        _handle_pointer(game, pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(100, 300), touch=True), 400)
        _handle_pointer(game, pygame.event.Event(pygame.MOUSEMOTION, pos=(50, 300), rel=(0, 0), buttons=(1, 0, 0), touch=True), 400)
        assert game.inputs.pointer_id == 4
        assert game.inputs.follow_target_x == pytest.approx(196)
        _handle_pointer(game, pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(50, 300), touch=True), 400)
        assert game.inputs.following

    def test_finger_up_releases(self):
        """Lifting the tracked finger stops following."""
        game = _running_game()
        _handle_pointer(game, pygame.event.Event(pygame.FINGERDOWN, finger_id=0, x=0.5, y=0.5), 400)
        _handle_pointer(game, pygame.event.Event(pygame.FINGERUP, finger_id=0, x=0.5, y=0.5), 400)
        assert not game.inputs.following

    def test_road_margin_from_tuning(self):
        """Pointer targets are clamped with the tuning's road margin."""
        game = _running_game(Tuning(road_margin=30))
        _handle_pointer(game, pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(0, 300), touch=False), 400)
        min_x, _ = TRACK.lanes.player_bounds(game.state.player.w, 30)
        assert game.inputs.follow_target_x == pytest.approx(min_x)

    def test_ignored_before_start(self):
        """Without a run there is nothing to steer."""
        game = Game(TRACK, seed=1)
        _handle_pointer(game, pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(220, 300), touch=False), 400)
        assert not game.inputs.following
