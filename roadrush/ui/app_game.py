#!/usr/bin/env python3
from __future__ import annotations
"""
ROADRUSH: arcade obstacle dodger.
Drag (or hold the mouse) to steer, or use the arrow keys / A D.

Requirements:
    pip install pygame
"""

import sys

import pygame

from roadrush.config.schema import Settings
from roadrush.engine.lanes import Track
from roadrush.engine.run import Game, RunStatus
from roadrush.ui.assets import AssetLoader
from roadrush.ui.render import Renderer

LEFT_KEYS = (pygame.K_LEFT, pygame.K_a)
RIGHT_KEYS = (pygame.K_RIGHT, pygame.K_d)
START_KEYS = (pygame.K_SPACE, pygame.K_RETURN)
MOUSE_POINTER = 0
MOUSE_EVENTS = (pygame.MOUSEBUTTONDOWN, pygame.MOUSEMOTION, pygame.MOUSEBUTTONUP)


def _load_fonts() -> dict:
    try:
        return {
            "score": pygame.font.SysFont("Courier New", 28, bold=True),
            "title": pygame.font.SysFont("Courier New", 48, bold=True),
            "sub": pygame.font.SysFont("Courier New", 17),
        }
    except Exception:
        return {
            "score": pygame.font.SysFont(None, 28),
            "title": pygame.font.SysFont(None, 48),
            "sub": pygame.font.SysFont(None, 17),
        }


def _handle_pointer(game: Game, event, width: int) -> None:
    """Route mouse and touch events into the follow / half-screen input channel."""
    state = game.state
    if state is None:
        return
    layout = state.track.lanes
    follow = game.tuning.follow_enabled
    margin = game.tuning.road_margin
    pw = state.player.w

    # touches also arrive as emulated mouse events; the FINGER events handle them
    if event.type in MOUSE_EVENTS and getattr(event, "touch", False):
        return

    if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        game.inputs.pointer_down(MOUSE_POINTER, event.pos[0], 0.0, width, pw, layout, follow, margin)
    elif event.type == pygame.MOUSEMOTION:
        game.inputs.pointer_move(MOUSE_POINTER, event.pos[0], 0.0, pw, layout, margin)
    elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
        game.inputs.pointer_up(MOUSE_POINTER)
    elif event.type == pygame.FINGERDOWN:
        # finger ids are offset so they never collide with the mouse pointer
        game.inputs.pointer_down(event.finger_id + 1, event.x * width, 0.0, width, pw, layout, follow, margin)
    elif event.type == pygame.FINGERMOTION:
        game.inputs.pointer_move(event.finger_id + 1, event.x * width, 0.0, pw, layout, margin)
    elif event.type == pygame.FINGERUP:
        game.inputs.pointer_up(event.finger_id + 1)


def main(settings: Settings) -> None:
    if not pygame.display.get_init():
        pygame.init()
    try:
        pygame.mixer.init()
    except pygame.error as exc:
        print(f"[play] audio disabled ({exc})")

    width, height = settings.width, settings.height
    try:
        screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
    except pygame.error as exc:
        raise RuntimeError(f"cannot open a {width}x{height} window: {exc}") from exc
    pygame.display.set_caption("ROADRUSH")
    clock = pygame.time.Clock()

    loader = AssetLoader(settings.paths.assets_dir).start()
    renderer = Renderer(screen, _load_fonts())
    game = Game(settings.track, settings.tuning, seed=settings.seed)
    blink = 0

    def start():
        if loader.ready:
            game.audio = loader.assets.audio
        renderer.particles.clear()
        renderer.particles.consume(game.start())

    while True:
        dt = clock.tick(settings.fps)
        blink += 1

        # ── Events ──────────────────────
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.VIDEORESIZE:
                width, height = event.w, event.h
                renderer.screen = pygame.display.get_surface()
                game.resize(Track(width, height, game.track.lane_count))
                continue
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    if game.status is RunStatus.ENDED:
                        game.to_menu()
                        continue
                    pygame.quit(); sys.exit()
                if not game.running and event.key in START_KEYS:
                    start()
                elif event.key in LEFT_KEYS:
                    game.inputs.press("left")
                elif event.key in RIGHT_KEYS:
                    game.inputs.press("right")
            elif event.type == pygame.KEYUP:
                if event.key in LEFT_KEYS:
                    game.inputs.release("left")
                elif event.key in RIGHT_KEYS:
                    game.inputs.release("right")
            elif event.type == pygame.MOUSEBUTTONDOWN and not game.running:
                start()
            else:
                _handle_pointer(game, event, width)

        # ── Update ──────────────────────
        renderer.particles.consume(game.tick(dt))
        renderer.particles.update(dt)

        # ── Draw ────────────────────────
        assets = loader.assets if loader.ready else None
        renderer.draw(game.state, game.track, assets, dt if game.running else 0)

        if game.status is RunStatus.RUNNING:
            renderer.draw_score(game.state.score)
        elif game.status is RunStatus.IDLE:
            hint = "loading assets..." if not loader.ready else "press space or click to start"
            renderer.draw_overlay("ROADRUSH", [hint, "drag to steer, or ← → / A D"], blink)
        else:
            best = "new best!" if game.state.score >= game.best and game.state.score > 0 else f"best: {game.best}"
            renderer.draw_overlay(
                "GAME OVER",
                ["press space or click to retry", f"score: {game.state.score}", best, "esc for menu"],
                blink,
            )

        pygame.display.flip()
