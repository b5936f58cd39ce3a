from __future__ import annotations

"""pygame rendering for ROADRUSH: road, cars, particles and HUD."""

import math
import random

import pygame

from roadrush.engine.collision import obstacle_rect
from roadrush.engine.events import Collided, ExhaustEmitted, GameEvent, SkidEmitted
from roadrush.engine.lanes import Track
from roadrush.engine.motion import bob_offset
from roadrush.engine.run import SimulationState
from roadrush.engine.tuning import CRASH_PARTICLES
from roadrush.ui.assets import Assets, SpriteSheet

# Palette
C_BG = (10, 10, 16)
C_ROAD = (34, 40, 49)
C_KERB = (17, 20, 24)
C_STRIPE = (255, 255, 255, 34)
C_SHADOW = (0, 0, 0, 90)
C_WHITE = (255, 255, 255)
C_DIM = (160, 160, 180)
C_PLAYER = (255, 77, 109)
C_OBS = (108, 117, 125)
C_EXHAUST = (120, 120, 120)
C_SKID = (60, 60, 60)
C_CRASH = (220, 80, 80)

PARTICLE_MAX = 120
PARTICLE_LIFETIME = 600
PARTICLE_GRAVITY = 0.0006
SPRITE_ANIM_FPS = 12


# ─────────────────────────────────────────
# Particles
# ─────────────────────────────────────────

class Particle:
    __slots__ = ("x", "y", "vx", "vy", "size", "life", "age", "color")

    def __init__(self, x, y, vx, vy, size, life, color):
        self.x, self.y = x, y
        self.vx, self.vy = vx, vy
        self.size = size
        self.life = life
        self.age = 0.0
        self.color = color

    @property
    def alpha(self) -> float:
        return max(0.0, 1 - self.age / self.life)


class ParticleSystem:
    """Consumes engine events and turns them into short-lived particles."""

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()
        self.particles: list[Particle] = []

    def spawn(self, x, y, vx, vy, size, life, color):
        if len(self.particles) > PARTICLE_MAX:
            return
        self.particles.append(Particle(x, y, vx, vy, size, life, color))

    def consume(self, events: list[GameEvent]) -> None:
        r = self.rng.random
        for ev in events:
            if isinstance(ev, ExhaustEmitted):
                self.spawn(ev.x, ev.y, (r() - 0.5) * 0.03, 0.02, 6 + r() * 6, PARTICLE_LIFETIME, C_EXHAUST)
            elif isinstance(ev, SkidEmitted):
                self.spawn(ev.x, ev.y, (r() - 0.5) * 0.12, -0.02, 4 + r() * 4, 420 + r() * 240, C_SKID)
            elif isinstance(ev, Collided):
                for _ in range(CRASH_PARTICLES):
                    ang = r() * math.pi * 2
                    mag = 0.06 + r() * 0.28
                    self.spawn(ev.x, ev.y, math.cos(ang) * mag, math.sin(ang) * mag,
                               6 + r() * 6, 600 + r() * 600, C_CRASH)

    def update(self, dt: float) -> None:
        alive = []
        for p in self.particles:
            p.vy += PARTICLE_GRAVITY * dt
            p.x += p.vx * dt
            p.y += p.vy * dt
            p.age += dt
            if p.age <= p.life:
                alive.append(p)
        self.particles = alive

    def clear(self) -> None:
        self.particles.clear()

    def draw(self, surf, exhaust_img=None) -> None:
        for p in self.particles:
            alpha = int(p.alpha * 0.9 * 255)
            size = max(2, int(p.size))
            if exhaust_img is not None:
                img = pygame.transform.smoothscale(exhaust_img, (max(6, size), max(6, size)))
                img.set_alpha(alpha)
                surf.blit(img, (p.x - img.get_width() / 2, p.y - img.get_height() / 2))
            else:
                dot = pygame.Surface((size, size), pygame.SRCALPHA)
                pygame.draw.circle(dot, (*p.color, alpha), (size // 2, size // 2), max(1, size // 2))
                surf.blit(dot, (p.x - size / 2, p.y - size / 2))


# ─────────────────────────────────────────
# Drawing helpers
# ─────────────────────────────────────────

def draw_shadow(surf, x, y, w) -> None:
    shadow = pygame.Surface((int(w * 1.04) + 2, 16), pygame.SRCALPHA)
    pygame.draw.ellipse(shadow, C_SHADOW, shadow.get_rect())
    surf.blit(shadow, (x + w / 2 - shadow.get_width() / 2, y - 8))


def draw_road(surf, track: Track, scroll: float) -> None:
    """Road surface, kerbs and the scrolling dashed centre line."""
    layout = track.lanes
    surf.fill(C_BG)
    pygame.draw.rect(surf, C_ROAD, (layout.road_left, 0, layout.road_width, track.height))
    pygame.draw.rect(surf, C_KERB, (layout.road_left - 10, 0, 10, track.height))
    pygame.draw.rect(surf, C_KERB, (layout.road_right, 0, 10, track.height))

    dash = pygame.Surface((6, 30), pygame.SRCALPHA)
    dash.fill(C_STRIPE)
    offset = scroll % 50
    y = -50 + offset
    while y < track.height:
        surf.blit(dash, (track.width / 2 - 3, y))
        y += 50


def _sprite_frame(sheet: SpriteSheet, ticks_ms: int):
    index = int(ticks_ms / (1000 / SPRITE_ANIM_FPS)) % sheet.frames
    return sheet.frame(index)


def draw_player(surf, state: SimulationState, sheet: SpriteSheet | None, ticks_ms: int) -> None:
    p = state.player
    w, h = int(p.w), int(p.h)
    draw_shadow(surf, p.x, p.y + p.h + 6, p.w)

    body = pygame.Surface((w, h), pygame.SRCALPHA)
    if sheet is not None:
        body.blit(pygame.transform.smoothscale(_sprite_frame(sheet, ticks_ms), (w, h)), (0, 0))
    else:
        pygame.draw.rect(body, C_PLAYER, (0, 0, w, h), border_radius=8)
        pygame.draw.rect(body, (255, 255, 255, 102), (w * 0.32, h * 0.26, w * 0.36, h * 0.22))
        rw, rh = max(1, int(w * 0.16)), max(1, int(h * 0.18))
        for wx, wy in ((0, h * 0.25), (w - rw, h * 0.25), (0, h * 0.62), (w - rw, h * 0.62)):
            pygame.draw.rect(body, (17, 17, 17), (wx, wy, rw, rh))

    # pygame rotates counter-clockwise; the tilt angle is clockwise
    rotated = pygame.transform.rotate(body, -state.visual.tilt)
    cx = p.x + p.w / 2
    cy = p.y + p.h / 2 + bob_offset(state.visual)
    surf.blit(rotated, rotated.get_rect(center=(cx, cy)))


def draw_obstacles(surf, state: SimulationState, sheet: SpriteSheet | None, ticks_ms: int) -> None:
    player = state.player
    for ob in state.obstacles:
        rect = obstacle_rect(ob, state.clock_ms)
        draw_shadow(surf, rect.x, rect.y + rect.h + 6, rect.w)
        if sheet is not None:
            img = pygame.transform.smoothscale(_sprite_frame(sheet, ticks_ms), (int(rect.w), int(rect.h)))
            surf.blit(img, (rect.x, rect.y))
            continue
        pygame.draw.rect(surf, C_OBS, (rect.x, rect.y, rect.w, rect.h), border_radius=6)
        # highlight brightens as the obstacle closes in on the player
        pulse = max(0.0, min(1.0, 1 - (ob.y - player.y) / 220))
        band = pygame.Surface((max(1, int(rect.w * 0.76)), max(3, int(rect.h * 0.18))), pygame.SRCALPHA)
        band.fill((255, 255, 255, int((0.06 + pulse * 0.14) * 255)))
        surf.blit(band, (rect.x + rect.w * 0.12, rect.y + rect.h * 0.25))


class Renderer:
    def __init__(self, screen, fonts: dict):
        self.screen = screen
        self.fonts = fonts
        self.particles = ParticleSystem()
        self.scroll = 0.0

    def draw(self, state: SimulationState | None, track: Track, assets: Assets | None, dt: float) -> None:
        ticks = pygame.time.get_ticks()
        if state is not None:
            self.scroll += state.speed * dt * 0.06
        draw_road(self.screen, track, self.scroll)
        if state is None:
            return
        car_sheet = assets.car_sheet if assets else None
        obs_sheet = assets.obstacle_sheet if assets else None
        exhaust = assets.exhaust if assets else None
        draw_obstacles(self.screen, state, obs_sheet, ticks)
        self.particles.draw(self.screen, exhaust)
        draw_player(self.screen, state, car_sheet, ticks)

    def draw_score(self, score: int) -> None:
        sc = self.fonts["score"].render(f"Score: {score}", True, C_WHITE)
        self.screen.blit(sc, (self.screen.get_width() // 2 - sc.get_width() // 2, 16))

    def draw_overlay(self, title: str, lines: list[str], blink: int) -> None:
        w, h = self.screen.get_size()
        dim = pygame.Surface((w, h), pygame.SRCALPHA)
        dim.fill((0, 0, 0, 155))
        self.screen.blit(dim, (0, 0))

        t = self.fonts["title"].render(title, True, C_PLAYER)
        self.screen.blit(t, (w // 2 - t.get_width() // 2, h // 2 - 90))
        for i, line in enumerate(lines):
            if i == 0 and blink % 60 >= 42:
                continue
            s = self.fonts["sub"].render(line, True, C_DIM)
            self.screen.blit(s, (w // 2 - s.get_width() // 2, h // 2 + 10 + i * 30))
