"""Axis-aligned collision between the player and moving obstacles."""

from __future__ import annotations

from typing import Iterable, NamedTuple, Optional

from roadrush.engine.entities import Obstacle, Player
from roadrush.engine.motion import obstacle_x


class Rect(NamedTuple):
    x: float
    y: float
    w: float
    h: float


def rects_intersect(a: Rect, b: Rect) -> bool:
    """Overlap test with inclusive edges: touching rectangles collide."""
    return not (a.x + a.w < b.x or a.x > b.x + b.w or a.y + a.h < b.y or a.y > b.y + b.h)


def player_rect(player: Player) -> Rect:
    return Rect(player.x, player.y, player.w, player.h)


def obstacle_rect(ob: Obstacle, clock_ms: float) -> Rect:
    return Rect(obstacle_x(ob, clock_ms), ob.y, ob.w, ob.h)


def find_collision(player: Player, obstacles: Iterable[Obstacle], clock_ms: float) -> Optional[Obstacle]:
    """Return the first obstacle (collection order) touching the player, or None."""
    pr = player_rect(player)
    for ob in obstacles:
        if rects_intersect(pr, obstacle_rect(ob, clock_ms)):
            return ob
    return None
