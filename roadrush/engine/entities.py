from __future__ import annotations

"""Game objects. Physical state only; presentation fields live in PlayerVisual."""

from dataclasses import dataclass
from typing import Literal, Union

MotionKind = Literal["static", "sine", "patrol"]


@dataclass
class Player:
    x: float
    y: float
    w: float
    h: float
    vx: float = 0.0

    @property
    def bottom(self) -> float:
        return self.y + self.h


@dataclass
class PlayerVisual:
    """Renderer-only state derived from the physical player each tick."""

    tilt: float = 0.0
    bob_phase: float = 0.0


@dataclass(frozen=True)
class SineParams:
    amplitude: float
    phase: float
    freq: float      # radians per ms


@dataclass(frozen=True)
class PatrolParams:
    x1: float
    x2: float
    speed: float     # phase units per ms


MotionParams = Union[SineParams, PatrolParams, None]


@dataclass
class Obstacle:
    lane: int
    x: float
    y: float
    w: float
    h: float
    kind: MotionKind = "static"
    params: MotionParams = None
    passed: bool = False
    t: float = 0.0   # patrol phase accumulator
    id: int = 0      # 0 until the owning run assigns one
