"""
Fire-and-forget notifications produced by a tick, plus best-effort audio.

NO UI DEPENDENCIES. Renderers consume the events to spawn particles; the
engine never waits on them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameEvent:
    """Something that happened during a tick (for the UI to react to)."""


@dataclass(frozen=True)
class RunStarted(GameEvent):
    pass


@dataclass(frozen=True)
class ExhaustEmitted(GameEvent):
    x: float
    y: float


@dataclass(frozen=True)
class SkidEmitted(GameEvent):
    x: float
    y: float


@dataclass(frozen=True)
class ObstaclePassed(GameEvent):
    obstacle_id: int
    score: int


@dataclass(frozen=True)
class Collided(GameEvent):
    """The player hit an obstacle; (x, y) is the centre of the player."""

    obstacle_id: int
    x: float
    y: float


@dataclass(frozen=True)
class RunEnded(GameEvent):
    score: int


class SoundHandle(Protocol):
    def play(self, *args: Any, **kwargs: Any) -> Any: ...
    def stop(self) -> Any: ...


class AudioHooks:
    """Optional music / hit sound. Missing handles and audio errors are ignored."""

    def __init__(self, music: Optional[SoundHandle] = None, hit: Optional[SoundHandle] = None):
        self.music = music
        self.hit = hit

    def _call(self, handle: Optional[SoundHandle], method: str, **kwargs) -> None:
        if handle is None:
            return
        try:
            getattr(handle, method)(**kwargs)
        except Exception as exc:
            logger.debug("audio %s failed: %s", method, exc)

    def on_start(self) -> None:
        self._call(self.music, "play", loops=-1)

    def on_hit(self) -> None:
        self._call(self.hit, "stop")
        self._call(self.hit, "play")
        self._call(self.music, "stop")
