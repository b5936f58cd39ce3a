"""
Run state machine and the per-frame tick.

The whole simulation lives in one ``SimulationState`` value owned by ``Game``.
It is rebuilt on every ``start()``; nothing here touches pygame or any other
UI framework, so the engine can be driven headless by tests and the batch
simulator.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Optional

from roadrush.engine.collision import find_collision, obstacle_rect, player_rect
from roadrush.engine.entities import Obstacle, Player, PlayerVisual
from roadrush.engine.events import (
    AudioHooks,
    Collided,
    ExhaustEmitted,
    GameEvent,
    ObstaclePassed,
    RunEnded,
    RunStarted,
    SkidEmitted,
)
from roadrush.engine.inputs import InputState
from roadrush.engine.lanes import Track
from roadrush.engine.motion import (
    advance_obstacle,
    advance_visuals,
    bob_offset,
    confine_player,
    step_player,
    target_velocity,
)
from roadrush.engine.spawner import spawn_interval, try_spawn
from roadrush.engine.tuning import (
    EXHAUST_JITTER,
    EXHAUST_RATE,
    EXIT_MARGIN,
    SKID_PROB,
    SKID_THRESHOLD,
    Tuning,
)

logger = logging.getLogger(__name__)


class RunStatus(Enum):
    IDLE = auto()
    RUNNING = auto()
    ENDED = auto()


@dataclass
class SimulationState:
    track: Track
    tuning: Tuning
    player: Player
    visual: PlayerVisual = field(default_factory=PlayerVisual)
    obstacles: list[Obstacle] = field(default_factory=list)
    score: int = 0
    speed: float = 0.0
    spawn_timer: float = 0.0
    spawn_interval: float = 0.0
    clock_ms: float = 0.0
    frame: int = 0
    last_exhaust_ms: float = 0.0
    next_id: int = 1

    @classmethod
    def new(cls, track: Track, tuning: Tuning) -> "SimulationState":
        x, y = track.player_origin()
        w, h = track.player_size()
        return cls(
            track=track,
            tuning=tuning,
            player=Player(x=x, y=y, w=w, h=h),
            speed=tuning.start_speed,
            spawn_interval=tuning.start_spawn_interval,
        )

    def assign_ids(self) -> None:
        """Number obstacles that have no id yet, in list order, from this run's counter."""
        for ob in self.obstacles:
            if ob.id == 0:
                ob.id = self.next_id
                self.next_id += 1


class Game:
    """Owns one ``SimulationState`` at a time and drives IDLE -> RUNNING -> ENDED."""

    def __init__(
        self,
        track: Track,
        tuning: Optional[Tuning] = None,
        *,
        seed: Optional[int] = None,
        audio: Optional[AudioHooks] = None,
    ):
        self.tuning = tuning or Tuning()
        self._check_track(track)
        self.track = track
        self.rng = random.Random(seed)
        self.audio = audio or AudioHooks()
        self.inputs = InputState()
        self.status = RunStatus.IDLE
        self.state: Optional[SimulationState] = None
        self.best = 0
        self._fx_rng = random.Random(self.rng.getrandbits(32))

    @property
    def running(self) -> bool:
        return self.status is RunStatus.RUNNING

    def start(self) -> list[GameEvent]:
        """Discard any previous run and begin a fresh one."""
        self.state = SimulationState.new(self.track, self.tuning)
        self.inputs.clear_pointer()
        self.status = RunStatus.RUNNING
        self.audio.on_start()
        logger.debug("run started (track=%sx%s)", self.track.width, self.track.height)
        return [RunStarted()]

    def _check_track(self, track: Track) -> None:
        if track.lane_count != self.tuning.lane_count:
            raise ValueError(
                f"track has {track.lane_count} lanes but tuning expects {self.tuning.lane_count}"
            )

    def to_menu(self) -> None:
        """Leave a finished (or running) run and show the title screen."""
        self.status = RunStatus.IDLE

    def resize(self, track: Track) -> None:
        """Apply a new viewport size; lane geometry follows on the next tick."""
        self._check_track(track)
        self.track = track
        if self.state is not None:
            self.state.track = track

    # ─────────────────────────────────────────
    # Tick
    # ─────────────────────────────────────────

    def tick(self, dt: float) -> list[GameEvent]:
        """Advance the running simulation by ``dt`` milliseconds."""
        if self.status is not RunStatus.RUNNING:
            return []
        st = self.state
        tn = st.tuning
        events: list[GameEvent] = []
        st.clock_ms += dt
        st.frame += 1

        # Difficulty and spawning
        st.speed += dt * tn.speed_growth
        if tn.max_speed is not None:
            st.speed = min(st.speed, tn.max_speed)
        st.spawn_interval = spawn_interval(st.score, st.speed, tn)
        st.spawn_timer += dt
        if st.spawn_timer > st.spawn_interval:
            if try_spawn(st.track, st.obstacles, st.speed, st.player.h, self.rng, tn):
                st.spawn_timer = 0.0
            else:
                st.spawn_timer = st.spawn_interval - tn.spawn_retry_backoff
        st.assign_ids()

        # Player
        player = st.player
        step_player(player, target_velocity(self.inputs, player, st.speed, tn), tn)
        advance_visuals(st.visual, player, dt)
        events.extend(self._emissions(st))
        confine_player(player, st.track.lanes, tn.road_margin)

        # Obstacles: scroll, score, drop off-screen
        for ob in list(st.obstacles):
            advance_obstacle(ob, st.speed, dt)
            if not ob.passed and ob.y > player.bottom:
                ob.passed = True
                st.score += tn.points_per_pass
                events.append(ObstaclePassed(obstacle_id=ob.id, score=st.score))
            if ob.y > st.track.height + EXIT_MARGIN:
                st.obstacles.remove(ob)

        hit = find_collision(player, st.obstacles, st.clock_ms)
        if hit is not None:
            events.extend(self._end(hit))
        return events

    def _emissions(self, st: SimulationState) -> list[GameEvent]:
        player = st.player
        out: list[GameEvent] = []
        if st.clock_ms - st.last_exhaust_ms > EXHAUST_RATE:
            jitter = (self._fx_rng.random() - 0.5) * EXHAUST_JITTER
            out.append(ExhaustEmitted(x=player.x + player.w / 2 + jitter, y=player.bottom + 6))
            st.last_exhaust_ms = st.clock_ms
        if abs(player.vx) > SKID_THRESHOLD and self._fx_rng.random() < SKID_PROB:
            x = player.x + (6 if player.vx > 0 else player.w - 6)
            out.append(SkidEmitted(x=x, y=player.bottom - 6))
        return out

    def _end(self, hit: Obstacle) -> list[GameEvent]:
        st = self.state
        self.status = RunStatus.ENDED
        self.best = max(self.best, st.score)
        self.audio.on_hit()
        logger.debug("collision with obstacle %d at frame %d, score=%d", hit.id, st.frame, st.score)
        p = st.player
        return [
            Collided(obstacle_id=hit.id, x=p.x + p.w / 2, y=p.y + p.h / 2),
            RunEnded(score=st.score),
        ]

    # ─────────────────────────────────────────
    # Snapshot for renderers / replay
    # ─────────────────────────────────────────

    def snapshot(self) -> dict[str, Any]:
        st = self.state
        if st is None:
            return {"status": self.status.name.lower(), "score": 0, "best": self.best}
        return {
            "status": self.status.name.lower(),
            "score": st.score,
            "best": self.best,
            "speed": st.speed,
            "frame": st.frame,
            "player": {
                "rect": tuple(player_rect(st.player)),
                "vx": st.player.vx,
                "tilt": st.visual.tilt,
                "bob": bob_offset(st.visual),
            },
            "obstacles": [
                {"id": ob.id, "lane": ob.lane, "kind": ob.kind, "rect": tuple(obstacle_rect(ob, st.clock_ms))}
                for ob in st.obstacles
            ],
        }
