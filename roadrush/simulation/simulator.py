"""Headless game simulator: drives the engine with an autopilot and records replay data."""

from __future__ import annotations

import math
from typing import Any, Optional

from roadrush.core.contracts import RunResult
from roadrush.engine.collision import obstacle_rect
from roadrush.engine.lanes import Track
from roadrush.engine.run import Game, SimulationState
from roadrush.engine.tuning import Tuning

FRAME_MS = 1000 / 60
DECISION_INTERVAL = 8    # frames between autopilot decisions (~7.5 per second)
RECORD_EVERY = 2         # record every other frame for replay
AUTOPILOT_POINTER = 0


def lane_clearances(state: SimulationState) -> list[float]:
    """Vertical free space ahead of the player in each lane (``inf`` when clear).

    An obstacle counts against every lane its current rectangle overlaps, so
    sine and patrol obstacles block the lanes they drift into.
    """
    layout = state.track.lanes
    player = state.player
    clearances = [math.inf] * layout.lane_count
    for ob in state.obstacles:
        rect = obstacle_rect(ob, state.clock_ms)
        if rect.y > player.bottom:
            continue
        dist = max(0.0, player.y - (rect.y + rect.h))
        for lane in range(layout.lane_count):
            left = layout.lane_left(lane)
            if rect.x < left + layout.lane_width and rect.x + rect.w > left:
                clearances[lane] = min(clearances[lane], dist)
    return clearances


class Autopilot:
    """Picks the lane with the most clearance and steers there through the follow channel.

    A lane switch must be chosen ``min_hold`` decisions in a row before it is
    applied, unless the current lane is about to be hit.
    """

    def __init__(self, min_hold: int = 2, emergency: float = 60.0):
        self.min_hold = min_hold
        self.emergency = emergency
        self.current_lane: Optional[int] = None
        self.hold_counter = 0

    def choose(self, state: SimulationState) -> int:
        clearances = lane_clearances(state)
        layout = state.track.lanes
        player_cx = state.player.x + state.player.w / 2
        here = min(range(layout.lane_count), key=lambda i: abs(layout.centers[i] - player_cx))
        if self.current_lane is None:
            self.current_lane = here

        # prefer nearby lanes on ties so the car does not sweep across the road
        best = max(range(layout.lane_count), key=lambda i: (clearances[i], -abs(i - here)))
        if clearances[self.current_lane] < self.emergency or best == self.current_lane:
            self.current_lane = best
            self.hold_counter = 0
            return best

        self.hold_counter += 1
        if self.hold_counter >= self.min_hold:
            self.current_lane = best
            self.hold_counter = 0
        return self.current_lane

    def steer(self, game: Game) -> None:
        state = game.state
        lane = self.choose(state)
        layout = state.track.lanes
        game.inputs.pointer_down(
            AUTOPILOT_POINTER,
            client_x=layout.centers[lane],
            canvas_left=0.0,
            canvas_width=state.track.width,
            player_w=state.player.w,
            layout=layout,
            follow_enabled=True,
            margin=game.tuning.road_margin,
        )


def encode(state: SimulationState) -> dict[str, Any]:
    """Compact per-frame record for replay files."""
    return {
        "frame": state.frame,
        "score": state.score,
        "speed": round(state.speed, 4),
        "x": round(state.player.x, 2),
        "obs": [[ob.lane, ob.kind, round(ob.y / state.track.height, 4)] for ob in state.obstacles],
    }


def simulate(
    seed: Optional[int] = 0,
    *,
    track: Optional[Track] = None,
    tuning: Optional[Tuning] = None,
    max_frames: int = 12_000,
    record: bool = True,
) -> RunResult:
    """Run one headless game until the first crash or ``max_frames``."""
    track = track or Track(400, 700)
    # Autopilot steering needs the follow channel even if the player build disables it
    tuning = (tuning or Tuning()).with_overrides(follow_enabled=True)
    game = Game(track, tuning, seed=seed)
    game.start()
    pilot = Autopilot()
    frames: list[dict[str, Any]] = []

    while game.running and game.state.frame < max_frames:
        if game.state.frame % DECISION_INTERVAL == 0:
            pilot.steer(game)
        if record and game.state.frame % RECORD_EVERY == 0:
            frames.append(encode(game.state))
        game.tick(FRAME_MS)

    if record and (not frames or frames[-1]["frame"] != game.state.frame):
        frames.append(encode(game.state))

    return RunResult(
        seed=seed,
        alive_time=game.state.frame,
        score=game.state.score,
        crashed=not game.running,
        frames=frames,
    )
