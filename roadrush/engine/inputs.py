"""Player intent: discrete left/right flags and the pointer follow channel."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from roadrush.engine.lanes import LaneLayout
from roadrush.engine.tuning import ROAD_MARGIN

Side = Literal["left", "right"]


def pointer_to_target_x(
    client_x: float,
    canvas_left: float,
    player_w: float,
    layout: LaneLayout,
    margin: float = ROAD_MARGIN,
) -> float:
    """Convert a pointer's client x into a clamped player x (car centred under the pointer)."""
    target = (client_x - canvas_left) - player_w / 2
    min_x, max_x = layout.player_bounds(player_w, margin)
    if target < min_x:
        target = min_x
    if target > max_x:
        target = max_x
    return target


@dataclass
class InputState:
    left: bool = False
    right: bool = False
    # Follow mode: desired player x while a pointer is tracked.
    follow_target_x: Optional[float] = None
    pointer_id: Optional[int] = None
    # Half-screen touch, only used when follow mode is disabled.
    touch_side: Optional[Side] = None

    def press(self, side: Side) -> None:
        setattr(self, side, True)

    def release(self, side: Side) -> None:
        setattr(self, side, False)

    @property
    def following(self) -> bool:
        return self.pointer_id is not None and self.follow_target_x is not None

    def pointer_down(
        self,
        pointer_id: int,
        client_x: float,
        canvas_left: float,
        canvas_width: float,
        player_w: float,
        layout: LaneLayout,
        follow_enabled: bool = True,
        margin: float = ROAD_MARGIN,
    ) -> None:
        if not follow_enabled:
            local_x = client_x - canvas_left
            self.touch_side = "left" if local_x < canvas_width / 2 else "right"
            return
        self.pointer_id = pointer_id
        self.follow_target_x = pointer_to_target_x(client_x, canvas_left, player_w, layout, margin)
        self.touch_side = None

    def pointer_move(
        self,
        pointer_id: int,
        client_x: float,
        canvas_left: float,
        player_w: float,
        layout: LaneLayout,
        margin: float = ROAD_MARGIN,
    ) -> None:
        if self.pointer_id is None or pointer_id != self.pointer_id:
            return
        self.follow_target_x = pointer_to_target_x(client_x, canvas_left, player_w, layout, margin)

    def pointer_up(self, pointer_id: int) -> None:
        """Release (or cancel) a pointer; ignored unless it is the tracked one."""
        self.touch_side = None
        if pointer_id == self.pointer_id:
            self.clear_pointer()

    def clear_pointer(self) -> None:
        self.pointer_id = None
        self.follow_target_x = None
