from .collision import Rect, find_collision, obstacle_rect, player_rect, rects_intersect
from .entities import Obstacle, PatrolParams, Player, PlayerVisual, SineParams
from .inputs import InputState, pointer_to_target_x
from .lanes import LaneLayout, Track, lane_layout
from .run import Game, RunStatus, SimulationState
from .tuning import Tuning

__all__ = [
    'Game',
    'RunStatus',
    'SimulationState',
    'Track',
    'LaneLayout',
    'lane_layout',
    'Tuning',
    'Player',
    'PlayerVisual',
    'Obstacle',
    'SineParams',
    'PatrolParams',
    'InputState',
    'pointer_to_target_x',
    'Rect',
    'rects_intersect',
    'player_rect',
    'obstacle_rect',
    'find_collision',
]
