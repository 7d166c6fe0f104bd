"""Game-loop simulation: bird, pipes, difficulty, collisions and scoring."""

from .bird import Bird
from .clock import FrameClock, clamp_delta
from .collision import CollisionEngine, CollisionReport
from .difficulty import DifficultyRamp, SimulationParams
from .geometry import Playfield, Rect, circle_rect_overlap, rand_range
from .pipes import Pipe, PipeGenerator, PipeStream
from .simulation import FrameSnapshot, PipeView, ScoreBoard, Simulation

__all__ = [
    "Bird",
    "CollisionEngine",
    "CollisionReport",
    "DifficultyRamp",
    "FrameClock",
    "FrameSnapshot",
    "Pipe",
    "PipeGenerator",
    "PipeStream",
    "PipeView",
    "Playfield",
    "Rect",
    "ScoreBoard",
    "SimulationParams",
    "Simulation",
    "circle_rect_overlap",
    "clamp_delta",
    "rand_range",
]
