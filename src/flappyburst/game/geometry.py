"""Geometry helpers shared by the simulation."""

import random
from dataclasses import dataclass
from typing import Optional, Protocol


class RandomSource(Protocol):
    """Anything with random.Random's uniform()."""

    def uniform(self, a: float, b: float) -> float: ...


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle, origin at the top-left."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass
class Playfield:
    """Visible simulation area in pixels."""

    width: float
    height: float


def circle_rect_overlap(
    cx: float, cy: float, radius: float,
    rx: float, ry: float, rw: float, rh: float,
) -> bool:
    """Closest-point test between a circle and a rectangle.

    The circle centre is clamped into the rectangle on each axis; the
    shapes overlap when that nearest point lies strictly inside the
    circle.
    """
    nearest_x = max(rx, min(cx, rx + rw))
    nearest_y = max(ry, min(cy, ry + rh))
    dx = cx - nearest_x
    dy = cy - nearest_y
    return dx * dx + dy * dy < radius * radius


def circle_overlaps(cx: float, cy: float, radius: float, rect: Rect) -> bool:
    """circle_rect_overlap() against a Rect."""
    return circle_rect_overlap(cx, cy, radius, rect.x, rect.y, rect.width, rect.height)


def rand_range(low: float, high: float, rng: Optional[RandomSource] = None) -> float:
    """Uniform float in [low, high]."""
    source = rng if rng is not None else random
    return source.uniform(low, high)
