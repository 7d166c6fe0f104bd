"""Pipe generation and the scrolling pipe stream."""

import logging
import random
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from flappyburst.config.settings import PipeSettings
from flappyburst.game.difficulty import SimulationParams
from flappyburst.game.geometry import Playfield, RandomSource, Rect, rand_range

logger = logging.getLogger(__name__)


@dataclass
class Pipe:
    """A top/bottom pipe pair with a gap between them.

    The top pipe hangs from y=0; the bottom pipe starts at bottom_y.
    """

    x: float
    width: float
    top_height: float
    bottom_y: float
    bottom_height: float
    passed: bool = False

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def gap(self) -> float:
        return self.bottom_y - self.top_height

    @property
    def top(self) -> Rect:
        return Rect(self.x, 0.0, self.width, self.top_height)

    @property
    def bottom(self) -> Rect:
        return Rect(self.x, self.bottom_y, self.width, self.bottom_height)


class PipeGenerator:
    """Creates pipes with a random gap size and gap position.

    Pass a seeded random.Random for reproducible layouts.
    """

    def __init__(self, settings: PipeSettings, rng: Optional[RandomSource] = None) -> None:
        self.settings = settings
        self.rng = rng if rng is not None else random.Random()

    def spawn(self, playfield: Playfield) -> Pipe:
        s = self.settings
        gap = rand_range(s.gap_min, s.gap_max, self.rng)
        center = rand_range(
            s.center_top_margin, playfield.height - s.center_bottom_margin, self.rng
        )

        top_height = max(s.min_clamp, center - gap / 2)
        bottom_y = center + gap / 2
        bottom_height = max(s.min_clamp, playfield.height - bottom_y)

        pipe = Pipe(
            x=playfield.width + s.spawn_margin,
            width=s.width,
            top_height=top_height,
            bottom_y=bottom_y,
            bottom_height=bottom_height,
        )
        logger.debug(
            f"Spawned pipe at x={pipe.x:.0f} gap={gap:.1f} center={center:.1f}"
        )
        return pipe


@dataclass
class PipeStream:
    """Ordered collection of on-screen pipes, oldest first."""

    prune_threshold: float = -80.0
    pipes: List[Pipe] = field(default_factory=list)

    def __iter__(self) -> Iterator[Pipe]:
        return iter(self.pipes)

    def __len__(self) -> int:
        return len(self.pipes)

    def append(self, pipe: Pipe) -> None:
        self.pipes.append(pipe)

    def advance(self, dt: float, scroll_speed: float) -> None:
        """Scroll every pipe left by scroll_speed * dt."""
        shift = scroll_speed * dt
        for pipe in self.pipes:
            pipe.x -= shift

    def prune(self) -> int:
        """Drop pipes whose right edge has reached the threshold.

        Returns:
            Number of pipes removed
        """
        before = len(self.pipes)
        self.pipes = [p for p in self.pipes if p.right > self.prune_threshold]
        return before - len(self.pipes)

    def maybe_spawn(
        self,
        params: SimulationParams,
        playfield: Playfield,
        generator: PipeGenerator,
    ) -> Optional[Pipe]:
        """Spawn a pipe once the spawn timer reaches the current interval."""
        if params.spawn_timer < params.spawn_interval:
            return None

        params.spawn_timer = 0.0
        pipe = generator.spawn(playfield)
        self.pipes.append(pipe)
        return pipe

    def clear(self) -> None:
        self.pipes.clear()
