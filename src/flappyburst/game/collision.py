"""Per-tick collision and pass-through scoring."""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from flappyburst.game.bird import Bird
from flappyburst.game.geometry import Playfield, circle_overlaps
from flappyburst.game.pipes import Pipe

CAUSE_PIPE = "pipe"
CAUSE_CEILING = "ceiling"
CAUSE_GROUND = "ground"


@dataclass
class CollisionReport:
    """Outcome of one evaluation pass."""

    passed: List[Pipe] = field(default_factory=list)
    collided: bool = False
    cause: Optional[str] = None

    @property
    def points(self) -> int:
        return len(self.passed)


class CollisionEngine:
    """Checks post-movement positions of the bird against pipes and bounds.

    Pipes are visited in stream order. A pipe scores once, the first
    time its right edge is strictly left of the bird's x. The first
    pipe hit stops the pass; bounds are only checked when no pipe was hit.
    """

    def evaluate(
        self,
        bird: Bird,
        pipes: Iterable[Pipe],
        playfield: Playfield,
    ) -> CollisionReport:
        report = CollisionReport()

        for pipe in pipes:
            if not pipe.passed and pipe.right < bird.x:
                pipe.passed = True
                report.passed.append(pipe)

            if self.hits_pipe(bird, pipe):
                report.collided = True
                report.cause = CAUSE_PIPE
                return report

        if bird.top < 0:
            report.collided = True
            report.cause = CAUSE_CEILING
        elif bird.bottom > playfield.height:
            report.collided = True
            report.cause = CAUSE_GROUND

        return report

    @staticmethod
    def hits_pipe(bird: Bird, pipe: Pipe) -> bool:
        return (
            circle_overlaps(bird.x, bird.y, bird.radius, pipe.top)
            or circle_overlaps(bird.x, bird.y, bird.radius, pipe.bottom)
        )
