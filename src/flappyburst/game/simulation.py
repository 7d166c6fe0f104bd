"""
Simulation clock and game state machine.

Simulation owns every piece of per-game state (bird, pipes, difficulty
parameters, score) and is the only thing the host talks to. The host
drives it with tick(dt) once per frame and forwards player input to
on_flap(), toggle_pause(), reset(), start() and play().

Per running tick the order is fixed:
    ramp -> bird -> spawn -> scroll -> prune -> collisions/score
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional, Tuple

from flappyburst.config.settings import Settings
from flappyburst.core.events import Event, EventBus, EventType
from flappyburst.core.state import GamePhase, StateMachine
from flappyburst.game.bird import Bird
from flappyburst.game.clock import clamp_delta
from flappyburst.game.collision import CollisionEngine, CollisionReport
from flappyburst.game.difficulty import DifficultyRamp, SimulationParams
from flappyburst.game.geometry import Playfield, RandomSource
from flappyburst.game.pipes import Pipe, PipeGenerator, PipeStream

logger = logging.getLogger(__name__)


@dataclass
class ScoreBoard:
    """Current and best score."""

    current: int = 0
    best: int = 0

    def commit(self) -> bool:
        """Fold the current score into best. Returns True on a new best."""
        if self.current > self.best:
            self.best = self.current
            return True
        return False


@dataclass(frozen=True)
class PipeView:
    """Read-only copy of a pipe for renderers."""

    x: float
    width: float
    top_height: float
    bottom_y: float
    bottom_height: float
    passed: bool

    @classmethod
    def from_pipe(cls, pipe: Pipe) -> "PipeView":
        return cls(
            x=pipe.x,
            width=pipe.width,
            top_height=pipe.top_height,
            bottom_y=pipe.bottom_y,
            bottom_height=pipe.bottom_height,
            passed=pipe.passed,
        )


@dataclass(frozen=True)
class FrameSnapshot:
    """Everything a renderer needs for one frame."""

    phase: GamePhase
    bird_x: float
    bird_y: float
    bird_radius: float
    bird_rotation: float
    pipes: Tuple[PipeView, ...]
    score: int
    best_score: int
    elapsed_time: float
    scroll_speed: float
    playfield_width: float
    playfield_height: float


class Simulation:
    """One game of Flappy Burst.

    Args:
        settings: Game constants; defaults to Settings()
        event_bus: Bus for flap/score/game-over notifications
        rng: Random source for pipe placement. When omitted, a
            random.Random seeded from settings.seed is used
        best_score: Best score loaded by the persistence layer
        playfield: Initial play-field size; defaults to the window size
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        event_bus: Optional[EventBus] = None,
        rng: Optional[RandomSource] = None,
        best_score: int = 0,
        playfield: Optional[Playfield] = None,
    ) -> None:
        self.settings = settings if settings is not None else Settings()
        self.event_bus = event_bus if event_bus is not None else EventBus()

        self.state_machine = StateMachine()
        self.state_machine.add_listener(self._on_phase_changed)

        display = self.settings.display
        self.playfield = playfield or Playfield(float(display.width), float(display.height))

        if rng is None:
            rng = random.Random(self.settings.seed)

        self.bird = Bird.from_settings(self.settings.physics, self.start_y)
        self.generator = PipeGenerator(self.settings.pipes, rng)
        self.pipes = PipeStream(prune_threshold=self.settings.pipes.prune_threshold)
        self.ramp = DifficultyRamp(self.settings.difficulty)
        self.params: SimulationParams = self.ramp.initial_params()
        self.collisions = CollisionEngine()
        self.scoreboard = ScoreBoard(best=max(0, best_score))

    # Read-only state

    @property
    def phase(self) -> GamePhase:
        return self.state_machine.phase

    @property
    def score(self) -> int:
        return self.scoreboard.current

    @property
    def best_score(self) -> int:
        return self.scoreboard.best

    @property
    def start_y(self) -> float:
        return self.playfield.height / 2

    def snapshot(self) -> FrameSnapshot:
        return FrameSnapshot(
            phase=self.phase,
            bird_x=self.bird.x,
            bird_y=self.bird.y,
            bird_radius=self.bird.radius,
            bird_rotation=self.bird.rotation,
            pipes=tuple(PipeView.from_pipe(p) for p in self.pipes),
            score=self.scoreboard.current,
            best_score=self.scoreboard.best,
            elapsed_time=self.params.elapsed_time,
            scroll_speed=self.params.scroll_speed,
            playfield_width=self.playfield.width,
            playfield_height=self.playfield.height,
        )

    # Input entry points

    def start(self) -> bool:
        """READY -> RUNNING."""
        if not self.state_machine.transition(GamePhase.RUNNING):
            return False
        self._emit(EventType.GAME_START)
        return True

    def on_flap(self) -> bool:
        """Flap input. The first flap in READY also starts the game.

        Returns:
            True if the bird flapped
        """
        phase = self.phase
        if phase == GamePhase.READY:
            self.start()
        elif phase != GamePhase.RUNNING:
            return False

        self.bird.flap()
        self._emit(EventType.FLAP, {"y": self.bird.y})
        return True

    def toggle_pause(self) -> bool:
        """RUNNING <-> PAUSED. Ignored in READY and GAME_OVER."""
        if self.phase == GamePhase.RUNNING:
            self.state_machine.transition(GamePhase.PAUSED)
            self._emit(EventType.GAME_PAUSED)
            return True
        if self.phase == GamePhase.PAUSED:
            self.state_machine.transition(GamePhase.RUNNING)
            self._emit(EventType.GAME_RESUMED)
            return True
        return False

    def reset(self) -> None:
        """Clear the board and return to READY. Valid from any phase."""
        self.pipes.clear()
        self.bird.reset(self.start_y)
        self.scoreboard.current = 0
        self.ramp.reset(self.params)
        self.state_machine.reset()
        self._emit(EventType.GAME_RESET, {"best": self.scoreboard.best})

    def play(self) -> bool:
        """Play button: reset after a game over, then start."""
        if self.phase == GamePhase.GAME_OVER:
            self.reset()
        if self.phase != GamePhase.READY:
            return False
        return self.start()

    def resize(self, width: float, height: float) -> None:
        """Feed the current play-field size from the host."""
        self.playfield.width = float(width)
        self.playfield.height = float(height)
        if self.phase == GamePhase.READY:
            self.bird.reset(self.start_y)

    # Frame stepping

    def tick(self, dt: float) -> None:
        """Host entry point: clamp dt to [0, max_dt] and step once."""
        self.update(clamp_delta(dt, self.settings.display.max_dt))

    def update(self, dt: float) -> None:
        """Advance the simulation by dt seconds. No-op unless RUNNING."""
        if self.phase != GamePhase.RUNNING:
            return

        self.ramp.apply(self.params, dt)
        self.bird.update(dt)
        self.pipes.maybe_spawn(self.params, self.playfield, self.generator)
        self.pipes.advance(dt, self.params.scroll_speed)
        self.pipes.prune()

        report = self.collisions.evaluate(self.bird, self.pipes, self.playfield)
        self._apply_report(report)

    def _apply_report(self, report: CollisionReport) -> None:
        for _ in report.passed:
            self.scoreboard.current += 1
            self._emit(EventType.SCORE, {"score": self.scoreboard.current})

        if report.collided:
            self._game_over(report.cause)

    def _game_over(self, cause: Optional[str]) -> None:
        if not self.state_machine.transition(GamePhase.GAME_OVER):
            return

        new_best = self.scoreboard.commit()
        logger.info(
            f"Game over ({cause}): score={self.scoreboard.current} "
            f"best={self.scoreboard.best}"
        )
        self._emit(EventType.GAME_OVER, {
            "score": self.scoreboard.current,
            "best": self.scoreboard.best,
            "new_best": new_best,
            "cause": cause,
        })
        if new_best:
            self._emit(EventType.NEW_BEST, {"best": self.scoreboard.best})

    def _on_phase_changed(self, old_phase: GamePhase, new_phase: GamePhase) -> None:
        self._emit(EventType.PHASE_CHANGED, {"from": old_phase, "to": new_phase})

    def _emit(self, event_type: EventType, data: Optional[dict] = None) -> None:
        self.event_bus.emit(Event(type=event_type, data=data or {}))
