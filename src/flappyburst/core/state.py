"""
Game phase state machine for Flappy Burst.

Phases:
    READY: Bird idle, no pipes, waiting for the first flap or start
    RUNNING: Simulation advances every tick
    PAUSED: Simulation frozen until resumed
    GAME_OVER: Terminal until an explicit reset
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    """Lifecycle phases of a single game."""
    READY = auto()
    RUNNING = auto()
    PAUSED = auto()
    GAME_OVER = auto()


PhaseListener = Callable[[GamePhase, GamePhase], None]


class StateMachine:
    """
    Tracks the current game phase and enforces valid transitions.

    Reset is not part of the transition table: it is allowed from
    every phase and always lands in READY.
    """

    VALID_TRANSITIONS: list[tuple[GamePhase, GamePhase]] = [
        (GamePhase.READY, GamePhase.RUNNING),
        (GamePhase.RUNNING, GamePhase.PAUSED),
        (GamePhase.RUNNING, GamePhase.GAME_OVER),
        (GamePhase.PAUSED, GamePhase.RUNNING),
    ]

    def __init__(self, initial_phase: GamePhase = GamePhase.READY) -> None:
        self._phase = initial_phase
        self._listeners: list[PhaseListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.debug(f"StateMachine initialized with phase: {initial_phase.name}")

    @property
    def phase(self) -> GamePhase:
        """Get current phase."""
        return self._phase

    def can_transition(self, to_phase: GamePhase) -> bool:
        """Check if transition to given phase is valid."""
        return (self._phase, to_phase) in self._valid_transitions

    def transition(self, to_phase: GamePhase) -> bool:
        """
        Attempt to move to a new phase.

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_phase):
            logger.warning(
                f"Invalid transition: {self._phase.name} -> {to_phase.name}"
            )
            return False

        self._set_phase(to_phase)
        return True

    def reset(self) -> None:
        """Return to READY from any phase."""
        self._set_phase(GamePhase.READY)

    def add_listener(self, callback: PhaseListener) -> None:
        """Add a phase change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: PhaseListener) -> None:
        """Remove a phase change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _set_phase(self, to_phase: GamePhase) -> None:
        old_phase = self._phase
        self._phase = to_phase
        logger.info(f"Phase transition: {old_phase.name} -> {to_phase.name}")

        for listener in self._listeners:
            try:
                listener(old_phase, to_phase)
            except Exception as e:
                logger.error(f"Error in phase listener: {e}")
