"""Best score persistence using a small JSON file."""

import json
import logging
from pathlib import Path
from typing import Callable

from flappyburst.core.events import Event, EventBus, EventType

logger = logging.getLogger(__name__)


class BestScoreStore:
    """Persistent best score, stored as {"best": <int>}.

    Read and write failures are logged and never raised; a missing or
    unreadable file counts as a best score of 0.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> int:
        """Load the best score from file."""
        if not self.path.exists():
            return 0

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            best = int(data.get("best", 0))
        except Exception as e:
            logger.error(f"Failed to load best score from {self.path}: {e}")
            return 0

        best = max(0, best)
        logger.info(f"Loaded best score: {best}")
        return best

    def save(self, best: int) -> bool:
        """Save the best score to file."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump({"best": int(best)}, f, indent=2)
        except Exception as e:
            logger.error(f"Failed to save best score to {self.path}: {e}")
            return False

        logger.info(f"Saved best score: {best}")
        return True

    def handle_game_over(self, event: Event) -> None:
        """Persist the new best carried by a GAME_OVER event."""
        if event.data.get("new_best"):
            self.save(event.data.get("best", 0))

    def attach(self, event_bus: EventBus) -> Callable[[], None]:
        """Save on every game over that sets a new best. Returns unsubscribe."""
        return event_bus.subscribe(EventType.GAME_OVER, self.handle_game_over)
