"""Display-independent layout helpers for the scene renderer."""

from typing import List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from flappyburst.core.state import GamePhase

Color = Tuple[int, int, int]

SKY_TOP: Color = (58, 123, 213)
SKY_BOTTOM: Color = (0, 210, 255)

GROUND_HEIGHT = 60
DIRT_OFFSET = 40
DIRT_HEIGHT = 20

# (x fraction, speed px/s, wrap padding, y fraction, size)
CLOUDS = [
    (0.1, 30.0, 200.0, 0.18, 60.0),
    (0.5, 50.0, 220.0, 0.28, 50.0),
    (0.8, 40.0, 240.0, 0.22, 55.0),
]

OVERLAY_TEXT = {
    GamePhase.READY: ("Get Ready", "Tap or press Space to start"),
    GamePhase.PAUSED: ("Paused", "Press P to resume"),
    GamePhase.GAME_OVER: ("Game Over", "Press R to reset or Enter to play again"),
}


def vertical_gradient(width: int, height: int, top: Color = SKY_TOP, bottom: Color = SKY_BOTTOM) -> NDArray[np.uint8]:
    """Build a (height, width, 3) RGB buffer fading from top to bottom."""
    t = np.linspace(0.0, 1.0, max(1, height), dtype=np.float32)[:, None]
    top_arr = np.array(top, dtype=np.float32)
    bottom_arr = np.array(bottom, dtype=np.float32)
    column = top_arr + (bottom_arr - top_arr) * t
    buffer = np.repeat(column[:, None, :], max(1, width), axis=1)
    return buffer.round().astype(np.uint8)


def cloud_layout(elapsed: float, width: float, height: float) -> List[Tuple[float, float, float]]:
    """Cloud (x, y, size) positions for parallax scrolling."""
    clouds = []
    for x_frac, speed, pad, y_frac, size in CLOUDS:
        x = (width * x_frac + (elapsed * speed) % (width + pad)) - pad
        clouds.append((x, height * y_frac, size))
    return clouds


def overlay_lines(phase: GamePhase) -> Optional[Tuple[str, str]]:
    """Title and subtitle for the overlay panel, or None while playing."""
    return OVERLAY_TEXT.get(phase)


def shows_live_score(phase: GamePhase) -> bool:
    return phase in (GamePhase.RUNNING, GamePhase.PAUSED)


def score_line(score: int, best: int) -> str:
    return f"Score {score}   Best {best}"
