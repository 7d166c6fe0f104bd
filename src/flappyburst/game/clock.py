"""Wall-clock to simulation delta conversion."""

from typing import Optional


def clamp_delta(dt: float, max_dt: float) -> float:
    """Clamp a frame delta (seconds) into [0, max_dt]."""
    return max(0.0, min(dt, max_dt))


class FrameClock:
    """Turns successive timestamps into clamped per-frame deltas.

    The first call after construction or reset() yields 0 so a long
    start-up or a resumed stall never turns into one huge step.
    """

    def __init__(self, max_dt: float = 0.033) -> None:
        self.max_dt = max_dt
        self._last: Optional[float] = None

    def tick(self, now: float) -> float:
        """Return the clamped delta since the previous tick, in seconds."""
        if self._last is None:
            self._last = now
            return 0.0

        raw = now - self._last
        self._last = now
        return clamp_delta(raw, self.max_dt)

    def reset(self) -> None:
        self._last = None
