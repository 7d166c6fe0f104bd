"""Time-based difficulty ramp."""

from dataclasses import dataclass

from flappyburst.config.settings import DifficultySettings


@dataclass
class SimulationParams:
    """Per-game scalars that the ramp and spawner mutate each tick."""

    scroll_speed: float  # px/s
    spawn_interval: float  # ms
    elapsed_time: float = 0.0  # s
    spawn_timer: float = 0.0  # ms


class DifficultyRamp:
    """Linearly speeds up scrolling and shortens the spawn interval.

    Speed grows without a cap. The interval shrinks by
    ramp_decay * dt * reference_fps per tick, i.e. ramp_decay ms per
    reference frame, and never drops below min_interval.
    """

    def __init__(self, settings: DifficultySettings) -> None:
        self.settings = settings

    def initial_params(self) -> SimulationParams:
        return SimulationParams(
            scroll_speed=self.settings.initial_speed,
            spawn_interval=self.settings.initial_interval,
        )

    def reset(self, params: SimulationParams) -> None:
        params.scroll_speed = self.settings.initial_speed
        params.spawn_interval = self.settings.initial_interval
        params.elapsed_time = 0.0
        params.spawn_timer = 0.0

    def apply(self, params: SimulationParams, dt: float) -> None:
        """Advance the clocks and ramp the parameters by one tick."""
        s = self.settings
        params.elapsed_time += dt
        params.spawn_timer += dt * 1000.0

        params.scroll_speed += s.ramp_rate * dt
        if params.spawn_interval > s.min_interval:
            params.spawn_interval = max(
                s.min_interval,
                params.spawn_interval - s.ramp_decay * dt * s.reference_fps,
            )
