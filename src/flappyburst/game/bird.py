"""The player-controlled bird."""

import math
from dataclasses import dataclass

from flappyburst.config.settings import PhysicsSettings


@dataclass
class Bird:
    """Bird state. Only the vertical axis evolves; x never changes."""

    x: float
    y: float
    radius: float
    gravity: float
    flap_velocity: float
    rotation_reference_speed: float = 300.0
    vy: float = 0.0
    rotation: float = 0.0

    @classmethod
    def from_settings(cls, physics: PhysicsSettings, start_y: float) -> "Bird":
        return cls(
            x=physics.bird_x,
            y=start_y,
            radius=physics.bird_radius,
            gravity=physics.gravity,
            flap_velocity=physics.flap_velocity,
            rotation_reference_speed=physics.rotation_reference_speed,
        )

    def flap(self) -> None:
        """Overwrite vertical velocity with the upward impulse."""
        self.vy = self.flap_velocity

    def update(self, dt: float) -> None:
        """Integrate one step. dt is in seconds and must be pre-clamped."""
        self.vy += self.gravity * dt
        self.y += self.vy * dt
        self.rotation = math.atan2(self.vy, self.rotation_reference_speed)

    def reset(self, start_y: float) -> None:
        self.y = start_y
        self.vy = 0.0
        self.rotation = 0.0

    @property
    def top(self) -> float:
        return self.y - self.radius

    @property
    def bottom(self) -> float:
        return self.y + self.radius
