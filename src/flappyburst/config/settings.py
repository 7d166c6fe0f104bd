"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested sections use a double underscore, e.g. FLAPPY_PHYSICS__GRAVITY=900.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PhysicsSettings(BaseModel):
    """Bird physics constants (pixels and seconds)."""

    gravity: float = Field(default=980.0, gt=0)  # px/s^2, downward
    flap_velocity: float = Field(default=-340.0, lt=0)  # px/s, upward
    bird_x: float = 120.0
    bird_radius: float = Field(default=16.0, gt=0)

    # Display tilt only: rotation = atan2(vy, rotation_reference_speed)
    rotation_reference_speed: float = Field(default=300.0, gt=0)


class PipeSettings(BaseModel):
    """Pipe geometry and placement."""

    width: float = Field(default=68.0, gt=0)
    gap_min: float = Field(default=150.0, gt=0)
    gap_max: float = Field(default=190.0, gt=0)

    # Gap centre is drawn from [center_top_margin, height - center_bottom_margin]
    center_top_margin: float = 140.0
    center_bottom_margin: float = 160.0

    min_clamp: float = Field(default=40.0, ge=0)
    spawn_margin: float = Field(default=40.0, ge=0)
    prune_threshold: float = -80.0

    @model_validator(mode="after")
    def _check_gap_range(self) -> "PipeSettings":
        if self.gap_max < self.gap_min:
            raise ValueError("gap_max must be >= gap_min")
        return self


class DifficultySettings(BaseModel):
    """Linear difficulty ramp."""

    initial_speed: float = Field(default=150.0, ge=0)  # px/s
    initial_interval: float = Field(default=1500.0, gt=0)  # ms
    ramp_rate: float = Field(default=0.2, ge=0)  # px/s per second
    ramp_decay: float = Field(default=20.0, ge=0)  # ms per reference frame
    min_interval: float = Field(default=950.0, gt=0)  # ms
    reference_fps: float = Field(default=60.0, gt=0)


class DisplaySettings(BaseModel):
    """Host window settings."""

    width: int = Field(default=480, gt=0)
    height: int = Field(default=720, gt=0)
    fps: int = Field(default=60, gt=0)
    max_dt: float = Field(default=0.033, gt=0)  # seconds
    fullscreen: bool = False
    title: str = "Flappy Burst"


class AudioSettings(BaseModel):
    """Sound effect settings."""

    enabled: bool = True
    muted: bool = False
    volume: float = Field(default=0.6, ge=0.0, le=1.0)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="FLAPPY_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False

    # Fixed seed for reproducible pipe layouts; None = non-deterministic
    seed: Optional[int] = None

    data_dir: Path = Field(default_factory=lambda: Path.home() / ".flappy_burst")

    physics: PhysicsSettings = Field(default_factory=PhysicsSettings)
    pipes: PipeSettings = Field(default_factory=PipeSettings)
    difficulty: DifficultySettings = Field(default_factory=DifficultySettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    audio: AudioSettings = Field(default_factory=AudioSettings)

    @property
    def best_score_path(self) -> Path:
        """File that holds the persisted best score."""
        return self.data_dir / "best_score.json"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
