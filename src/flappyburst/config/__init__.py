"""Configuration for Flappy Burst."""

from .settings import (
    AudioSettings,
    DifficultySettings,
    DisplaySettings,
    PhysicsSettings,
    PipeSettings,
    Settings,
    get_settings,
)

__all__ = [
    "AudioSettings",
    "DifficultySettings",
    "DisplaySettings",
    "PhysicsSettings",
    "PipeSettings",
    "Settings",
    "get_settings",
]
