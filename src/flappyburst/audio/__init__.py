"""Flappy Burst audio - synthesized feedback beeps."""

from .engine import AudioEngine

__all__ = ["AudioEngine"]
