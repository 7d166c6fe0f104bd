"""Desktop pygame host for Flappy Burst."""

from .window import SimulatorWindow

__all__ = ["SimulatorWindow"]
