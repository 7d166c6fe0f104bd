"""Flappy Burst - a one-button arcade game."""

__version__ = "0.1.0"
