"""Persistence for Flappy Burst."""

from .best_score import BestScoreStore

__all__ = ["BestScoreStore"]
