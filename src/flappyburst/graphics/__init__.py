"""Rendering for Flappy Burst."""
