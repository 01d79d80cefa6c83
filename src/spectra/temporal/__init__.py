"""Temporal analytics over agent snapshots."""

from .velocity import compute_velocity, reconcile_extension_deltas, velocity_between

__all__ = ["compute_velocity", "reconcile_extension_deltas", "velocity_between"]
