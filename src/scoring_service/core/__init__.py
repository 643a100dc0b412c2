"""
Core shared types and utilities for the scoring service.

This module provides foundational components used across multiple submodules:
the item parameter table, the question catalogue and the result models.
"""

from scoring_service.core.utils import get_rng, round_half_up

__all__ = [
    "get_rng",
    "round_half_up",
]
