"""
Core utility functions shared across scoring service modules.
"""

import math

import numpy as np
from numpy.random import Generator


def get_rng(seed: int | None = None) -> Generator:
    """
    Create a numpy random Generator with optional seed.

    Args:
        seed: Random seed for reproducibility. If None, uses entropy.

    Returns:
        A numpy random Generator instance.
    """
    return np.random.default_rng(seed)


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, with halves rounded away from zero.

    Python's built-in round() uses banker's rounding (round(0.5) == 0),
    which would shift PCI values that land exactly on a half.

    Args:
        value: Value to round.

    Returns:
        Nearest integer, ties away from zero.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))
