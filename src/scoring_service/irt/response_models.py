"""
Probabilistic response model for forced-choice items.

This module computes P(positive-pole response | theta, item) under the
2-Parameter Logistic (2PL) IRT model, and the matching item information.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.special import expit


def compute_probabilities(
    theta: float,
    discriminations: ArrayLike,
    difficulties: ArrayLike,
) -> NDArray[np.float64]:
    """
    Probability of a positive-pole response for each item.

    The 2PL model:
        P(u = 1 | theta) = 1 / (1 + exp(-a * (theta - b)))

    Where:
        - theta: respondent's latent trait
        - a: discrimination parameter
        - b: difficulty (location) parameter

    expit evaluates the logistic function without overflow for any exponent.

    Args:
        theta: Latent trait value.
        discriminations: Item discriminations, shape (n_items,).
        difficulties: Item difficulties, shape (n_items,).

    Returns:
        Array of shape (n_items,) with probabilities in (0, 1).
    """
    a = np.asarray(discriminations, dtype=np.float64)
    b = np.asarray(difficulties, dtype=np.float64)
    result: NDArray[np.float64] = expit(a * (theta - b))
    return result


def probability(theta: float, a: float, b: float) -> float:
    """Scalar 2PL probability for a single item."""
    return float(compute_probabilities(theta, [a], [b])[0])


def compute_item_information(
    theta: float,
    discriminations: ArrayLike,
    difficulties: ArrayLike,
) -> NDArray[np.float64]:
    """
    Fisher information of each item at theta.

        I(theta) = a^2 * P(theta) * (1 - P(theta))

    Args:
        theta: Latent trait value.
        discriminations: Item discriminations, shape (n_items,).
        difficulties: Item difficulties, shape (n_items,).

    Returns:
        Array of shape (n_items,) with non-negative information values.
    """
    a = np.asarray(discriminations, dtype=np.float64)
    p = compute_probabilities(theta, a, difficulties)
    result: NDArray[np.float64] = a**2 * p * (1.0 - p)
    return result
