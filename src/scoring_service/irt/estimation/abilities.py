"""
Latent trait estimation for the 2PL model.

This module provides maximum-likelihood estimation of theta by Newton-Raphson,
treating all answered items of one dichotomy jointly.
"""

import logging
import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike

from scoring_service.irt.estimation.config import NewtonRaphsonConfig
from scoring_service.irt.estimation.enums import ConvergenceStatus
from scoring_service.irt.response_models import (
    compute_item_information,
    compute_probabilities,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ThetaEstimate:
    """
    Maximum-likelihood theta estimate for one set of responses.

    Attributes:
        theta: Final estimate, within the configured theta bounds.
        n_items: Number of responses the estimate is based on.
        n_iterations: Number of Newton-Raphson steps taken.
        convergence_status: How the solver terminated.
        standard_error: 1 / sqrt(test information) at theta, or None when
            there is no information (no responses).
    """

    theta: float
    n_items: int
    n_iterations: int
    convergence_status: ConvergenceStatus
    standard_error: float | None = None

    @property
    def converged(self) -> bool:
        """Whether the solver met the tolerance on theta."""
        return self.convergence_status == ConvergenceStatus.CONVERGED


def estimate_theta(
    discriminations: ArrayLike,
    difficulties: ArrayLike,
    responses: ArrayLike,
    config: NewtonRaphsonConfig | None = None,
) -> ThetaEstimate:
    """
    Estimate theta by maximising the 2PL log-likelihood with Newton-Raphson.

    The log-likelihood over answered items i is
        ln L(u | θ) = Σ [u_i ln P_i(θ) + (1 - u_i) ln (1 - P_i(θ))]
    with derivatives
        g(θ) = Σ a_i (u_i - P_i(θ))
        h(θ) = -Σ a_i² P_i(θ) (1 - P_i(θ))

    Each step θ ← clip(θ - g/h, bounds). Iteration stops when |h| falls below
    config.min_information (flat likelihood), when the change in θ is below
    config.tolerance, or after config.max_iterations steps.

    Args:
        discriminations: Item discriminations (a), shape (n_items,).
        difficulties: Item difficulties (b), shape (n_items,).
        responses: Keyed responses (u in {0, 1}), shape (n_items,).
        config: Solver configuration. Uses defaults if None.

    Returns:
        ThetaEstimate. With no responses, theta is the initial value (0).

    Raises:
        ValueError: If array shapes differ or responses are not 0/1.
    """
    if config is None:
        config = NewtonRaphsonConfig()

    a = np.asarray(discriminations, dtype=np.float64)
    b = np.asarray(difficulties, dtype=np.float64)
    u = np.asarray(responses, dtype=np.float64)

    if not (a.shape == b.shape == u.shape) or a.ndim != 1:
        raise ValueError(
            f"discriminations, difficulties and responses must be 1D arrays "
            f"of equal length, got shapes {a.shape}, {b.shape}, {u.shape}"
        )
    if not np.all((u == 0.0) | (u == 1.0)):
        raise ValueError("responses must be 0 or 1")

    n_items = len(u)
    theta = config.initial_theta

    if n_items == 0:
        return ThetaEstimate(
            theta=theta,
            n_items=0,
            n_iterations=0,
            convergence_status=ConvergenceStatus.NO_RESPONSES,
        )

    lower, upper = config.theta_bounds
    status = ConvergenceStatus.MAX_ITERATIONS
    n_iterations = config.max_iterations

    for iteration in range(config.max_iterations):
        p = compute_probabilities(theta, a, b)
        first_derivative = float(np.sum(a * (u - p)))
        second_derivative = float(np.sum(-(a**2) * p * (1.0 - p)))

        if abs(second_derivative) < config.min_information:
            status = ConvergenceStatus.FLAT_LIKELIHOOD
            n_iterations = iteration
            break

        new_theta = theta - first_derivative / second_derivative
        new_theta = min(upper, max(lower, new_theta))
        change = abs(new_theta - theta)
        theta = new_theta

        logger.debug(
            f"Iteration {iteration + 1}: theta = {theta:.6f}, "
            f"gradient = {first_derivative:.6f}, change = {change:.6f}"
        )

        if change < config.tolerance:
            status = ConvergenceStatus.CONVERGED
            n_iterations = iteration + 1
            break

    information = float(np.sum(compute_item_information(theta, a, b)))
    standard_error = 1.0 / math.sqrt(information) if information > 0 else None

    return ThetaEstimate(
        theta=theta,
        n_items=n_items,
        n_iterations=n_iterations,
        convergence_status=status,
        standard_error=standard_error,
    )
