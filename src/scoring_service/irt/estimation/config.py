"""
Configuration dataclasses for latent trait estimation and scoring.

This module defines the configuration parameters for:
- Newton-Raphson iteration limits and convergence criteria
- Theta bounds applied at every iteration
- Overall scoring settings
"""

from dataclasses import dataclass, field
from importlib import metadata

import toml

from scoring_service.core.constants import DISTRIBUTION_NAME, THETA_LIMIT
from scoring_service.core.paths import ProjectRootNotFound, get_project_root_dir

# Default Newton-Raphson settings
DEFAULT_MAX_ITERATIONS = 20
DEFAULT_TOLERANCE = 1e-4
DEFAULT_MIN_INFORMATION = 1e-9
DEFAULT_INITIAL_THETA = 0.0
DEFAULT_THETA_BOUNDS = (-THETA_LIMIT, THETA_LIMIT)


def _get_project_version() -> str:
    try:
        root_dir = get_project_root_dir()
    except ProjectRootNotFound:
        # Installed without the source tree
        return metadata.version(DISTRIBUTION_NAME)
    with open(root_dir / "pyproject.toml") as f:
        data = toml.load(f)

    version = data.get("project", {}).get("version")

    if not isinstance(version, str) or not version:
        raise ValueError(f"Version not found in {root_dir / 'pyproject.toml'}")

    return version


@dataclass(frozen=True)
class NewtonRaphsonConfig:
    """
    Configuration for the Newton-Raphson theta solver.

    Attributes:
        max_iterations: Maximum number of Newton-Raphson steps.
        tolerance: Convergence tolerance on the absolute change in theta
            between successive iterates.
        min_information: Iteration stops when the absolute second derivative
            of the log-likelihood falls below this value.
        initial_theta: Starting value for theta.
        theta_bounds: (min, max) interval each iterate is clamped to.
    """

    max_iterations: int = DEFAULT_MAX_ITERATIONS
    tolerance: float = DEFAULT_TOLERANCE
    min_information: float = DEFAULT_MIN_INFORMATION
    initial_theta: float = DEFAULT_INITIAL_THETA
    theta_bounds: tuple[float, float] = DEFAULT_THETA_BOUNDS

    def __post_init__(self) -> None:
        if self.max_iterations < 1:
            raise ValueError(
                f"max_iterations must be >= 1, got {self.max_iterations}"
            )
        lower, upper = self.theta_bounds
        if lower >= upper:
            raise ValueError(
                f"theta_bounds must be increasing, got {self.theta_bounds}"
            )
        if not lower <= self.initial_theta <= upper:
            raise ValueError(
                f"initial_theta {self.initial_theta} outside {self.theta_bounds}"
            )


@dataclass(frozen=True)
class ScoringConfig:
    """
    Master configuration for scoring.

    Attributes:
        estimation: Settings for the theta solver.
        model_version: Version string for reproducibility tracking.
    """

    estimation: NewtonRaphsonConfig = NewtonRaphsonConfig()
    model_version: str = field(default_factory=_get_project_version)
