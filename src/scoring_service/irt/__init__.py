"""
IRT (Item Response Theory) module.

This module provides:
- 2PL response probabilities and item information
- Newton-Raphson maximum-likelihood theta estimation
"""

from scoring_service.irt.estimation.abilities import (
    ThetaEstimate,
    estimate_theta,
)
from scoring_service.irt.response_models import (
    compute_item_information,
    compute_probabilities,
    probability,
)

__all__ = [
    "ThetaEstimate",
    "compute_item_information",
    "compute_probabilities",
    "estimate_theta",
    "probability",
]
