"""
Preference resolution: theta -> letter, clarity index and clarity category.

PCI = round(|theta| / 3 * 30), never below 1. Categories:
    26-30 Very Clear, 16-25 Clear, 6-15 Moderate, 1-5 Slight.

A theta of exactly 0 resolves to the dichotomy's tie-breaker (always the
negative pole). After the clarity values are set, the midpoint adjustment
reassigns slight S, T and J preferences to N, F and P; E-I is never adjusted.
"""

from dataclasses import dataclass

from scoring_service.core.constants import (
    PCI_CLEAR,
    PCI_MAX,
    PCI_MIN,
    PCI_MODERATE,
    PCI_VERY_CLEAR,
    THETA_DECIMALS,
    THETA_LIMIT,
)
from scoring_service.core.data_models import (
    ClarityCategory,
    Dichotomy,
    DichotomyResult,
)
from scoring_service.core.utils import round_half_up
from scoring_service.irt.estimation.abilities import ThetaEstimate
from scoring_service.irt.estimation.enums import ConvergenceStatus


@dataclass(frozen=True)
class DichotomyConfig:
    """
    Pole letters of one dichotomy.

    Attributes:
        dichotomy: The axis.
        positive_pole: Letter for theta > 0 (E, S, T, J).
        negative_pole: Letter for theta < 0 (I, N, F, P).
        tie_breaker: Letter for theta == 0.
    """

    dichotomy: Dichotomy
    positive_pole: str
    negative_pole: str
    tie_breaker: str


DICHOTOMY_CONFIG: dict[Dichotomy, DichotomyConfig] = {
    Dichotomy.EI: DichotomyConfig(Dichotomy.EI, "E", "I", tie_breaker="I"),
    Dichotomy.SN: DichotomyConfig(Dichotomy.SN, "S", "N", tie_breaker="N"),
    Dichotomy.TF: DichotomyConfig(Dichotomy.TF, "T", "F", tie_breaker="F"),
    Dichotomy.JP: DichotomyConfig(Dichotomy.JP, "J", "P", tie_breaker="P"),
}

# (dichotomy, preference) -> (highest pci that is reassigned, new preference)
MIDPOINT_ADJUSTMENTS: dict[tuple[Dichotomy, str], tuple[int, str]] = {
    (Dichotomy.SN, "S"): (1, "N"),
    (Dichotomy.TF, "T"): (2, "F"),
    (Dichotomy.JP, "J"): (1, "P"),
}


def resolve_preference(theta: float, config: DichotomyConfig) -> str:
    """Letter indicated by the sign of theta, tie-breaker at exactly 0."""
    if theta > 0:
        return config.positive_pole
    if theta < 0:
        return config.negative_pole
    return config.tie_breaker


def compute_pci(theta: float) -> int:
    """Preference Clarity Index on the 1-30 scale."""
    if theta == 0:
        return PCI_MIN
    raw = abs(theta) / THETA_LIMIT * PCI_MAX
    return max(PCI_MIN, round_half_up(raw))


def categorize_pci(pci: int) -> ClarityCategory:
    if pci >= PCI_VERY_CLEAR:
        return ClarityCategory.VERY_CLEAR
    if pci >= PCI_CLEAR:
        return ClarityCategory.CLEAR
    if pci >= PCI_MODERATE:
        return ClarityCategory.MODERATE
    return ClarityCategory.SLIGHT


def apply_midpoint_adjustment(
    dichotomy: Dichotomy, preference: str, pci: int
) -> str:
    """
    Reassign low-clarity S, T and J preferences to the opposite pole.

    S-N: S with pci 1 -> N. T-F: T with pci <= 2 -> F. J-P: J with pci 1 -> P.
    No other dichotomy or direction is affected.
    """
    rule = MIDPOINT_ADJUSTMENTS.get((dichotomy, preference))
    if rule is None:
        return preference
    max_pci, adjusted = rule
    return adjusted if pci <= max_pci else preference


def resolve_dichotomy(
    dichotomy: Dichotomy,
    theta: float,
    n_answered: int = 0,
    convergence_status: ConvergenceStatus = ConvergenceStatus.NO_RESPONSES,
    standard_error: float | None = None,
) -> DichotomyResult:
    """
    Build the reportable result for one dichotomy from its theta.

    Args:
        dichotomy: The axis being resolved.
        theta: Unrounded theta estimate.
        n_answered: Number of items behind the estimate.
        convergence_status: Solver termination status.
        standard_error: Standard error of theta, if any.

    Returns:
        DichotomyResult with theta rounded to 2 decimals.
    """
    config = DICHOTOMY_CONFIG[dichotomy]
    preference = resolve_preference(theta, config)
    pci = compute_pci(theta)
    pcc = categorize_pci(pci)
    preference = apply_midpoint_adjustment(dichotomy, preference, pci)

    return DichotomyResult(
        dichotomy=dichotomy,
        theta=round(theta, THETA_DECIMALS),
        preference=preference,
        pci=pci,
        pcc=pcc,
        n_answered=n_answered,
        convergence_status=convergence_status,
        standard_error=standard_error,
    )


def resolve_estimate(
    dichotomy: Dichotomy, estimate: ThetaEstimate
) -> DichotomyResult:
    """resolve_dichotomy for a solver result."""
    return resolve_dichotomy(
        dichotomy,
        estimate.theta,
        n_answered=estimate.n_items,
        convergence_status=estimate.convergence_status,
        standard_error=estimate.standard_error,
    )
