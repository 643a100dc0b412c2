"""
Statistical checks of scored results against simulated ground truth.
"""

from collections.abc import Sequence

import numpy as np

from scoring_service.core.data_models import Dichotomy, ScoringResult
from scoring_service.scoring.preferences import DICHOTOMY_CONFIG
from scoring_service.simulation.sampling import SimulatedRespondent


def compute_omission_rate(
    respondents: Sequence[SimulatedRespondent], n_items: int
) -> float:
    """
    Fraction of items left unanswered across respondents.

    Args:
        respondents: Simulated respondents.
        n_items: Number of items in the questionnaire.

    Returns:
        Omitted responses / total possible responses.
    """
    if not respondents or n_items == 0:
        return 0.0
    answered = sum(len(r.responses) for r in respondents)
    return 1.0 - answered / (len(respondents) * n_items)


def compute_preference_agreement(
    respondents: Sequence[SimulatedRespondent],
    results: Sequence[ScoringResult],
) -> dict[Dichotomy, float]:
    """
    Share of respondents whose reported letter matches the sign of their
    true theta, per dichotomy.

    Respondents with a true theta of exactly 0 have no true pole and are
    excluded from the denominator.

    Args:
        respondents: Simulated respondents.
        results: Scoring results, aligned with respondents.

    Returns:
        Dichotomy -> agreement rate in [0, 1] (nan if nothing to compare).
    """
    if len(respondents) != len(results):
        raise ValueError(
            f"Got {len(respondents)} respondents but {len(results)} results"
        )

    agreement: dict[Dichotomy, float] = {}
    for dichotomy in Dichotomy:
        config = DICHOTOMY_CONFIG[dichotomy]
        matches: list[bool] = []
        for respondent, result in zip(respondents, results):
            true_theta = respondent.true_thetas[dichotomy]
            if true_theta == 0:
                continue
            expected = (
                config.positive_pole if true_theta > 0 else config.negative_pole
            )
            matches.append(result[dichotomy].preference == expected)
        agreement[dichotomy] = float(np.mean(matches)) if matches else float("nan")
    return agreement
