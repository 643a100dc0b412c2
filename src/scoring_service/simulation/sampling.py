"""
Sampling of keyed responses from the 2PL model.
"""

from collections.abc import Mapping
from dataclasses import dataclass

import numpy as np
from numpy.random import Generator

from scoring_service.core.data_models import Dichotomy
from scoring_service.core.item_table import ItemParameterTable
from scoring_service.core.questions import QuestionCatalogue
from scoring_service.core.utils import get_rng
from scoring_service.irt.response_models import compute_probabilities
from scoring_service.scoring.keying import item_id_to_number


@dataclass(frozen=True)
class SimulatedRespondent:
    """
    A simulated respondent.

    Attributes:
        true_thetas: Generating theta per dichotomy.
        responses: 0-based item id -> keyed direction; omitted items are absent.
    """

    true_thetas: dict[Dichotomy, float]
    responses: dict[int, int]


def sample_keyed_responses(
    true_thetas: Mapping[Dichotomy, float],
    item_table: ItemParameterTable,
    omission_rate: float = 0.0,
    rng: Generator | None = None,
) -> dict[int, int]:
    """
    Sample one respondent's keyed responses.

    Each item is answered in the positive direction with probability
    P(theta_d) for its dichotomy d, and omitted independently with
    probability omission_rate (missing completely at random).

    Args:
        true_thetas: Theta per dichotomy. Dichotomies not given use 0.
        item_table: Item parameter table.
        omission_rate: Probability that an item is left unanswered.
        rng: Random number generator.

    Returns:
        Sparse mapping 0-based item id -> 0/1.
    """
    if not 0.0 <= omission_rate < 1.0:
        raise ValueError(f"omission_rate must be in [0, 1), got {omission_rate}")
    if rng is None:
        rng = get_rng()

    responses: dict[int, int] = {}
    for dichotomy in Dichotomy:
        item_ids = item_table.index.items_for(dichotomy)
        if not item_ids:
            continue
        a, b = item_table.parameter_arrays(item_ids)
        probs = compute_probabilities(true_thetas.get(dichotomy, 0.0), a, b)
        directions = (rng.random(len(item_ids)) < probs).astype(np.int64)
        answered = rng.random(len(item_ids)) >= omission_rate

        for item_id, u, keep in zip(item_ids, directions, answered):
            if keep:
                responses[item_id] = int(u)
    return responses


def simulate_respondents(
    n_respondents: int,
    item_table: ItemParameterTable,
    ability_std: float = 1.0,
    omission_rate: float = 0.0,
    seed: int | None = None,
) -> list[SimulatedRespondent]:
    """
    Simulate a batch of respondents with normally distributed thetas.

    Args:
        n_respondents: Number of respondents.
        item_table: Item parameter table.
        ability_std: Standard deviation of the theta distribution (mean 0).
        omission_rate: Per-item omission probability.
        seed: Random seed for reproducibility.

    Returns:
        List of SimulatedRespondent.
    """
    if n_respondents < 0:
        raise ValueError(f"n_respondents must be >= 0, got {n_respondents}")
    if ability_std <= 0:
        raise ValueError(f"ability_std must be > 0, got {ability_std}")

    rng = get_rng(seed)
    thetas = rng.normal(0.0, ability_std, size=(n_respondents, len(Dichotomy)))

    respondents: list[SimulatedRespondent] = []
    for row in thetas:
        true_thetas = {d: float(t) for d, t in zip(Dichotomy, row)}
        responses = sample_keyed_responses(
            true_thetas, item_table, omission_rate=omission_rate, rng=rng
        )
        respondents.append(
            SimulatedRespondent(true_thetas=true_thetas, responses=responses)
        )
    return respondents


def responses_to_answers(
    responses: Mapping[int, int], catalogue: QuestionCatalogue
) -> dict[int, str]:
    """Translate keyed directions back into choice keys (1-based item numbers)."""
    return {
        item_id_to_number(item_id): catalogue.choice_for(item_id, u)
        for item_id, u in responses.items()
    }
