"""
Respondent simulation for offline evaluation of the scoring engine.

Responses are sampled from the same 2PL model the engine inverts, so the
scored preferences can be compared against known true thetas.

It is NOT intended for production inference.
"""

from scoring_service.simulation.sampling import (
    SimulatedRespondent,
    responses_to_answers,
    sample_keyed_responses,
    simulate_respondents,
)
from scoring_service.simulation.validation import (
    compute_omission_rate,
    compute_preference_agreement,
)

__all__ = [
    "SimulatedRespondent",
    "compute_omission_rate",
    "compute_preference_agreement",
    "responses_to_answers",
    "sample_keyed_responses",
    "simulate_respondents",
]
