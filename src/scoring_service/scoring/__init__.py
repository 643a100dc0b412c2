"""
Scoring module: from answer sets to reportable preferences.

Key components:
- ScoringEngine: Orchestrates keying, estimation and resolution
- key_answers / key_directions: The keying boundary
- resolve_dichotomy: theta -> preference, PCI, PCC
"""

from scoring_service.scoring.engine import ScoringEngine, score_answers
from scoring_service.scoring.keying import key_answers, key_directions
from scoring_service.scoring.preferences import (
    DICHOTOMY_CONFIG,
    resolve_dichotomy,
)

__all__ = [
    "DICHOTOMY_CONFIG",
    "ScoringEngine",
    "key_answers",
    "key_directions",
    "resolve_dichotomy",
    "score_answers",
]
