"""
Shared fixtures: the packaged item table and a two-option catalogue in which
choice "A" keys to the positive pole and "B" to the negative pole.
"""

import pytest

from scoring_service.core.item_table import ItemParameterTable, load_item_table
from scoring_service.core.questions import QuestionCatalogue
from scoring_service.scoring import ScoringEngine

POSITIVE_CHOICE = "A"
NEGATIVE_CHOICE = "B"


def make_catalogue(n_items: int) -> QuestionCatalogue:
    return QuestionCatalogue.from_score_keys(
        [{POSITIVE_CHOICE: 1, NEGATIVE_CHOICE: 0}] * n_items
    )


@pytest.fixture(scope="session")
def item_table() -> ItemParameterTable:
    return load_item_table()


@pytest.fixture(scope="session")
def catalogue(item_table: ItemParameterTable) -> QuestionCatalogue:
    return make_catalogue(item_table.n_items)


@pytest.fixture(scope="session")
def engine(
    item_table: ItemParameterTable, catalogue: QuestionCatalogue
) -> ScoringEngine:
    return ScoringEngine(item_table=item_table, catalogue=catalogue)
