"""
Tests for the scoring engine.
"""

from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from scoring_service.core.data_models import ClarityCategory, Dichotomy
from scoring_service.core.errors import CatalogueNotConfiguredError
from scoring_service.core.item_table import ItemParameterTable
from scoring_service.core.questions import QuestionCatalogue
from scoring_service.irt.estimation.enums import ConvergenceStatus
from scoring_service.scoring import ScoringEngine, score_answers


def _numbers(item_table: ItemParameterTable, dichotomy: Dichotomy) -> list[int]:
    return [i + 1 for i in item_table.index.items_for(dichotomy)]


class TestEdgeCases:
    def test_no_answers(self, engine: ScoringEngine) -> None:
        result = engine.score({})

        assert result.type_code == "INFP"
        assert result.n_answered == 0
        assert result.n_omitted == 93
        for dichotomy in Dichotomy:
            dichotomy_result = result[dichotomy]
            assert dichotomy_result.theta == 0.0
            assert dichotomy_result.pci == 1
            assert dichotomy_result.pcc == ClarityCategory.SLIGHT
            assert (
                dichotomy_result.convergence_status == ConvergenceStatus.NO_RESPONSES
            )
            assert dichotomy_result.standard_error is None

    def test_all_ei_positive(
        self, engine: ScoringEngine, item_table: ItemParameterTable
    ) -> None:
        answers = {n: "A" for n in _numbers(item_table, Dichotomy.EI)}
        result = engine.score(answers)

        ei = result[Dichotomy.EI]
        assert ei.preference == "E"
        assert ei.theta == 3.0
        assert ei.pci == 30
        assert ei.pcc == ClarityCategory.VERY_CLEAR
        assert ei.n_answered == 21
        # Unanswered dichotomies fall back to their tie-breakers
        assert result.type_code == "ENFP"

    def test_all_ei_negative(
        self, engine: ScoringEngine, item_table: ItemParameterTable
    ) -> None:
        answers = {n: "B" for n in _numbers(item_table, Dichotomy.EI)}
        ei = engine.score(answers)[Dichotomy.EI]

        assert ei.preference == "I"
        assert ei.theta == -3.0
        assert ei.pci == 30

    def test_all_positive(self, engine: ScoringEngine) -> None:
        result = engine.score({n: "A" for n in range(1, 94)})
        assert result.type_code == "ESTJ"
        assert result.n_answered == 93
        assert result.n_omitted == 0
        assert all(r.pci == 30 for r in result.results.values())

    def test_all_negative(self, engine: ScoringEngine) -> None:
        result = engine.score({n: "B" for n in range(1, 94)})
        assert result.type_code == "INFP"
        assert all(r.theta == -3.0 for r in result.results.values())

    def test_single_answer(self, engine: ScoringEngine) -> None:
        # Item 1 is a J-P item
        result = engine.score({1: "A"})
        jp = result[Dichotomy.JP]
        assert jp.n_answered == 1
        assert jp.preference == "J"
        assert jp.theta == 3.0
        assert result.n_answered == 1


class TestInvariants:
    def test_results_in_fixed_order(self, engine: ScoringEngine) -> None:
        result = engine.score({2: "A", 1: "B"})
        assert list(result.results) == list(Dichotomy)

    def test_deterministic(self, engine: ScoringEngine) -> None:
        rng = np.random.default_rng(7)
        answers = {
            n: str(rng.choice(["A", "B"]))
            for n in range(1, 94)
            if rng.random() > 0.3
        }
        assert engine.score(answers) == engine.score(dict(answers))

    def test_answer_order_irrelevant(self, engine: ScoringEngine) -> None:
        answers = {n: ("A" if n % 3 else "B") for n in range(1, 94)}
        reversed_answers = dict(reversed(list(answers.items())))
        assert engine.score(answers) == engine.score(reversed_answers)

    def test_dichotomies_are_independent(
        self, engine: ScoringEngine, item_table: ItemParameterTable
    ) -> None:
        base = {n: ("A" if n % 2 else "B") for n in range(1, 94)}
        changed = dict(base)
        for n in _numbers(item_table, Dichotomy.EI):
            changed[n] = "A"

        before = engine.score(base)
        after = engine.score(changed)
        for dichotomy in (Dichotomy.SN, Dichotomy.TF, Dichotomy.JP):
            assert before[dichotomy] == after[dichotomy]

    def test_monotone_in_positive_answers(
        self, engine: ScoringEngine, item_table: ItemParameterTable
    ) -> None:
        numbers = _numbers(item_table, Dichotomy.TF)
        previous = -np.inf
        for n_positive in range(len(numbers) + 1):
            answers = {
                n: ("A" if i < n_positive else "B") for i, n in enumerate(numbers)
            }
            theta = engine.score(answers)[Dichotomy.TF].theta
            assert theta >= previous
            previous = theta

    def test_theta_and_pci_bounds(self, engine: ScoringEngine) -> None:
        rng = np.random.default_rng(11)
        for _ in range(25):
            answers = {
                n: str(rng.choice(["A", "B"]))
                for n in range(1, 94)
                if rng.random() > 0.5
            }
            for r in engine.score(answers).results.values():
                assert -3.0 <= r.theta <= 3.0
                assert 1 <= r.pci <= 30

    def test_type_code_matches_preferences(self, engine: ScoringEngine) -> None:
        result = engine.score({n: ("A" if n % 4 else "B") for n in range(1, 94)})
        assert result.type_code == "".join(
            result[d].preference for d in Dichotomy
        )


class TestKeyedScoring:
    def test_keyed_matches_choice_scoring(
        self, engine: ScoringEngine, item_table: ItemParameterTable
    ) -> None:
        answers = {n: ("A" if n % 5 < 3 else "B") for n in range(1, 94)}
        responses = {n - 1: (1 if c == "A" else 0) for n, c in answers.items()}
        assert engine.score(answers) == engine.score_keyed(responses)

    def test_keyed_scoring_needs_no_catalogue(
        self, item_table: ItemParameterTable
    ) -> None:
        engine = ScoringEngine(item_table=item_table)
        result = engine.score_keyed({i: 1 for i in range(item_table.n_items)})
        assert result.type_code == "ESTJ"

    def test_choice_scoring_needs_catalogue(
        self, item_table: ItemParameterTable
    ) -> None:
        engine = ScoringEngine(item_table=item_table)
        with pytest.raises(CatalogueNotConfiguredError):
            engine.score({1: "A"})


class TestCatalogueKeying:
    def test_reversed_keys(self, item_table: ItemParameterTable) -> None:
        """Option letters carry no meaning of their own; only score keys do."""
        reversed_catalogue = QuestionCatalogue.from_score_keys(
            [{"A": 0, "B": 1}] * item_table.n_items
        )
        engine = ScoringEngine(item_table=item_table, catalogue=reversed_catalogue)
        result = engine.score({n: "A" for n in range(1, 94)})
        assert result.type_code == "INFP"


def test_shared_engine_across_threads(engine: ScoringEngine) -> None:
    answer_sets = [
        {n: ("A" if (n + k) % 3 else "B") for n in range(1, 94)} for k in range(8)
    ]
    expected = [engine.score(answers) for answers in answer_sets]

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(engine.score, answer_sets * 4))

    assert results == expected * 4


def test_score_answers(
    catalogue: QuestionCatalogue, item_table: ItemParameterTable
) -> None:
    result = score_answers({n: "A" for n in range(1, 94)}, catalogue, item_table)
    assert result.type_code == "ESTJ"
    assert result.item_table_version == item_table.version


def test_standard_error_reported(
    engine: ScoringEngine, item_table: ItemParameterTable
) -> None:
    numbers = _numbers(item_table, Dichotomy.SN)
    answers = {n: ("A" if i % 2 else "B") for i, n in enumerate(numbers)}
    few = dict(list(answers.items())[:6])

    full_result = engine.score(answers)[Dichotomy.SN]
    few_result = engine.score(few)[Dichotomy.SN]

    assert full_result.standard_error is not None
    assert few_result.standard_error is not None
    assert full_result.standard_error > 0
    # More answered items carry more information
    assert full_result.standard_error < few_result.standard_error
    assert engine.score({})[Dichotomy.SN].standard_error is None
