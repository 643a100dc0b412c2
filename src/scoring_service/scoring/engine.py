"""
Scoring engine entry point.

Estimates theta for each dichotomy independently, in the fixed order
E-I, S-N, T-F, J-P, and resolves each estimate into a reportable result.
The engine holds only the immutable item table, its dichotomy index and the
question catalogue, so one instance can be shared across threads.
"""

import logging
from collections.abc import Mapping

from scoring_service.core.data_models import (
    Dichotomy,
    KeyedResponse,
    ScoringResult,
)
from scoring_service.core.errors import CatalogueNotConfiguredError
from scoring_service.core.item_table import (
    DichotomyIndex,
    ItemParameterTable,
    load_item_table,
)
from scoring_service.core.questions import QuestionCatalogue
from scoring_service.irt.estimation.abilities import ThetaEstimate, estimate_theta
from scoring_service.irt.estimation.config import ScoringConfig
from scoring_service.scoring.keying import (
    KeyedResponses,
    check_catalogue_alignment,
    key_answers,
    key_directions,
)
from scoring_service.scoring.preferences import resolve_estimate

logger = logging.getLogger(__name__)


class ScoringEngine:
    """
    Scores answer sets against a fixed item parameter table.

    Attributes:
        item_table: Calibrated item parameters.
        catalogue: Question catalogue used to key choices, if any.
        config: Solver configuration.
    """

    def __init__(
        self,
        item_table: ItemParameterTable | None = None,
        catalogue: QuestionCatalogue | None = None,
        config: ScoringConfig | None = None,
    ) -> None:
        self.item_table = item_table if item_table is not None else load_item_table()
        self.catalogue = catalogue
        self.config = config if config is not None else ScoringConfig()

        if catalogue is not None:
            check_catalogue_alignment(catalogue, self.item_table)

    @property
    def index(self) -> DichotomyIndex:
        return self.item_table.index

    def score(self, answers: Mapping[int, str]) -> ScoringResult:
        """
        Score a sparse answer set.

        Args:
            answers: 1-based item number -> chosen option key.

        Returns:
            ScoringResult with one DichotomyResult per dichotomy.

        Raises:
            CatalogueNotConfiguredError: If the engine has no catalogue.
            ConfigurationError: If an answer cannot be keyed.
        """
        if self.catalogue is None:
            raise CatalogueNotConfiguredError()
        keyed = key_answers(answers, self.catalogue, self.item_table)
        return self._score(keyed)

    def score_keyed(self, responses: Mapping[int, int]) -> ScoringResult:
        """
        Score responses that are already reduced to directions.

        Args:
            responses: 0-based item id -> 1 (positive pole) or 0 (negative pole).

        Returns:
            ScoringResult with one DichotomyResult per dichotomy.
        """
        keyed = key_directions(responses, self.item_table)
        return self._score(keyed)

    def estimate(self, responses: tuple[KeyedResponse, ...]) -> ThetaEstimate:
        """Theta estimate for the keyed responses of a single dichotomy."""
        return estimate_theta(
            [r.a for r in responses],
            [r.b for r in responses],
            [r.u for r in responses],
            config=self.config.estimation,
        )

    def _score(self, keyed: KeyedResponses) -> ScoringResult:
        results = {}
        for dichotomy in Dichotomy:
            estimate = self.estimate(keyed.get(dichotomy, ()))
            logger.debug(
                f"{dichotomy.value}: theta = {estimate.theta:.4f} from "
                f"{estimate.n_items} items ({estimate.convergence_status.value})"
            )
            results[dichotomy] = resolve_estimate(dichotomy, estimate)

        result = ScoringResult(
            results=results,
            n_items=self.item_table.n_items,
            item_table_version=self.item_table.version,
        )
        logger.debug(
            f"Scored {result.n_answered}/{result.n_items} answered items: "
            f"{result.type_code}"
        )
        return result


def score_answers(
    answers: Mapping[int, str],
    catalogue: QuestionCatalogue,
    item_table: ItemParameterTable | None = None,
) -> ScoringResult:
    """Score one answer set with a throwaway engine."""
    return ScoringEngine(item_table=item_table, catalogue=catalogue).score(answers)
