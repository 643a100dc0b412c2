"""
Data models for the scoring engine.

This module defines the data structures for:
- Item: one calibrated questionnaire item (2PL parameters + dichotomy)
- KeyedResponse: an answered item reduced to its scored direction
- DichotomyResult: the reportable outcome for one dichotomy
- ScoringResult: the four dichotomy results for one respondent
"""

import math
from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from scoring_service.core.constants import (
    NEGATIVE_POLE,
    PCI_MAX,
    PCI_MIN,
    POSITIVE_POLE,
    THETA_LIMIT,
)
from scoring_service.irt.estimation.enums import ConvergenceStatus


class Dichotomy(StrEnum):
    """The four preference axes, declared in scoring order."""

    EI = "E-I"
    SN = "S-N"
    TF = "T-F"
    JP = "J-P"

    @property
    def poles(self) -> tuple[str, str]:
        """(positive pole, negative pole) letters, e.g. ("E", "I")."""
        positive, negative = self.value.split("-")
        return positive, negative


class ClarityCategory(StrEnum):
    SLIGHT = "Slight"
    MODERATE = "Moderate"
    CLEAR = "Clear"
    VERY_CLEAR = "Very Clear"


class Item(BaseModel):
    """
    Calibrated parameters for one questionnaire item.

    Attributes:
        item_id: 0-based item identifier, unique within the table.
        dichotomy: The single dichotomy this item scores.
        a: Discrimination (slope), strictly positive.
        b: Difficulty / location on the theta scale.
    """

    model_config = ConfigDict(frozen=True)

    item_id: int = Field(ge=0)
    dichotomy: Dichotomy
    a: float = Field(gt=0)
    b: float

    @field_validator("a", "b")
    @classmethod
    def _validate_finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError(f"item parameters must be finite, got {value}")
        return value


@dataclass(frozen=True)
class KeyedResponse:
    """
    An answered item with its scored direction.

    Attributes:
        item_id: 0-based item identifier.
        a: Item discrimination.
        b: Item difficulty.
        u: 1 if the chosen option keys to the positive pole (E, S, T, J),
            0 if it keys to the negative pole (I, N, F, P).
    """

    item_id: int
    a: float
    b: float
    u: int

    def __post_init__(self) -> None:
        if self.u not in (POSITIVE_POLE, NEGATIVE_POLE):
            raise ValueError(f"u must be 0 or 1, got {self.u}")


class DichotomyResult(BaseModel):
    """
    Reportable result for one dichotomy.

    Attributes:
        dichotomy: Which axis this result belongs to.
        theta: Trait estimate rounded to 2 decimals, within [-3, 3].
        preference: Reported letter after tie-break and midpoint adjustment.
        pci: Preference Clarity Index, 1..30.
        pcc: Preference Clarity Category derived from pci.
        n_answered: Number of answered items that entered the estimate.
        convergence_status: How the trait estimation terminated.
        standard_error: Standard error of the unrounded theta, or None when no
            items were answered.
    """

    model_config = ConfigDict(frozen=True)

    dichotomy: Dichotomy
    theta: float = Field(ge=-THETA_LIMIT, le=THETA_LIMIT)
    preference: str = Field(min_length=1, max_length=1)
    pci: int = Field(ge=PCI_MIN, le=PCI_MAX)
    pcc: ClarityCategory
    n_answered: int = Field(default=0, ge=0)
    convergence_status: ConvergenceStatus = ConvergenceStatus.NO_RESPONSES
    standard_error: float | None = Field(default=None, gt=0)


class ScoringResult(BaseModel):
    """
    Result of scoring one respondent across all four dichotomies.

    Attributes:
        results: Dichotomy results in E-I, S-N, T-F, J-P order.
        n_items: Number of items in the table used for scoring.
        item_table_version: Version of the item parameter table.
    """

    model_config = ConfigDict(frozen=True)

    results: dict[Dichotomy, DichotomyResult]
    n_items: int
    item_table_version: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def type_code(self) -> str:
        """Four-letter type code, one letter per dichotomy in scoring order."""
        return "".join(self.results[d].preference for d in Dichotomy)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def n_answered(self) -> int:
        """Number of answered items across all dichotomies."""
        return sum(r.n_answered for r in self.results.values())

    @computed_field  # type: ignore[prop-decorator]
    @property
    def n_omitted(self) -> int:
        """Number of table items without an answer."""
        return self.n_items - self.n_answered

    def __getitem__(self, dichotomy: Dichotomy | str) -> DichotomyResult:
        return self.results[Dichotomy(dichotomy)]


class Answer(BaseModel):
    """
    One respondent selection, as recorded in a raw answer log.

    Attributes:
        item_id: 0-based item identifier.
        choice: Identifier of the chosen option.
    """

    model_config = ConfigDict(frozen=True)

    item_id: int = Field(ge=0)
    choice: str
