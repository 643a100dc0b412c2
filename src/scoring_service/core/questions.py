"""
Question catalogue: the scoring direction of every answer option.

Each option carries a score key: 1 when choosing it expresses the positive
pole of the item's dichotomy (E, S, T, J), 0 for the negative pole (I, N, F, P).
The catalogue is only consulted at the keying boundary; the estimator never
sees choice identifiers.
"""

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from scoring_service.core.constants import (
    CATALOGUE_ROOT_KEY,
    NEGATIVE_POLE,
    POSITIVE_POLE,
)
from scoring_service.core.errors import (
    CatalogueError,
    UnknownChoiceError,
    UnknownItemError,
)

logger = logging.getLogger(__name__)


class QuestionOption(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str = ""
    score_key: Literal[0, 1] = Field(alias="scoreKey")


class Question(BaseModel):
    """
    One catalogue entry.

    Attributes:
        question: Prompt text (empty for word-pair items).
        part: Questionnaire part the item belongs to, if recorded.
        options: Choice key -> option. Both poles must be represented.
    """

    model_config = ConfigDict(frozen=True)

    question: str = ""
    part: str | None = None
    options: dict[str, QuestionOption]

    @model_validator(mode="after")
    def _validate_both_poles(self) -> "Question":
        if len(self.options) < 2:
            raise ValueError(
                f"Question must have at least 2 options, got {len(self.options)}"
            )
        keys = {option.score_key for option in self.options.values()}
        if keys != {NEGATIVE_POLE, POSITIVE_POLE}:
            raise ValueError(
                f"Question options must key to both poles, got {sorted(keys)}"
            )
        return self


class CatalogueDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    questions: list[Question] = Field(alias=CATALOGUE_ROOT_KEY)


class QuestionCatalogue:
    """
    Immutable lookup from (item id, choice key) to score key.

    Item ids are 0-based positions in the catalogue.
    """

    def __init__(self, questions: Sequence[Question]) -> None:
        if not questions:
            raise CatalogueError("Question catalogue is empty")
        self._questions = tuple(questions)

    @classmethod
    def from_json(cls, path: Path) -> "QuestionCatalogue":
        """
        Load a catalogue document.

        Expected shape:
            {"MBTI_Form_M": [{"question": ..., "options": {"A": {"text": ..., "scoreKey": 1}, ...}}, ...]}

        Raises:
            CatalogueError: If the file is missing or malformed.
        """
        try:
            text = path.read_text()
        except OSError as e:
            raise CatalogueError(f"Cannot read catalogue {path}: {e}") from e

        try:
            document = CatalogueDocument.model_validate_json(text)
        except ValidationError as e:
            raise CatalogueError(f"Invalid catalogue {path}: {e}") from e

        catalogue = cls(document.questions)
        logger.info(
            f"Loaded question catalogue: {catalogue.n_items} items from {path.name}"
        )
        return catalogue

    @classmethod
    def from_score_keys(
        cls, score_keys: Sequence[Mapping[str, int]]
    ) -> "QuestionCatalogue":
        """
        Build a catalogue from bare score keys, one mapping per item.

        Example:
            QuestionCatalogue.from_score_keys([{"A": 1, "B": 0}, {"A": 0, "B": 1}])
        """
        try:
            questions = [
                Question(
                    options={
                        choice: QuestionOption(score_key=key)  # type: ignore[arg-type]
                        for choice, key in options.items()
                    }
                )
                for options in score_keys
            ]
        except ValidationError as e:
            raise CatalogueError(f"Invalid score keys: {e}") from e
        return cls(questions)

    @property
    def n_items(self) -> int:
        return len(self._questions)

    def question(self, item_id: int) -> Question:
        if not 0 <= item_id < len(self._questions):
            raise UnknownItemError(item_id, source="question catalogue")
        return self._questions[item_id]

    def score_key(self, item_id: int, choice: str) -> int:
        """
        Scored direction of a choice.

        Raises:
            UnknownItemError: If the item is not in the catalogue.
            UnknownChoiceError: If the choice is not one of the item's options.
        """
        options = self.question(item_id).options
        if choice not in options:
            raise UnknownChoiceError(item_id, choice)
        return options[choice].score_key

    def choice_for(self, item_id: int, score_key: int) -> str:
        """First choice key of an item that scores in the given direction."""
        for choice, option in self.question(item_id).options.items():
            if option.score_key == score_key:
                return choice
        raise UnknownChoiceError(item_id, f"<score key {score_key}>")

    def __contains__(self, item_id: object) -> bool:
        return isinstance(item_id, int) and 0 <= item_id < len(self._questions)

    def __len__(self) -> int:
        return len(self._questions)
