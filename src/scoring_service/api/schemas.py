from typing import Literal

from pydantic import BaseModel

from scoring_service.core.data_models import (
    Answer,
    Dichotomy,
    DichotomyResult,
    ScoringResult,
)

# --- Request schemas ---


class ScoreRequest(BaseModel):
    """Answers keyed by 1-based item number; omitted items are left out."""

    answers: dict[int, str]
    include_raw_answers: bool = False


class KeyedScoreRequest(BaseModel):
    """Scored directions keyed by 1-based item number (1 = E/S/T/J pole)."""

    responses: dict[int, Literal[0, 1]]


# --- Response schemas ---


class ScoreResponse(BaseModel):
    type_code: str
    results: dict[Dichotomy, DichotomyResult]
    n_answered: int
    n_omitted: int
    item_table_version: str
    model_version: str
    raw_answers: list[Answer] | None = None

    @classmethod
    def from_domain(
        cls,
        result: ScoringResult,
        model_version: str,
        raw_answers: list[Answer] | None = None,
    ) -> "ScoreResponse":
        return cls(
            type_code=result.type_code,
            results=result.results,
            n_answered=result.n_answered,
            n_omitted=result.n_omitted,
            item_table_version=result.item_table_version,
            model_version=model_version,
            raw_answers=raw_answers,
        )


class ItemTableSummary(BaseModel):
    version: str
    n_items: int
    items_per_dichotomy: dict[Dichotomy, int]
    catalogue_configured: bool


class ErrorDetail(BaseModel):
    code: str
    message: str
    request_id: str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
