from fastapi import APIRouter, Depends

from scoring_service.api.config import ApiSettings
from scoring_service.api.dependencies import (
    get_app_settings,
    get_engine,
    get_version,
)
from scoring_service.api.errors import DataSizeExceededError
from scoring_service.api.schemas import (
    HealthResponse,
    ItemTableSummary,
    KeyedScoreRequest,
    ScoreRequest,
    ScoreResponse,
)
from scoring_service.scoring.engine import ScoringEngine
from scoring_service.scoring.keying import answers_to_log, item_number_to_id

router = APIRouter(prefix="/api/v1")


def _check_size(n_answers: int, settings: ApiSettings) -> None:
    if n_answers > settings.max_answers:
        raise DataSizeExceededError(
            f"Got {n_answers} answers, limit is {settings.max_answers}"
        )


@router.post("/score")
async def score(
    request: ScoreRequest,
    engine: ScoringEngine = Depends(get_engine),
    settings: ApiSettings = Depends(get_app_settings),
) -> ScoreResponse:
    _check_size(len(request.answers), settings)
    result = engine.score(request.answers)
    raw_answers = (
        answers_to_log(request.answers) if request.include_raw_answers else None
    )
    return ScoreResponse.from_domain(
        result, engine.config.model_version, raw_answers=raw_answers
    )


@router.post("/score/keyed")
async def score_keyed(
    request: KeyedScoreRequest,
    engine: ScoringEngine = Depends(get_engine),
    settings: ApiSettings = Depends(get_app_settings),
) -> ScoreResponse:
    _check_size(len(request.responses), settings)
    responses = {
        item_number_to_id(number): u for number, u in request.responses.items()
    }
    result = engine.score_keyed(responses)
    return ScoreResponse.from_domain(result, engine.config.model_version)


@router.get("/items")
async def item_table_summary(
    engine: ScoringEngine = Depends(get_engine),
) -> ItemTableSummary:
    return ItemTableSummary(
        version=engine.item_table.version,
        n_items=engine.item_table.n_items,
        items_per_dichotomy=engine.index.counts(),
        catalogue_configured=engine.catalogue is not None,
    )


@router.get("/health")
async def health_check(
    version: str = Depends(get_version),
) -> HealthResponse:
    return HealthResponse(version=version)
