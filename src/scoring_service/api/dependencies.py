import logging
from functools import lru_cache

from fastapi import Request

from scoring_service.api.config import ApiSettings
from scoring_service.core.item_table import load_item_table
from scoring_service.core.questions import QuestionCatalogue
from scoring_service.scoring.engine import ScoringEngine

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_settings() -> ApiSettings:
    return ApiSettings()


_engine: ScoringEngine | None = None


def init_engine(settings: ApiSettings) -> ScoringEngine:
    global _engine  # noqa: PLW0603
    item_table = load_item_table(settings.item_table_path)
    catalogue = None
    if settings.catalogue_path is not None:
        catalogue = QuestionCatalogue.from_json(settings.catalogue_path)
    else:
        logger.warning(
            "No question catalogue configured; only keyed scoring is available"
        )
    _engine = ScoringEngine(item_table=item_table, catalogue=catalogue)
    return _engine


def get_engine() -> ScoringEngine:
    assert _engine is not None, "ScoringEngine not initialized"
    return _engine


def get_app_settings(request: Request) -> ApiSettings:
    result: ApiSettings = request.app.state.settings
    return result


def get_version() -> str:
    from scoring_service.irt.estimation.config import _get_project_version

    return _get_project_version()
