from pathlib import Path

from pydantic_settings import BaseSettings

SCORING_ENV_PREFIX = "SCORING_"


class ApiSettings(BaseSettings):
    model_config = {"env_prefix": SCORING_ENV_PREFIX}

    host: str = "127.0.0.1"
    port: int = 8000
    # Answer-keyed scoring is disabled until a catalogue is configured
    catalogue_path: Path | None = None
    item_table_path: Path | None = None
    max_answers: int = 500
