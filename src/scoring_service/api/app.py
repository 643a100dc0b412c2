import uuid
from collections.abc import Awaitable, Callable
from typing import cast

from fastapi import FastAPI, Request, Response
from pydantic import ValidationError
from starlette.types import ExceptionHandler

from scoring_service.api.config import ApiSettings
from scoring_service.api.dependencies import get_settings, init_engine
from scoring_service.api.errors import (
    DataSizeExceededError,
    catalogue_not_configured_handler,
    configuration_error_handler,
    data_size_exceeded_handler,
    invalid_response_handler,
    unhandled_exception_handler,
    unknown_choice_handler,
    unknown_item_handler,
    validation_error_handler,
)
from scoring_service.api.routes import router
from scoring_service.core.errors import (
    CatalogueNotConfiguredError,
    ConfigurationError,
    InvalidResponseError,
    UnknownChoiceError,
    UnknownItemError,
)


def create_app(settings: ApiSettings | None = None) -> FastAPI:
    if settings is None:
        settings = get_settings()

    app = FastAPI(title="Preference Scoring API")
    app.state.settings = settings
    init_engine(settings)

    # Exception handlers — cast needed because FastAPI expects
    # (Request, Exception) but our handlers use specific exc types.
    handlers: list[tuple[type[Exception], object]] = [
        (DataSizeExceededError, data_size_exceeded_handler),
        (UnknownItemError, unknown_item_handler),
        (UnknownChoiceError, unknown_choice_handler),
        (InvalidResponseError, invalid_response_handler),
        (CatalogueNotConfiguredError, catalogue_not_configured_handler),
        (ConfigurationError, configuration_error_handler),
        (ValidationError, validation_error_handler),
    ]
    for exc_class, handler in handlers:
        app.add_exception_handler(exc_class, cast(ExceptionHandler, handler))
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Request-ID middleware
    @app.middleware("http")
    async def request_id_middleware(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get("X-Request-ID", uuid.uuid4().hex[:12])
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    app.include_router(router)

    return app
