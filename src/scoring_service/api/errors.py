import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from scoring_service.api.schemas import ErrorDetail
from scoring_service.core.errors import (
    CatalogueNotConfiguredError,
    ConfigurationError,
    InvalidResponseError,
    UnknownChoiceError,
    UnknownItemError,
)

logger = logging.getLogger(__name__)


class DataSizeExceededError(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def _get_request_id(request: Request) -> str | None:
    if hasattr(request.state, "request_id"):
        result: str = request.state.request_id
        return result
    return None


def _error_response(
    request: Request, status_code: int, code: str, message: str
) -> JSONResponse:
    detail = ErrorDetail(
        code=code,
        message=message,
        request_id=_get_request_id(request),
    )
    return JSONResponse(status_code=status_code, content=detail.model_dump())


async def data_size_exceeded_handler(
    request: Request, exc: DataSizeExceededError
) -> JSONResponse:
    return _error_response(request, 422, "DATA_SIZE_EXCEEDED", exc.message)


async def unknown_item_handler(
    request: Request, exc: UnknownItemError
) -> JSONResponse:
    return _error_response(request, 422, "UNKNOWN_ITEM", str(exc))


async def unknown_choice_handler(
    request: Request, exc: UnknownChoiceError
) -> JSONResponse:
    return _error_response(request, 422, "UNKNOWN_CHOICE", str(exc))


async def invalid_response_handler(
    request: Request, exc: InvalidResponseError
) -> JSONResponse:
    return _error_response(request, 422, "INVALID_RESPONSE", str(exc))


async def catalogue_not_configured_handler(
    request: Request, exc: CatalogueNotConfiguredError
) -> JSONResponse:
    return _error_response(request, 503, "CATALOGUE_NOT_CONFIGURED", str(exc))


async def configuration_error_handler(
    request: Request, exc: ConfigurationError
) -> JSONResponse:
    logger.error(f"Configuration error: {exc}")
    return _error_response(request, 500, "CONFIGURATION_ERROR", str(exc))


async def validation_error_handler(
    request: Request, exc: ValidationError
) -> JSONResponse:
    return _error_response(request, 422, "VALIDATION_ERROR", str(exc))


async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    logger.exception("Unhandled exception")
    return _error_response(
        request, 500, "INTERNAL_ERROR", "Internal server error"
    )
