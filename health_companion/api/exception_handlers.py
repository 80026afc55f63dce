from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from health_companion.api.schemas import ErrorOut
from health_companion.core.middleware.http_logging import request_id_of
from health_companion.domain.exceptions import CallerInputError, NotAuthenticatedError

logger = logging.getLogger("health_companion.request_validation")

INVALID_REQUEST_MSG = "请求参数无效"


def error_response(*, status_code: int, msg: str) -> JSONResponse:
    """Render a failure in the `{code, msg}` envelope the mobile client expects."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorOut(code=status_code, msg=msg).model_dump(by_alias=True),
    )


def _log_rejection(request: Request, *, status_code: int, error: str) -> None:
    # Request bodies are never logged; they may contain symptoms or questions.
    logger.info(
        "Request rejected",
        extra={
            "request_id": request_id_of(request),
            "http_method": request.method,
            "request_path": request.url.path,
            "status_code": status_code,
            "error": error,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register application exception handlers."""

    @app.exception_handler(CallerInputError)
    async def handle_caller_input_error(request: Request, exc: CallerInputError) -> JSONResponse:
        _log_rejection(request, status_code=status.HTTP_400_BAD_REQUEST, error="caller_input")
        return error_response(status_code=status.HTTP_400_BAD_REQUEST, msg=exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        _log_rejection(request, status_code=status.HTTP_400_BAD_REQUEST, error="request_validation")
        return error_response(status_code=status.HTTP_400_BAD_REQUEST, msg=INVALID_REQUEST_MSG)

    @app.exception_handler(NotAuthenticatedError)
    async def handle_not_authenticated(request: Request, exc: NotAuthenticatedError) -> JSONResponse:
        _log_rejection(request, status_code=status.HTTP_401_UNAUTHORIZED, error="not_authenticated")
        return error_response(status_code=status.HTTP_401_UNAUTHORIZED, msg=exc.message)
