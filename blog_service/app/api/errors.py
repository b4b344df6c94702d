from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..exceptions import (
    INVALID_BODY_MESSAGE,
    InvalidRequestBodyError,
    PostNotFoundError,
    PostValidationError,
)


logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"

# legacy 모드에서 400 으로 응답하는 not-found 작업
_LEGACY_BAD_REQUEST_ACTIONS = frozenset({"update", "delete"})


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def handle_post_validation_error(
    request: Request, exc: PostValidationError
) -> JSONResponse:
    return error_response(400, exc.message)


async def handle_invalid_request_body(
    request: Request, exc: InvalidRequestBodyError
) -> JSONResponse:
    return error_response(400, exc.message)


async def handle_post_not_found(request: Request, exc: PostNotFoundError) -> JSONResponse:
    """기본은 404 로 통일하고, legacy 모드에서는 update/delete 만 400 으로 응답한다."""

    status_code = 404
    if (
        request.app.state.config.api.legacy_not_found_status
        and exc.action in _LEGACY_BAD_REQUEST_ACTIONS
    ):
        status_code = 400
    return error_response(status_code, exc.message)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info("rejected request body: %s", exc.errors())
    return error_response(400, INVALID_BODY_MESSAGE)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    # 저장소 장애 등 예상하지 못한 오류는 여기서만 500 으로 변환한다.
    logger.error("unhandled error while processing request", exc_info=exc)
    return error_response(500, INTERNAL_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PostValidationError, handle_post_validation_error)
    app.add_exception_handler(InvalidRequestBodyError, handle_invalid_request_body)
    app.add_exception_handler(PostNotFoundError, handle_post_not_found)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
