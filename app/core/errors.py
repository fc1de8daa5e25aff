"""API error types and their translation to HTTP responses."""

import logging

from fastapi import Request
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base error surfaced to clients with a fixed status code."""

    status_code = 500
    default_detail = "Internal server error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class InvalidInputError(ApiError):
    """A required parameter is missing or a value cannot be used."""

    status_code = 400
    default_detail = "Invalid input"


class NotFoundError(ApiError):
    """A single-record lookup matched nothing."""

    status_code = 404
    default_detail = "Not found"


def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
    else:
        logger.info(
            "%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.detail
        )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
