# =============================================================================
# app/pipeline/errors.py - Error Interceptor
# =============================================================================
# Single place where failure responses are written.
#
# Every error raised while routing or handling a request ends up here:
# - ApiError            -> its own status and headers, {"status", "message"} verbatim
# - anything else       -> 500, fixed message, original logged for operators
#
# Framework errors (unknown route, wrong method, parameter validation) are
# turned into ApiError by the exception hooks below, so they reach the
# interceptor and share the same envelope.
# =============================================================================

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from app.exceptions import ApiError, InvalidRequestError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_STATUS = 500
INTERNAL_ERROR_MESSAGE = "Internal server error."


def error_response(exc: Exception) -> JSONResponse:
    """
    Render an exception into the API error envelope.

    ApiError messages are user-facing and copied as-is. Every other
    exception gets the generic 500 body; its text never leaves the server.
    """
    if isinstance(exc, ApiError):
        return JSONResponse(
            status_code=exc.status,
            content=exc.to_dict(),
            headers=exc.headers or None,
        )

    return JSONResponse(
        status_code=INTERNAL_ERROR_STATUS,
        content={
            "status": INTERNAL_ERROR_STATUS,
            "message": INTERNAL_ERROR_MESSAGE,
        },
    )


class ErrorInterceptor(BaseHTTPMiddleware):
    """Catch every error raised below this point and write one JSON response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except ApiError as exc:
            logger.warning(
                f"{request.method} {request.url.path} failed with {exc.status}: {exc.message}"
            )
            return error_response(exc)
        except Exception as exc:
            logger.exception(
                f"Unhandled error on {request.method} {request.url.path}: {exc!r}"
            )
            return error_response(exc)


# =============================================================================
# Framework Exception Hooks
# =============================================================================

def _describe_validation_errors(errors: list[dict[str, Any]]) -> str:
    """
    Flatten pydantic validation errors into one display message.

    Example: [{"loc": ("query", "n"), "msg": "Input should be a valid integer"}]
             -> "Invalid request: query.n: Input should be a valid integer"
    """
    parts = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    if not parts:
        return "Invalid request."
    return "Invalid request: " + "; ".join(parts)


async def reclassify_http_exception(
    request: Request,
    exc: StarletteHTTPException
) -> Response:
    """Re-raise routing errors (404, 405, ...) as ApiError for the interceptor."""
    raise ApiError(
        str(exc.detail),
        exc.status_code,
        headers=getattr(exc, "headers", None),
    ) from exc


async def reclassify_validation_error(
    request: Request,
    exc: RequestValidationError
) -> Response:
    """Re-raise request validation errors as ApiError for the interceptor."""
    raise InvalidRequestError(_describe_validation_errors(exc.errors()), 422) from exc


def register_error_handling(app: FastAPI) -> None:
    """
    Install the error interceptor and the framework hooks that feed it.

    Must run before any middleware that should see the rendered error
    responses (e.g. the CORS gate) is added.
    """
    app.add_exception_handler(StarletteHTTPException, reclassify_http_exception)
    app.add_exception_handler(RequestValidationError, reclassify_validation_error)
    app.add_middleware(ErrorInterceptor)
