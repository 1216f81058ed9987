# =============================================================================
# app/pipeline/cors.py - CORS Gate
# =============================================================================
# Runs before routing on every request.
#
# - Every response gets Access-Control-Allow-Origin: *
# - OPTIONS (preflight) requests are answered here with an empty 200 and
#   never reach a route handler
#
# Allow-Headers echoes whatever the browser asked for instead of "*":
# browsers ignore the wildcard for requests carrying an Authorization header.
# =============================================================================

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

ALLOW_ORIGIN = "*"
ALLOW_METHODS = "*"


class CORSGate(BaseHTTPMiddleware):
    """Short-circuit preflight probes and annotate all other responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method == "OPTIONS":
            response = preflight_response(request)
        else:
            response = await call_next(request)

        response.headers["Access-Control-Allow-Origin"] = ALLOW_ORIGIN
        return response


def preflight_response(request: Request) -> Response:
    """Build the empty 200 answer to a preflight probe."""
    requested_headers = request.headers.get("access-control-request-headers", "")
    logger.debug(f"Preflight for {request.url.path} (headers: {requested_headers!r})")

    return Response(
        status_code=200,
        headers={
            "Access-Control-Allow-Methods": ALLOW_METHODS,
            "Access-Control-Allow-Headers": requested_headers,
        },
    )
