# =============================================================================
# app/pipeline/ - Shared Request Pipeline
# =============================================================================
# Cross-cutting concerns every request passes through:
#
#   request -> [CORS gate] -> [error interceptor] -> router -> handler
#
# The CORS gate is the outermost layer so its Allow-Origin header also lands
# on the error responses written by the interceptor. Token verification is
# not part of the pipeline; protected routes opt in with
# Depends(require_token) (see app/auth/dependencies.py).
# =============================================================================

from fastapi import FastAPI

from app.pipeline.cors import CORSGate
from app.pipeline.errors import ErrorInterceptor, error_response, register_error_handling


def install_pipeline(app: FastAPI) -> None:
    """Wire the pipeline onto an app. Middleware added last runs first."""
    register_error_handling(app)
    app.add_middleware(CORSGate)


__all__ = [
    "CORSGate",
    "ErrorInterceptor",
    "error_response",
    "install_pipeline",
    "register_error_handling",
]
