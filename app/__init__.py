# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App factory, logging setup, entry point
# - config.py: Environment variable loading and settings
# - exceptions.py: User-facing ApiError types
# - pipeline/: CORS gate and error interceptor shared by every request
# - auth/: Token issuing/verification and the routes that use it
# - routers/: Diagnostic endpoints
# =============================================================================

__version__ = "0.1.0"
