# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
#
# Authentication routes live with the auth module (app/auth/routes.py).
# Each router is mounted in main.py.
# =============================================================================

from . import health

__all__ = [
    "health",
]
