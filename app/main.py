# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the API.
# It configures the FastAPI application with the request pipeline, the
# token issuer/verifier and the routers.
#
# Usage:
#   uvicorn app.main:app --reload
#   pipeline-api                      (console script, runs main())
# =============================================================================

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from app import __version__
from app.auth import routes as auth_routes
from app.auth.tokens import TokenIssuer, TokenVerifier
from app.config import Settings, get_settings
from app.pipeline import install_pipeline
from app.routers import health

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging once per process."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=LOG_FORMAT,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Settings, issuer and verifier are built before startup and never change
    afterwards, so there is nothing to open or close here beyond logging.
    """
    settings: Settings = app.state.settings
    logger.info(f"Starting API in {settings.ENVIRONMENT} mode")
    logger.info(f"Signing tokens with {settings.JWT_ALGORITHM}")

    yield

    logger.info("Shutting down API")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Configuration to use. Defaults to get_settings(); tests
            pass their own to inject fake credentials.

    Returns:
        FastAPI: App with the pipeline installed and all routers mounted
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Pipeline Example API",
        description="""
## Data and diagnostic endpoints behind a shared request pipeline

Every request passes through:

1. **CORS gate** - answers preflight `OPTIONS` requests, adds `Access-Control-Allow-Origin: *`
2. **Error interceptor** - renders every failure as `{"status": <int>, "message": <str>}`

Protected endpoints additionally require a bearer token.

### Quick Start

```bash
# 1. Get a token
curl -X POST http://localhost:6312/get_token \\
  -H "Content-Type: application/json" \\
  -d '{"username": "...", "password": "..."}'

# 2. Call a protected endpoint
curl -X POST http://localhost:6312/secret_data_jwt \\
  -H "Authorization: Bearer <token>"
```
""",
        version=__version__,
        lifespan=lifespan,
        license_info={"name": "MIT", "url": "https://opensource.org/license/mit/"},
        openapi_tags=[
            {
                "name": "Authentication",
                "description": "Endpoints for illustrating authentication",
            },
            {
                "name": "Health",
                "description": "Endpoints for testing to make sure things are working",
            },
        ],
    )

    app.state.settings = settings
    app.state.token_issuer = TokenIssuer(settings)
    app.state.token_verifier = TokenVerifier(settings)

    # =========================================================================
    # Pipeline (CORS gate -> error interceptor)
    # =========================================================================

    install_pipeline(app)

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(auth_routes.router, tags=["Authentication"])
    app.include_router(health.router, tags=["Health"])

    @app.get("/", tags=["Health"])
    async def root():
        """
        Root endpoint - returns API info.
        """
        return {
            "name": app.title,
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    return app


app = create_app()


def main() -> None:
    """Run the application with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        app,
        host=settings.API_HOST,
        port=settings.API_PORT,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
