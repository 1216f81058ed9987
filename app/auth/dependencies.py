# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# The issuer and verifier are built once in create_app() from the app's
# Settings and stored on app.state; these dependencies hand them out.
#
# Usage:
#   from app.auth import require_token
#
#   @router.post("/protected")
#   async def protected(_: dict = Depends(require_token)):
#       return "secret"
# =============================================================================

import logging
from typing import Annotated, Any, Optional

from fastapi import Depends, Header, Request
from pydantic import ValidationError

from app.auth.models import Credentials
from app.auth.tokens import TokenIssuer, TokenVerifier
from app.dependencies import RequestParams
from app.exceptions import InvalidRequestError

logger = logging.getLogger(__name__)


def get_token_issuer(request: Request) -> TokenIssuer:
    """Get the app's TokenIssuer."""
    return request.app.state.token_issuer


def get_token_verifier(request: Request) -> TokenVerifier:
    """Get the app's TokenVerifier."""
    return request.app.state.token_verifier


async def get_credentials(params: RequestParams) -> Credentials:
    """
    Read username/password from the merged request arguments.

    Raises:
        InvalidRequestError: 400 if either value isn't a string
    """
    try:
        return Credentials.model_validate(params)
    except ValidationError as e:
        logger.debug(f"Rejected credential arguments: {e.error_count()} error(s)")
        raise InvalidRequestError("username and password must be strings.") from e


async def require_token(
    params: RequestParams,
    verifier: Annotated[TokenVerifier, Depends(get_token_verifier)],
    authorization: Annotated[Optional[str], Header()] = None,
) -> dict[str, Any]:
    """
    Require a valid bearer token for the route.

    The token comes from a `manual_token` request argument if present,
    otherwise from the `Authorization: Bearer <token>` header.

    Returns:
        dict: The verified token claims

    Raises:
        MissingTokenError: 401 if no token was supplied
        InvalidTokenError: 401 if the token doesn't verify
    """
    return verifier.require_token(authorization, params.get("manual_token"))


# Type aliases for dependency injection
IssuerDep = Annotated[TokenIssuer, Depends(get_token_issuer)]
VerifierDep = Annotated[TokenVerifier, Depends(get_token_verifier)]
CredentialsDep = Annotated[Credentials, Depends(get_credentials)]
TokenClaims = Annotated[dict[str, Any], Depends(require_token)]
