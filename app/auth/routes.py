# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for issuing tokens and a few endpoints guarded by different
# styles of authentication:
#
# - /secret_data         credentials in the query string (unsafe, kept as demo)
# - /secret_data_better  credentials in the request body
# - /secret_data_jwt     bearer token from /get_token
#
# Arguments may come from the query string, a JSON object body or a form body.
# =============================================================================

from fastapi import APIRouter

from app.auth.dependencies import CredentialsDep, IssuerDep, TokenClaims
from app.auth.models import Credentials, TokenResponse
from app.auth.tokens import TokenIssuer
from app.exceptions import WrongCredentialsError

router = APIRouter()

SECRET_DATA = "Here's some secret data"


def _check_credentials(issuer: TokenIssuer, credentials: Credentials) -> None:
    if not issuer.credentials_match(credentials.username, credentials.password):
        raise WrongCredentialsError()


@router.post("/get_token", response_model=TokenResponse)
async def get_token(credentials: CredentialsDep, issuer: IssuerDep) -> TokenResponse:
    """
    Exchange a username/password pair for a bearer token.

    Returns:
        TokenResponse: {"token": "<jwt>"}

    Raises:
        401: If the username or password is wrong
    """
    token = issuer.issue(credentials.username, credentials.password)
    return TokenResponse(token=token)


@router.get("/secret_data")
async def secret_data(credentials: CredentialsDep, issuer: IssuerDep) -> str:
    """
    Super unsafe secret thing: credentials travel in the URL.

    Raises:
        401: If the username or password is wrong
    """
    _check_credentials(issuer, credentials)
    return SECRET_DATA


@router.post("/secret_data_better")
async def secret_data_better(credentials: CredentialsDep, issuer: IssuerDep) -> str:
    """
    Slightly better secret thing: credentials travel in the request body.

    Raises:
        401: If the username or password is wrong
    """
    _check_credentials(issuer, credentials)
    return SECRET_DATA


@router.post("/secret_data_jwt")
async def secret_data_jwt(_: TokenClaims) -> str:
    """
    Secret thing behind a bearer token.

    Send the token from /get_token as `Authorization: Bearer <token>`, or
    pass it as the `manual_token` argument.

    Raises:
        401: If no token was supplied or it doesn't verify
    """
    return SECRET_DATA
