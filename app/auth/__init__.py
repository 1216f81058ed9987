# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides HMAC-signed JWT authentication against one configured
# username/password pair.
#
# Usage:
#   from app.auth import require_token
#
#   @router.post("/protected")
#   async def protected(_: dict = Depends(require_token)):
#       return "secret"
# =============================================================================

from app.auth.dependencies import get_token_issuer, get_token_verifier, require_token
from app.auth.models import Credentials, TokenClaim, TokenResponse
from app.auth.tokens import TokenIssuer, TokenVerifier

__all__ = [
    "require_token",
    "get_token_issuer",
    "get_token_verifier",
    "Credentials",
    "TokenClaim",
    "TokenResponse",
    "TokenIssuer",
    "TokenVerifier",
]
