# =============================================================================
# app/auth/tokens.py - Token Issuing and Verification
# =============================================================================
# Stateless HMAC-signed JWTs built with python-jose.
#
# - TokenIssuer checks a username/password pair against the configured
#   values and signs a {valid_user: true} claim
# - TokenVerifier resolves a token from an explicit argument or the
#   Authorization header and checks its signature
#
# A token is accepted iff its signature verifies against the current shared
# secret. There is no expiry and no revocation list: rotating
# API_JWT_SECRET is the only way to invalidate issued tokens.
#
# Usage:
#   issuer = TokenIssuer(settings)
#   token = issuer.issue("user", "pass")
#
#   verifier = TokenVerifier(settings)
#   claims = verifier.require_token(f"Bearer {token}")
# =============================================================================

import logging
import time
from collections.abc import Mapping
from typing import Any, Optional

from jose import JWTError, jwt

from app.auth.models import TokenClaim
from app.config import Settings
from app.exceptions import InvalidCredentialsError, InvalidTokenError, MissingTokenError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

# Signature only: claim contents (exp, aud, nbf, ...) are never inspected
SIGNATURE_ONLY = {
    "verify_aud": False,
    "verify_iat": False,
    "verify_exp": False,
    "verify_nbf": False,
    "verify_iss": False,
    "verify_sub": False,
    "verify_jti": False,
    "verify_at_hash": False,
}


class TokenIssuer:
    """
    Mints bearer tokens for the one configured username/password pair.

    Comparisons are plain equality, not constant-time.
    """

    def __init__(self, settings: Settings):
        self._username = settings.API_USERNAME
        self._password = settings.API_PASSWORD
        self._secret = settings.API_JWT_SECRET
        self._algorithm = settings.JWT_ALGORITHM

    def credentials_match(self, username: str, password: str) -> bool:
        """Check a submitted pair against the configured credentials."""
        return username == self._username and password == self._password

    def sign(self, claims: Mapping[str, Any]) -> str:
        """Sign an arbitrary claim set with the shared secret."""
        return jwt.encode(dict(claims), self._secret, algorithm=self._algorithm)

    def issue(self, username: str, password: str) -> str:
        """
        Issue a token for a valid username/password pair.

        Args:
            username: Submitted username
            password: Submitted password

        Returns:
            str: Signed token carrying {valid_user: true, iat: <now>}

        Raises:
            InvalidCredentialsError: 401 if either value doesn't match
        """
        if not self.credentials_match(username, password):
            logger.warning("Token request rejected: invalid username or password")
            raise InvalidCredentialsError()

        claim = TokenClaim(valid_user=True, iat=int(time.time()))
        token = self.sign(claim.model_dump())
        logger.info("Issued bearer token")
        return token


class TokenVerifier:
    """Checks bearer tokens against the shared secret."""

    def __init__(self, settings: Settings):
        self._secret = settings.API_JWT_SECRET
        self._algorithm = settings.JWT_ALGORITHM

    def verify(self, token: str) -> dict[str, Any]:
        """
        Verify a token's signature and return its claims unchecked.

        Raises:
            InvalidTokenError: 401 if the token is malformed or the signature
                doesn't match
        """
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options=SIGNATURE_ONLY,
            )
        except JWTError as e:
            logger.warning(f"Token verification failed: {type(e).__name__}")
            raise InvalidTokenError() from e

    @staticmethod
    def resolve_token(
        authorization: Optional[str],
        manual_token: Optional[str] = None,
    ) -> Optional[str]:
        """
        Pick the token to verify.

        An explicit token wins and is used verbatim. Otherwise the
        Authorization header is used with a leading "Bearer " stripped.
        Returns None when neither was supplied.
        """
        if manual_token is not None:
            return str(manual_token)
        if authorization is None:
            return None
        return authorization.removeprefix(BEARER_PREFIX)

    def require_token(
        self,
        authorization: Optional[str],
        manual_token: Optional[str] = None,
    ) -> dict[str, Any]:
        """
        Guard for protected handlers.

        Args:
            authorization: Raw Authorization header value, if any
            manual_token: Token passed explicitly as a request argument, if any

        Returns:
            dict: The verified claims (not inspected further)

        Raises:
            MissingTokenError: 401 if no token was supplied at all
            InvalidTokenError: 401 if the token doesn't verify
        """
        token = self.resolve_token(authorization, manual_token)
        if token is None:
            raise MissingTokenError()
        return self.verify(token)
