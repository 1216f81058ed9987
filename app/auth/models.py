# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for credentials, issued tokens and token claims.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    """
    Username/password pair submitted with a request.

    Missing fields default to empty strings, which never match the
    configured values (both are required to be non-empty).
    """
    model_config = ConfigDict(extra="ignore", frozen=True)

    username: str = ""
    password: str = Field(default="", repr=False)


class TokenResponse(BaseModel):
    """Body returned by POST /get_token."""
    token: str


class TokenClaim(BaseModel):
    """
    Claims embedded in an issued token.

    There is no exp claim: a token stays valid until the signing secret
    changes. Extra claims are allowed so callers can sign richer payloads.
    """
    model_config = ConfigDict(extra="allow", frozen=True)

    valid_user: bool
    iat: int  # Issued at (epoch seconds)
