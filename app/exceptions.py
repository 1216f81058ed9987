# =============================================================================
# app/exceptions.py - User-Facing Error Types
# =============================================================================
# ApiError is the only way a component signals a failure that the caller is
# allowed to see. Anything else that escapes a handler is treated as an
# internal error and masked by the error interceptor (app/pipeline/errors.py).
#
# Usage:
#   from app.exceptions import ApiError
#
#   if n >= 10_000:
#       raise ApiError("`n` is too big. Use a number less than 10,000.", 400)
# =============================================================================

from collections.abc import Mapping
from typing import Any, Optional


class ApiError(Exception):
    """
    User-facing error carrying an HTTP status code.

    The message is rendered verbatim in the response body, so it must be
    safe for display. Optional headers (e.g. Allow on a 405) are sent with
    the response but never appear in the body. Instances are read-only once
    constructed.
    """

    def __init__(
        self,
        message: str,
        status: int = 400,
        headers: Optional[Mapping[str, str]] = None,
    ):
        super().__init__(message)
        self._message = message
        self._status = int(status)
        self._headers = dict(headers or {})

    @property
    def message(self) -> str:
        return self._message

    @property
    def status(self) -> int:
        return self._status

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to the API error envelope."""
        return {
            "status": self.status,
            "message": self.message,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, status={self.status})"


# =============================================================================
# Authentication Exceptions
# =============================================================================

class InvalidCredentialsError(ApiError):
    """Raised by /get_token when the username/password pair doesn't match."""

    def __init__(self):
        super().__init__(message="Invalid username or password", status=401)


class WrongCredentialsError(ApiError):
    """Raised by the plain secret_data routes on a credential mismatch."""

    def __init__(self):
        super().__init__(message="Wrong username or password!", status=401)


class MissingTokenError(ApiError):
    """Raised when a protected route receives neither header nor manual token."""

    def __init__(self):
        super().__init__(message="No token provided", status=401)


class InvalidTokenError(ApiError):
    """Raised when a token is malformed or its signature doesn't verify."""

    def __init__(self):
        super().__init__(message="Token is wrong", status=401)


# =============================================================================
# Request Exceptions
# =============================================================================

class InvalidRequestError(ApiError):
    """Raised when request parameters can't be parsed or validated."""

    def __init__(self, message: str = "Invalid request parameters.", status: int = 400):
        super().__init__(message=message, status=status)
