"""OAuth flow exceptions."""
from __future__ import annotations

from authgate.core.exceptions import AuthGateException


class OAuthError(AuthGateException):
    """Base class for errors that terminate an OAuth authentication attempt."""


class ProtocolValidationError(OAuthError):
    """Raised when the provider callback is missing or fails state/code checks."""

    def __init__(self, message: str):
        super().__init__(message=message, code="OAU100", status_code=400)


class TokenExchangeError(OAuthError):
    """Raised when the token endpoint rejects the exchange or cannot be read.

    The message is the raw provider response text when one is available.
    """

    def __init__(self, message: str, upstream_status: int | None = None):
        super().__init__(
            message=message,
            code="OAU101",
            status_code=401,
            details={"upstream_status": upstream_status} if upstream_status else {},
        )


class OAuthUserInfoError(OAuthError):
    """Raised when fetching the provider profile fails."""

    def __init__(self, message: str, upstream_status: int | None = None):
        super().__init__(
            message=message,
            code="OAU102",
            status_code=401,
            details={"upstream_status": upstream_status} if upstream_status else {},
        )


class VerificationError(OAuthError):
    """Raised by application verify callbacks to reject a user.

    Any exception works; this one just reads better at call sites.
    """

    def __init__(self, message: str):
        super().__init__(message=message, code="OAU103", status_code=401)
