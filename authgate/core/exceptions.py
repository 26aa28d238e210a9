"""Exception hierarchy for AuthGate.

Every error the authentication flow can terminate with derives from
AuthGateException, which carries the HTTP status the host should answer with.

Error codes follow pattern: [CATEGORY][NUMBER]
- OAU: OAuth protocol / provider errors (100-199)
- SYS: System and configuration errors (400-499)
"""

from __future__ import annotations

from typing import Any


class AuthGateException(Exception):
    """Base exception for all AuthGate errors.

    All custom exceptions inherit from this to enable centralized error handling.
    """

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        """Initialize exception with message and metadata.

        Args:
            message: Human-readable error message, surfaced to the client as-is
            code: Unique error code (e.g., "OAU100")
            status_code: HTTP status code (default: 400 Bad Request)
            details: Optional additional context (never sent to the client)
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response format."""
        return {"message": self.message}


# ============================================================================
# SYSTEM ERRORS (SYS400-499)
# ============================================================================

class ConfigurationError(AuthGateException):
    """Strategy configuration is invalid or missing."""

    def __init__(self, parameter: str):
        message = f"Configuration error: {parameter} is not configured properly"
        super().__init__(
            message=message,
            code="SYS401",
            status_code=500,
            details={"parameter": parameter},
        )
