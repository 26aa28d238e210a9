"""OAuth 2.0 authorization code flow.

OAuth2Strategy implements the protocol; provider strategies override its
hooks for the endpoints and profile of a specific provider.
"""
from .exceptions import (
    OAuthError,
    OAuthUserInfoError,
    ProtocolValidationError,
    TokenExchangeError,
    VerificationError,
)
from .factory import create_strategy, enabled_providers
from .models import AuthenticateOptions, AuthRequest, StrategyConfig, TokenResult
from .outcomes import (
    Authenticated,
    AuthOutcome,
    ErrorResponse,
    Redirect,
    Verified,
    VerifyFailure,
    VerifyResult,
)
from .providers import (
    GitHubOAuth2Strategy,
    GoogleOAuth2Strategy,
    ProviderOAuth2Strategy,
)
from .state import generate_state
from .strategy import OAuth2Strategy

__all__ = [
    # Exceptions
    "OAuthError",
    "OAuthUserInfoError",
    "ProtocolValidationError",
    "TokenExchangeError",
    "VerificationError",
    # Models
    "AuthenticateOptions",
    "AuthRequest",
    "StrategyConfig",
    "TokenResult",
    # Outcomes
    "Authenticated",
    "AuthOutcome",
    "ErrorResponse",
    "Redirect",
    "Verified",
    "VerifyFailure",
    "VerifyResult",
    # Strategies
    "OAuth2Strategy",
    "ProviderOAuth2Strategy",
    "GoogleOAuth2Strategy",
    "GitHubOAuth2Strategy",
    "generate_state",
    # Factory
    "create_strategy",
    "enabled_providers",
]
