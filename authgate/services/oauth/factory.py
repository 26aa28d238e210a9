"""Factory functions for creating configured OAuth strategies."""
import logging

from authgate.core.config import BaseAppSettings, settings as default_settings
from authgate.core.exceptions import ConfigurationError

from .models import StrategyConfig
from .providers import GitHubOAuth2Strategy, GoogleOAuth2Strategy
from .strategy import OAuth2Strategy, VerifyCallback

logger = logging.getLogger(__name__)


def create_strategy(
    provider: str,
    verify: VerifyCallback,
    settings: BaseAppSettings | None = None,
) -> OAuth2Strategy:
    """
    Create a strategy for `provider` from application settings.

    Args:
        provider: "oauth2" (generic endpoints), "google" or "github"
        verify: Application callback resolving the user
        settings: Settings to read from (defaults to the loaded app settings)

    Returns:
        Configured strategy

    Raises:
        ConfigurationError: If the provider's settings are missing
        ValueError: If the provider is unknown
    """
    settings = settings or default_settings
    timeout = settings.OAUTH2_HTTP_TIMEOUT

    if provider == "oauth2":
        strategy = OAuth2Strategy(StrategyConfig.from_settings(settings), verify, timeout=timeout)
    elif provider == "google":
        if not (settings.GOOGLE_CLIENT_ID and settings.GOOGLE_CLIENT_SECRET):
            raise ConfigurationError("GOOGLE_CLIENT_ID/GOOGLE_CLIENT_SECRET")
        strategy = GoogleOAuth2Strategy(
            client_id=settings.GOOGLE_CLIENT_ID,
            client_secret=settings.GOOGLE_CLIENT_SECRET,
            callback_url=f"/auth/{GoogleOAuth2Strategy.name}/callback",
            verify=verify,
            timeout=timeout,
        )
    elif provider == "github":
        if not (settings.GITHUB_CLIENT_ID and settings.GITHUB_CLIENT_SECRET):
            raise ConfigurationError("GITHUB_CLIENT_ID/GITHUB_CLIENT_SECRET")
        strategy = GitHubOAuth2Strategy(
            client_id=settings.GITHUB_CLIENT_ID,
            client_secret=settings.GITHUB_CLIENT_SECRET,
            callback_url=f"/auth/{GitHubOAuth2Strategy.name}/callback",
            verify=verify,
            timeout=timeout,
        )
    else:
        raise ValueError(f"OAuth provider '{provider}' not supported")

    logger.info("OAuth strategy enabled: %s", provider)
    return strategy


def enabled_providers(settings: BaseAppSettings | None = None) -> list[str]:
    """List the providers whose credentials are present in settings."""
    settings = settings or default_settings
    providers = []
    if settings.OAUTH2_AUTHORIZATION_URL and settings.OAUTH2_TOKEN_URL and settings.OAUTH2_CLIENT_ID:
        providers.append("oauth2")
    if settings.GOOGLE_CLIENT_ID and settings.GOOGLE_CLIENT_SECRET:
        providers.append("google")
    else:
        logger.debug("Google OAuth not configured (missing client ID/secret)")
    if settings.GITHUB_CLIENT_ID and settings.GITHUB_CLIENT_SECRET:
        providers.append("github")
    return providers
