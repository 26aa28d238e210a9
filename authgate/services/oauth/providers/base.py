"""Base class for strategies bound to a well-known OAuth 2.0 provider.

Fixes the provider endpoints and scopes, and loads the profile from the
provider's userinfo endpoint. Subclasses map the raw payload to OAuth2Profile.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from authgate.models.schemas import OAuth2Profile

from ..exceptions import OAuthUserInfoError
from ..models import StrategyConfig
from ..strategy import OAuth2Strategy, VerifyCallback

logger = logging.getLogger(__name__)


class ProviderOAuth2Strategy(OAuth2Strategy, ABC):
    """
    OAuth 2.0 strategy for a specific provider.

    Subclasses must implement provider-specific details.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        callback_url: str,
        verify: VerifyCallback,
        **kwargs: Any,
    ):
        """
        Initialize provider strategy.

        Args:
            client_id: OAuth client ID from provider
            client_secret: OAuth client secret from provider
            callback_url: Callback URL, path or host for the OAuth flow
            verify: Application callback resolving the user
            **kwargs: Passed through to OAuth2Strategy (timeout, transport)
        """
        config = StrategyConfig(
            authorization_url=self.authorization_endpoint,
            token_url=self.token_endpoint,
            client_id=client_id,
            client_secret=client_secret,
            callback_url=callback_url,
        )
        super().__init__(config, verify, **kwargs)

    @property
    @abstractmethod
    def authorization_endpoint(self) -> str:
        """Provider's authorization endpoint."""
        pass

    @property
    @abstractmethod
    def token_endpoint(self) -> str:
        """Provider's token exchange endpoint."""
        pass

    @property
    @abstractmethod
    def user_info_url(self) -> str:
        """Provider's user info endpoint."""
        pass

    @property
    @abstractmethod
    def scopes(self) -> list[str]:
        """Required OAuth scopes."""
        pass

    @property
    def scope_separator(self) -> str:
        return " "

    def authorization_params(self) -> dict[str, str]:
        return {"scope": self.scope_separator.join(self.scopes)}

    def user_info_headers(self, access_token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {access_token}"}

    async def get_user_info(self, access_token: str) -> dict[str, Any]:
        """
        Fetch user information using access token.

        Args:
            access_token: OAuth access token

        Returns:
            User profile information

        Raises:
            OAuthUserInfoError: If fetching user info fails
        """
        headers = self.user_info_headers(access_token)

        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            try:
                response = await client.get(self.user_info_url, headers=headers)
                response.raise_for_status()
                data = response.json()
            except httpx.HTTPStatusError as e:
                logger.error(
                    "User info fetch failed",
                    extra=self._log_fields(reason="userinfo_rejected", upstream_status=e.response.status_code),
                )
                raise OAuthUserInfoError(
                    f"User info fetch failed: {e.response.status_code}",
                    upstream_status=e.response.status_code,
                ) from e
            except httpx.RequestError as e:
                logger.error("User info request failed: %s", e, extra=self._log_fields(reason="transport_error"))
                raise OAuthUserInfoError("Failed to connect to OAuth provider") from e
            except ValueError as e:
                raise OAuthUserInfoError("Invalid user info response") from e

        if not isinstance(data, dict):
            raise OAuthUserInfoError("Invalid user info response")
        return data

    async def user_profile(self, access_token: str, extra_params: dict[str, Any]) -> OAuth2Profile:
        user_info = await self.get_user_info(access_token)
        return self.extract_profile(user_info)

    @abstractmethod
    def extract_profile(self, user_info: dict[str, Any]) -> OAuth2Profile:
        """
        Map the provider's user info payload to an OAuth2Profile.

        Args:
            user_info: Raw user info from provider
        """
        pass
