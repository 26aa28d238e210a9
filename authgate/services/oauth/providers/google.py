"""Google OAuth 2.0 / OpenID Connect strategy."""
from typing import Any

from authgate.models.schemas import OAuth2Profile

from .base import ProviderOAuth2Strategy


class GoogleOAuth2Strategy(ProviderOAuth2Strategy):
    """Google OAuth 2.0 / OpenID Connect implementation."""

    name = "google"

    @property
    def authorization_endpoint(self) -> str:
        return "https://accounts.google.com/o/oauth2/v2/auth"

    @property
    def token_endpoint(self) -> str:
        return "https://oauth2.googleapis.com/token"

    @property
    def user_info_url(self) -> str:
        return "https://www.googleapis.com/oauth2/v3/userinfo"

    @property
    def scopes(self) -> list[str]:
        return ["openid", "email", "profile"]

    def authorization_params(self) -> dict[str, str]:
        params = super().authorization_params()
        params["access_type"] = "offline"  # Request refresh token
        params["prompt"] = "consent"  # Force consent to get refresh token
        return params

    def extract_profile(self, user_info: dict[str, Any]) -> OAuth2Profile:
        """
        Map the Google userinfo response.

        Expected fields: sub, name, given_name, family_name, email, picture.
        """
        email = user_info.get("email")
        picture = user_info.get("picture")
        return OAuth2Profile(
            provider=self.name,
            id=str(user_info.get("sub") or "") or None,
            display_name=user_info.get("name"),
            name={
                "family_name": user_info.get("family_name"),
                "given_name": user_info.get("given_name"),
            },
            emails=[{"value": email}] if email else None,
            photos=[{"value": picture}] if picture else None,
            raw=user_info,
        )
