"""GitHub OAuth App strategy."""
from typing import Any

from authgate.models.schemas import OAuth2Profile

from .base import ProviderOAuth2Strategy


class GitHubOAuth2Strategy(ProviderOAuth2Strategy):
    """GitHub OAuth App implementation."""

    name = "github"

    @property
    def authorization_endpoint(self) -> str:
        return "https://github.com/login/oauth/authorize"

    @property
    def token_endpoint(self) -> str:
        return "https://github.com/login/oauth/access_token"

    @property
    def user_info_url(self) -> str:
        return "https://api.github.com/user"

    @property
    def scopes(self) -> list[str]:
        return ["read:user", "user:email"]

    def token_request_headers(self) -> dict[str, str]:
        # GitHub answers form-encoded unless JSON is asked for.
        headers = super().token_request_headers()
        headers["Accept"] = "application/json"
        return headers

    def user_info_headers(self, access_token: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/vnd.github+json",
        }

    def extract_profile(self, user_info: dict[str, Any]) -> OAuth2Profile:
        email = user_info.get("email")
        avatar = user_info.get("avatar_url")
        return OAuth2Profile(
            provider=self.name,
            id=str(user_info["id"]) if user_info.get("id") is not None else None,
            display_name=user_info.get("name") or user_info.get("login"),
            emails=[{"value": email}] if email else None,
            photos=[{"value": avatar}] if avatar else None,
            raw=user_info,
        )
