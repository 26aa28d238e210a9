"""Value types passed through the OAuth 2.0 flow."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict

from authgate.core.config import BaseAppSettings
from authgate.core.exceptions import ConfigurationError


class StrategyConfig(BaseModel):
    """Provider endpoints and client credentials. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    authorization_url: str
    token_url: str
    client_id: str
    client_secret: str
    callback_url: str

    @classmethod
    def from_settings(cls, settings: BaseAppSettings) -> StrategyConfig:
        required = {
            "OAUTH2_AUTHORIZATION_URL": settings.OAUTH2_AUTHORIZATION_URL,
            "OAUTH2_TOKEN_URL": settings.OAUTH2_TOKEN_URL,
            "OAUTH2_CLIENT_ID": settings.OAUTH2_CLIENT_ID,
            "OAUTH2_CLIENT_SECRET": settings.OAUTH2_CLIENT_SECRET,
        }
        for name, value in required.items():
            if not value:
                raise ConfigurationError(name)
        return cls(
            authorization_url=settings.OAUTH2_AUTHORIZATION_URL,
            token_url=settings.OAUTH2_TOKEN_URL,
            client_id=settings.OAUTH2_CLIENT_ID,
            client_secret=settings.OAUTH2_CLIENT_SECRET,
            callback_url=settings.OAUTH2_CALLBACK_URL,
        )


@dataclass(frozen=True)
class TokenResult:
    access_token: str
    refresh_token: str
    extra_params: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AuthenticateOptions:
    session_key: str = "user"
    success_redirect: str | None = None
    failure_redirect: str | None = None


@dataclass(frozen=True)
class AuthRequest:
    """The parts of an incoming request the strategy looks at."""

    url: str
    cookie: str | None = None

    @classmethod
    def from_starlette(cls, request: Any) -> AuthRequest:
        return cls(url=str(request.url), cookie=request.headers.get("cookie"))
