from __future__ import annotations

import os
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseAppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "AuthGate"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "plain"

    # Session cookie
    SESSION_SECRET: str = "change_me_session"
    SESSION_COOKIE_NAME: str = "__session"
    SESSION_TTL_SECONDS: int = 43_200  # 12h
    SESSION_COOKIE_SECURE: bool = False

    # Generic OAuth 2.0 provider
    OAUTH2_AUTHORIZATION_URL: str | None = None
    OAUTH2_TOKEN_URL: str | None = None
    OAUTH2_CLIENT_ID: str | None = None
    OAUTH2_CLIENT_SECRET: str | None = None
    OAUTH2_CALLBACK_URL: str = "/auth/oauth2/callback"
    OAUTH2_HTTP_TIMEOUT: float = 10.0
    OAUTH2_SUCCESS_REDIRECT: str | None = None
    OAUTH2_FAILURE_REDIRECT: str | None = None

    # Built-in providers
    GOOGLE_CLIENT_ID: str | None = None
    GOOGLE_CLIENT_SECRET: str | None = None
    GITHUB_CLIENT_ID: str | None = None
    GITHUB_CLIENT_SECRET: str | None = None

    @field_validator("SESSION_TTL_SECONDS")
    @classmethod
    def clamp_session_ttl(cls, v: int) -> int:
        """Sessions shorter than a minute can't survive a provider round trip."""
        return max(int(v), 60)

    @model_validator(mode="after")
    def _validate_required_fields(self) -> BaseAppSettings:
        if self.ENV.lower() == "prod":
            if self.SESSION_SECRET == "change_me_session":
                raise ValueError("Insecure default secrets in production: SESSION_SECRET uses default placeholder")
            if not self.SESSION_COOKIE_SECURE:
                self.SESSION_COOKIE_SECURE = True
        return self


class DevSettings(BaseAppSettings):
    ENV: str = "dev"


class TestSettings(BaseAppSettings):
    ENV: str = "test"
    SESSION_SECRET: str = "test-session-secret"
    OAUTH2_AUTHORIZATION_URL: str | None = "https://provider.test/oauth2/authorize"
    OAUTH2_TOKEN_URL: str | None = "https://provider.test/oauth2/token"
    OAUTH2_CLIENT_ID: str | None = "test-client-id"
    OAUTH2_CLIENT_SECRET: str | None = "test-client-secret"


class ProdSettings(BaseAppSettings):
    ENV: str = "prod"
    LOG_FORMAT: str = "json"
    SESSION_COOKIE_SECURE: bool = True


_ENV_TO_SETTINGS: dict[str, type[BaseAppSettings]] = {
    "dev": DevSettings,
    "development": DevSettings,
    "test": TestSettings,
    "testing": TestSettings,
    "prod": ProdSettings,
    "production": ProdSettings,
}


@lru_cache
def get_settings() -> BaseAppSettings:
    env_name = os.getenv("APP_ENV") or os.getenv("ENV") or "dev"
    env = env_name.lower()
    settings_cls = _ENV_TO_SETTINGS.get(env, DevSettings)
    return settings_cls()


settings = get_settings()
