from __future__ import annotations

import os
from types import SimpleNamespace

os.environ.setdefault("APP_ENV", "test")

import pytest  # noqa: E402

from authgate.services.oauth import OAuth2Strategy, StrategyConfig  # noqa: E402
from authgate.services.session import CookieSessionStorage, MemorySessionStorage  # noqa: E402
from helpers import AUTHORIZATION_URL, TOKEN_URL, FakeProvider  # noqa: E402


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def strategy_config() -> StrategyConfig:
    return StrategyConfig(
        authorization_url=AUTHORIZATION_URL,
        token_url=TOKEN_URL,
        client_id="client-123",
        client_secret="shhh-its-a-secret",
        callback_url="/auth/oauth2/callback",
    )


@pytest.fixture
def verify_calls() -> list:
    return []


@pytest.fixture
def make_strategy(strategy_config, provider, verify_calls):
    """Factory building an OAuth2Strategy whose verify resolves `user` (or raises `error`)."""

    def _make(user=None, error: Exception | None = None, **config_overrides):
        async def verify(access_token, refresh_token, extra_params, profile):
            verify_calls.append(
                SimpleNamespace(
                    access_token=access_token,
                    refresh_token=refresh_token,
                    extra_params=extra_params,
                    profile=profile,
                )
            )
            if error is not None:
                raise error
            return user if user is not None else {"id": 42}

        config = strategy_config.model_copy(update=config_overrides) if config_overrides else strategy_config
        return OAuth2Strategy(config, verify, transport=provider.transport)

    return _make


@pytest.fixture
def cookie_storage() -> CookieSessionStorage:
    return CookieSessionStorage("test-session-secret", max_age=3600)


@pytest.fixture
def memory_storage() -> MemorySessionStorage:
    return MemorySessionStorage("test-session-secret", max_age=3600)
