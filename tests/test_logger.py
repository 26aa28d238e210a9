import json
import logging

import pytest

from authgate.core.logger import JsonFormatter
from authgate.services.oauth import AuthenticateOptions, AuthRequest, ErrorResponse
from helpers import cookie_from


def _record(msg, extra=None, level=logging.WARNING):
    logger = logging.getLogger("authgate.test")
    return logger.makeRecord("authgate.test", level, __file__, 1, msg, (), None, extra=extra)


def test_json_formatter_lifts_flow_fields():
    record = _record(
        "OAuth callback rejected: state mismatch",
        extra={"strategy": "google", "reason": "state_mismatch"},
    )

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "OAuth callback rejected: state mismatch"
    assert payload["level"] == "WARNING"
    assert payload["strategy"] == "google"
    assert payload["reason"] == "state_mismatch"
    assert "extra" not in payload


def test_json_formatter_keeps_other_fields_under_extra():
    record = _record(
        "Token exchange failed",
        extra={"strategy": "github", "reason": "token_rejected", "upstream_status": 502},
        level=logging.ERROR,
    )

    payload = json.loads(JsonFormatter().format(record))

    assert payload["strategy"] == "github"
    assert payload["extra"] == {"upstream_status": 502}


def test_json_formatter_plain_record_has_no_flow_fields():
    payload = json.loads(JsonFormatter().format(_record("hello", level=logging.INFO)))

    assert payload["message"] == "hello"
    assert "strategy" not in payload
    assert "extra" not in payload


@pytest.mark.asyncio
async def test_state_mismatch_is_logged_with_reason(make_strategy, cookie_storage, caplog):
    strategy = make_strategy()
    login = await strategy.authenticate(
        AuthRequest(url="https://app.test/login"), cookie_storage, AuthenticateOptions()
    )
    cookie = cookie_from(login.cookie)

    with caplog.at_level(logging.WARNING, logger="authgate.services.oauth.strategy"):
        outcome = await strategy.authenticate(
            AuthRequest(url="https://app.test/auth/oauth2/callback?state=forged&code=abc", cookie=cookie),
            cookie_storage,
            AuthenticateOptions(),
        )

    assert isinstance(outcome, ErrorResponse)
    rejected = [r for r in caplog.records if getattr(r, "reason", None) == "state_mismatch"]
    assert len(rejected) == 1
    assert rejected[0].strategy == strategy.name
