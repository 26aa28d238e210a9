"""Shared test doubles for the OAuth flow tests."""
from __future__ import annotations

import json
from urllib.parse import parse_qs

import httpx

AUTHORIZATION_URL = "https://provider.test/oauth2/authorize"
TOKEN_URL = "https://provider.test/oauth2/token"


def cookie_from(set_cookie: str) -> str:
    """Turn a Set-Cookie header value into the Cookie header a browser would send back."""
    return set_cookie.split(";", 1)[0]


class FakeProvider:
    """Records token/userinfo requests and answers them with canned responses."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.token_status = 200
        self.token_body: str | dict = {"access_token": "AT1", "refresh_token": "RT1"}
        self.userinfo_status = 200
        self.userinfo_body: dict = {}
        self.raise_on_token: Exception | None = None

    @property
    def token_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "POST"]

    @property
    def userinfo_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "GET"]

    def last_form(self) -> dict[str, str]:
        body = self.token_requests[-1].content.decode()
        return {k: v[0] for k, v in parse_qs(body).items()}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "POST":
            if self.raise_on_token is not None:
                raise self.raise_on_token
            body = self.token_body
            if isinstance(body, dict):
                return httpx.Response(self.token_status, json=body)
            return httpx.Response(self.token_status, text=body)
        return httpx.Response(self.userinfo_status, content=json.dumps(self.userinfo_body).encode())

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)
