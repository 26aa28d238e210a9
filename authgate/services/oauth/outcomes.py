"""
Terminal outcomes of an authentication attempt.

`OAuth2Strategy.authenticate` returns exactly one of Redirect, Authenticated
or ErrorResponse; callers dispatch on the type.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, Union

from authgate.services.session import Session

UserT = TypeVar("UserT")


@dataclass(frozen=True)
class Redirect:
    url: str
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def cookie(self) -> str | None:
        return self.headers.get("Set-Cookie")


@dataclass(frozen=True)
class Authenticated(Generic[UserT]):
    user: UserT
    # Loaded session, so the host can commit it if it wants to persist changes.
    session: Session | None = None


@dataclass(frozen=True)
class ErrorResponse:
    status: int
    body: Any
    content_type: str = "application/json"
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def message(self) -> str:
        if isinstance(self.body, dict):
            return str(self.body.get("message", ""))
        return str(self.body)


AuthOutcome = Union[Redirect, Authenticated, ErrorResponse]


@dataclass(frozen=True)
class Verified(Generic[UserT]):
    user: UserT


@dataclass(frozen=True)
class VerifyFailure:
    message: str


VerifyResult = Union[Verified, VerifyFailure]
