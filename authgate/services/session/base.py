"""Session abstraction used by authentication strategies.

A strategy never owns session data: it reads and writes through a Session
and asks the SessionStorage to turn it back into a Set-Cookie header value.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from http.cookies import CookieError, SimpleCookie
from typing import Any


class Session:
    """Key-value view over one browser session."""

    def __init__(self, data: dict[str, Any] | None = None, id: str = ""):
        self.id = id
        self._data: dict[str, Any] = dict(data or {})

    @property
    def data(self) -> dict[str, Any]:
        return dict(self._data)

    def has(self, key: str) -> bool:
        return key in self._data

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def unset(self, key: str) -> None:
        self._data.pop(key, None)

    def __repr__(self) -> str:
        return f"Session(id={self.id!r}, keys={sorted(self._data)!r})"


class SessionStorage(ABC):
    """
    Loads a Session from a Cookie header and commits it back to a cookie.

    Subclasses decide where the data lives (inside the cookie, in memory,
    in a database...). The cookie attributes are shared.
    """

    def __init__(
        self,
        cookie_name: str = "__session",
        *,
        max_age: int | None = None,
        secure: bool = False,
        path: str = "/",
        same_site: str = "Lax",
    ):
        self.cookie_name = cookie_name
        self.max_age = max_age
        self.secure = secure
        self.path = path
        self.same_site = same_site

    @abstractmethod
    async def get_session(self, cookie_header: str | None = None) -> Session:
        """Return the session referenced by the Cookie header (empty if none)."""
        pass

    @abstractmethod
    async def commit_session(self, session: Session) -> str:
        """Persist the session and return the Set-Cookie header value."""
        pass

    @abstractmethod
    async def destroy_session(self, session: Session) -> str:
        """Drop the session and return a Set-Cookie header that expires it."""
        pass

    def read_cookie(self, cookie_header: str | None) -> str | None:
        if not cookie_header:
            return None
        cookie: SimpleCookie = SimpleCookie()
        try:
            cookie.load(cookie_header)
        except CookieError:
            return None
        morsel = cookie.get(self.cookie_name)
        return morsel.value if morsel is not None and morsel.value else None

    def serialize_cookie(self, value: str, *, max_age: int | None = None) -> str:
        cookie: SimpleCookie = SimpleCookie()
        cookie[self.cookie_name] = value
        morsel = cookie[self.cookie_name]
        morsel["path"] = self.path
        morsel["httponly"] = True
        morsel["samesite"] = self.same_site
        if self.secure:
            morsel["secure"] = True
        effective_max_age = self.max_age if max_age is None else max_age
        if effective_max_age is not None:
            morsel["max-age"] = effective_max_age
        return morsel.OutputString()
