from __future__ import annotations

import logging
import secrets
import time
from typing import Any

from itsdangerous import BadSignature, URLSafeTimedSerializer

from .base import Session, SessionStorage

logger = logging.getLogger(__name__)

SESSION_ID_SALT = "authgate-session-id-v1"


class MemorySessionStorage(SessionStorage):
    """
    Keeps session data in process memory; the cookie only carries a signed id.

    Suitable for tests and single-process deployments.
    """

    def __init__(self, secret: str | list[str], cookie_name: str = "__session", **cookie_options: Any):
        super().__init__(cookie_name, **cookie_options)
        self._serializer = URLSafeTimedSerializer(secret_key=secret, salt=SESSION_ID_SALT)
        self._store: dict[str, tuple[float | None, dict[str, Any]]] = {}

    def _expires_at(self) -> float | None:
        return time.time() + self.max_age if self.max_age is not None else None

    async def get_session(self, cookie_header: str | None = None) -> Session:
        raw = self.read_cookie(cookie_header)
        if raw is None:
            return Session()
        try:
            session_id = self._serializer.loads(raw, max_age=self.max_age)
        except BadSignature:
            logger.debug("Discarding session cookie with invalid or expired signature")
            return Session()

        entry = self._store.get(str(session_id))
        if entry is None:
            return Session()
        expires_at, data = entry
        if expires_at is not None and expires_at < time.time():
            self._store.pop(str(session_id), None)
            return Session()
        return Session(data, id=str(session_id))

    def _sweep_expired(self) -> None:
        now = time.time()
        expired = [key for key, (expires_at, _) in self._store.items() if expires_at is not None and expires_at < now]
        for key in expired:
            self._store.pop(key, None)
        if expired:
            logger.debug("Swept %d expired sessions", len(expired))

    async def commit_session(self, session: Session) -> str:
        self._sweep_expired()
        if not session.id:
            session.id = secrets.token_urlsafe(16)
        self._store[session.id] = (self._expires_at(), session.data)
        return self.serialize_cookie(self._serializer.dumps(session.id))

    async def destroy_session(self, session: Session) -> str:
        if session.id:
            self._store.pop(session.id, None)
        return self.serialize_cookie("", max_age=0)
