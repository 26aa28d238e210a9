from __future__ import annotations

import logging
from typing import Any

from itsdangerous import BadSignature, URLSafeTimedSerializer

from .base import Session, SessionStorage

logger = logging.getLogger(__name__)

SESSION_SALT = "authgate-session-v1"


class CookieSessionStorage(SessionStorage):
    """
    Stores the whole session inside a signed cookie.

    Values must be JSON serializable. A cookie that fails signature or age
    checks is treated as an empty session.
    """

    def __init__(self, secret: str | list[str], cookie_name: str = "__session", **cookie_options: Any):
        super().__init__(cookie_name, **cookie_options)
        self._serializer = URLSafeTimedSerializer(secret_key=secret, salt=SESSION_SALT)

    async def get_session(self, cookie_header: str | None = None) -> Session:
        raw = self.read_cookie(cookie_header)
        if raw is None:
            return Session()
        try:
            data = self._serializer.loads(raw, max_age=self.max_age)
        except BadSignature:
            logger.debug("Discarding session cookie with invalid or expired signature")
            return Session()
        if not isinstance(data, dict):
            return Session()
        return Session(data)

    async def commit_session(self, session: Session) -> str:
        return self.serialize_cookie(self._serializer.dumps(session.data))

    async def destroy_session(self, session: Session) -> str:
        return self.serialize_cookie("", max_age=0)
