"""Session storages for the authentication flow."""
from .base import Session, SessionStorage
from .cookie import CookieSessionStorage
from .memory import MemorySessionStorage

__all__ = [
    "Session",
    "SessionStorage",
    "CookieSessionStorage",
    "MemorySessionStorage",
]
