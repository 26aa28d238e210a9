"""Tests for cookie and memory session storages."""
import time

import pytest

from authgate.services.session import CookieSessionStorage, MemorySessionStorage, Session
from helpers import cookie_from


def test_session_get_set_unset():
    session = Session({"a": 1})
    session.set("b", {"nested": True})
    session.unset("a")
    session.unset("missing")

    assert not session.has("a")
    assert session.get("b") == {"nested": True}
    assert session.get("a", "default") == "default"
    assert session.data == {"b": {"nested": True}}


def test_session_data_is_a_copy():
    session = Session()
    session.data["x"] = 1
    assert not session.has("x")


@pytest.mark.asyncio
@pytest.mark.parametrize("storage_cls", [CookieSessionStorage, MemorySessionStorage])
async def test_commit_and_reload(storage_cls):
    storage = storage_cls("secret", cookie_name="sid", max_age=600)
    session = await storage.get_session(None)
    session.set("user", {"id": 42, "emails": ["a@example.com"]})

    set_cookie = await storage.commit_session(session)
    reloaded = await storage.get_session(cookie_from(set_cookie))

    assert set_cookie.startswith("sid=")
    assert reloaded.get("user") == {"id": 42, "emails": ["a@example.com"]}


@pytest.mark.asyncio
async def test_cookie_attributes():
    storage = CookieSessionStorage("secret", max_age=600, secure=True)
    set_cookie = await storage.commit_session(Session({"k": "v"}))
    attributes = {part.strip().split("=")[0].lower() for part in set_cookie.split(";")[1:]}
    assert {"path", "httponly", "samesite", "secure", "max-age"} <= attributes


@pytest.mark.asyncio
@pytest.mark.parametrize("storage_cls", [CookieSessionStorage, MemorySessionStorage])
async def test_tampered_cookie_yields_empty_session(storage_cls):
    storage = storage_cls("secret")
    set_cookie = await storage.commit_session(Session({"user": {"id": 1}}))
    name, value = cookie_from(set_cookie).split("=", 1)

    forged = value[:-2] + ("yy" if value.endswith("xx") else "xx")
    session = await storage.get_session(f"{name}={forged}")

    assert session.data == {}


@pytest.mark.asyncio
async def test_cookie_signed_with_other_secret_is_ignored():
    set_cookie = await CookieSessionStorage("one").commit_session(Session({"user": 1}))
    session = await CookieSessionStorage("two").get_session(cookie_from(set_cookie))
    assert session.data == {}


@pytest.mark.asyncio
async def test_secret_rotation_accepts_old_cookies():
    set_cookie = await CookieSessionStorage("old").commit_session(Session({"user": 1}))
    session = await CookieSessionStorage(["old", "new"]).get_session(cookie_from(set_cookie))
    assert session.get("user") == 1


@pytest.mark.asyncio
async def test_other_cookies_in_header_are_ignored():
    storage = CookieSessionStorage("secret")
    set_cookie = await storage.commit_session(Session({"user": 1}))
    header = f"theme=dark; {cookie_from(set_cookie)}; csrf_token=abc"
    session = await storage.get_session(header)
    assert session.get("user") == 1


@pytest.mark.asyncio
async def test_memory_storage_keeps_data_server_side():
    storage = MemorySessionStorage("secret")
    session = Session({"user": {"id": 1}})
    set_cookie = await storage.commit_session(session)

    assert session.id in storage._store  # type: ignore[attr-defined]

    session.set("user", {"id": 2})
    await storage.commit_session(session)
    reloaded = await storage.get_session(cookie_from(set_cookie))
    assert reloaded.get("user") == {"id": 2}


@pytest.mark.asyncio
@pytest.mark.parametrize("storage_cls", [CookieSessionStorage, MemorySessionStorage])
async def test_destroy_session_expires_cookie(storage_cls):
    storage = storage_cls("secret")
    session = Session({"user": 1})
    set_cookie = await storage.commit_session(session)

    expired = await storage.destroy_session(session)

    assert "max-age=0" in expired.lower()
    if storage_cls is MemorySessionStorage:
        reloaded = await storage.get_session(cookie_from(set_cookie))
        assert reloaded.data == {}


@pytest.mark.asyncio
async def test_memory_storage_sweeps_expired_sessions_on_commit(monkeypatch):
    storage = MemorySessionStorage("secret", max_age=60)
    now = time.time()
    monkeypatch.setattr(time, "time", lambda: now)
    for i in range(50):
        await storage.commit_session(Session({"oauth2:state": f"state-{i}"}))
    assert len(storage._store) == 50  # type: ignore[attr-defined]

    monkeypatch.setattr(time, "time", lambda: now + 3600)
    fresh = Session({"oauth2:state": "fresh"})
    await storage.commit_session(fresh)

    assert list(storage._store) == [fresh.id]  # type: ignore[attr-defined]


@pytest.mark.asyncio
async def test_memory_storage_keeps_unexpired_sessions(monkeypatch):
    storage = MemorySessionStorage("secret", max_age=60)
    now = time.time()
    monkeypatch.setattr(time, "time", lambda: now)
    older = Session({"user": 1})
    await storage.commit_session(older)

    monkeypatch.setattr(time, "time", lambda: now + 30)
    await storage.commit_session(Session({"user": 2}))

    assert older.id in storage._store  # type: ignore[attr-defined]
    assert len(storage._store) == 2  # type: ignore[attr-defined]
