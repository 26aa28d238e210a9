"""
OAuth 2.0 Authentication Routes.

Endpoints (under the router prefix):
- GET  /login    - Start the OAuth flow (redirect to provider)
- GET  /callback - Handle the provider callback
- GET  /error    - Read and clear the last authentication error
- POST /logout   - Destroy the session

Only handles the HTTP layer; the protocol lives in OAuth2Strategy.
"""

import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response

from authgate.services.oauth import Authenticated, AuthenticateOptions, AuthRequest, OAuth2Strategy
from authgate.services.session import SessionStorage

from .responses import to_response

logger = logging.getLogger(__name__)


def default_prefix(strategy: OAuth2Strategy) -> str:
    return f"/auth/{strategy.name}"


def build_oauth_router(
    strategy: OAuth2Strategy,
    session_storage: SessionStorage,
    options: AuthenticateOptions | None = None,
    prefix: str | None = None,
) -> APIRouter:
    """
    Build a router that dispatches login and callback requests into `strategy`.

    The strategy's callback URL must resolve to `{prefix}/callback`; the prefix
    defaults to `/auth/{strategy.name}`.
    """
    options = options or AuthenticateOptions()
    prefix = prefix or default_prefix(strategy)
    router = APIRouter(prefix=prefix, tags=["oauth"])

    async def _authenticate(request: Request) -> Response:
        outcome = await strategy.authenticate(AuthRequest.from_starlette(request), session_storage, options)
        response = to_response(outcome)
        if isinstance(outcome, Authenticated) and outcome.session is not None:
            # Persist the consumed state even when no redirect is configured.
            response.headers.append("Set-Cookie", await session_storage.commit_session(outcome.session))
        return response

    @router.get("/login")
    async def oauth_login(request: Request) -> Response:
        """Redirect to the provider's authorization page."""
        logger.info("Initiating OAuth login with %s", strategy.name)
        return await _authenticate(request)

    @router.get("/callback")
    async def oauth_callback(request: Request) -> Response:
        """
        Complete the OAuth flow.

        Validates state and code, exchanges the code, loads the profile and
        runs the verify callback.
        """
        return await _authenticate(request)

    @router.get("/error")
    async def oauth_error(request: Request) -> Response:
        """Return the error stored by a failed login, and clear it."""
        session = await session_storage.get_session(request.headers.get("cookie"))
        error = session.get(strategy.session_error_key)
        if not error:
            raise HTTPException(status_code=404, detail="No authentication error")
        session.unset(strategy.session_error_key)
        response = JSONResponse(content=error)
        response.headers.append("Set-Cookie", await session_storage.commit_session(session))
        return response

    @router.post("/logout")
    async def oauth_logout(request: Request) -> RedirectResponse:
        session = await session_storage.get_session(request.headers.get("cookie"))
        cookie = await session_storage.destroy_session(session)
        return RedirectResponse(url="/", status_code=303, headers={"Set-Cookie": cookie})

    return router
