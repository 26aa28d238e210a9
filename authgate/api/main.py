from fastapi import FastAPI

from authgate.core.config import settings
from authgate.core.errors import register_error_handlers
from authgate.core.logger import init_logging
from authgate.services.oauth import AuthenticateOptions, OAuth2Strategy
from authgate.services.session import CookieSessionStorage, SessionStorage

from .routes_oauth import build_oauth_router


def default_session_storage() -> SessionStorage:
    return CookieSessionStorage(
        settings.SESSION_SECRET,
        cookie_name=settings.SESSION_COOKIE_NAME,
        max_age=settings.SESSION_TTL_SECONDS,
        secure=settings.SESSION_COOKIE_SECURE,
    )


def create_app(
    strategy: OAuth2Strategy,
    session_storage: SessionStorage | None = None,
    options: AuthenticateOptions | None = None,
    prefix: str | None = None,
) -> FastAPI:
    """
    Assemble a FastAPI app serving the OAuth flow for one strategy.

    Routes live under `/auth/{strategy.name}` unless `prefix` is given, matching
    the callback paths the strategy factory configures.
    """
    init_logging()

    is_production = settings.ENV.lower() == "prod"
    app = FastAPI(
        title=settings.APP_NAME,
        debug=False,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
        openapi_url=None if is_production else "/openapi.json",
    )
    if options is None:
        options = AuthenticateOptions(
            success_redirect=settings.OAUTH2_SUCCESS_REDIRECT,
            failure_redirect=settings.OAUTH2_FAILURE_REDIRECT,
        )
    register_error_handlers(app)
    app.include_router(build_oauth_router(strategy, session_storage or default_session_storage(), options, prefix))

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    return app
