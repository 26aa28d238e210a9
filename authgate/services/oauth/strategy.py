"""OAuth 2.0 authorization code strategy.

Drives the client side of the authorization code grant:
redirect to the provider, validate the callback, exchange the code,
load the profile and hand everything to the application's verify callback.

Provider-specific strategies subclass OAuth2Strategy and override the
extension hooks (authorization_params, token_params, user_profile,
get_access_token).
"""
from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable, Generic, Union
from urllib.parse import parse_qs, parse_qsl, urlencode, urljoin, urlsplit, urlunsplit

import httpx

from authgate.models.schemas import OAuth2Profile
from authgate.services.session import Session, SessionStorage

from .exceptions import OAuthError, ProtocolValidationError, TokenExchangeError
from .models import AuthenticateOptions, AuthRequest, StrategyConfig, TokenResult
from .outcomes import (
    Authenticated,
    AuthOutcome,
    ErrorResponse,
    Redirect,
    UserT,
    Verified,
    VerifyFailure,
    VerifyResult,
)
from .state import generate_state, states_match

logger = logging.getLogger(__name__)

VerifyCallback = Callable[
    [str, str, dict[str, Any], OAuth2Profile],
    Union[Any, Awaitable[Any]],
]


class OAuth2Strategy(Generic[UserT]):
    """
    OAuth 2.0 authorization code strategy.

    Applications supply a `verify` callback with the signature
    `verify(access_token, refresh_token, extra_params, profile)` that finds or
    creates the application user. It may be sync or async. Returning a
    VerifyFailure, or raising any exception, rejects the login with that message.
    """

    name = "oauth2"
    session_state_key = "oauth2:state"
    session_error_key = "oauth2:error"

    def __init__(
        self,
        config: StrategyConfig,
        verify: VerifyCallback,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize OAuth 2.0 strategy.

        Args:
            config: Provider endpoints and client credentials
            verify: Application callback resolving the user
            timeout: Timeout in seconds for provider HTTP calls
            transport: Optional httpx transport (used by tests to stub the provider)
        """
        self.config = config
        self.verify = verify
        self.timeout = timeout
        self._transport = transport

    async def authenticate(
        self,
        request: AuthRequest,
        session_storage: SessionStorage,
        options: AuthenticateOptions,
    ) -> AuthOutcome:
        """
        Run one step of the authorization code flow for the incoming request.

        Requests outside the callback path start a new authorization attempt;
        the callback request completes it.

        Args:
            request: Incoming request URL and Cookie header
            session_storage: Storage the session is loaded from and committed to
            options: Session key and optional success/failure redirects

        Returns:
            Redirect, Authenticated or ErrorResponse
        """
        url = urlsplit(request.url)
        session = await session_storage.get_session(request.cookie)

        user = session.get(options.session_key)
        if user is not None:
            if options.success_redirect:
                return await self._redirect(options.success_redirect, session, session_storage)
            return Authenticated(user, session)

        callback_url = self.get_callback_url(request.url)

        if url.path != urlsplit(callback_url).path:
            return await self._redirect_to_provider(callback_url, session, session_storage)

        query = parse_qs(url.query)
        try:
            self._consume_state(query, session)
        except ProtocolValidationError as e:
            return self._error_outcome(e)

        code = _first(query, "code")
        if not code:
            logger.warning("OAuth callback rejected: missing code", extra=self._log_fields(reason="missing_code"))
            # The state is already spent; persist that alongside the error.
            cookie = await session_storage.commit_session(session)
            return self._error_outcome(
                ProtocolValidationError("Missing code"),
                headers={"Set-Cookie": cookie},
            )

        params = dict(self.token_params())
        params["grant_type"] = "authorization_code"
        params["redirect_uri"] = callback_url

        try:
            tokens = await self.fetch_access_token(code, params)
            profile = await self.user_profile(tokens.access_token, tokens.extra_params)
        except OAuthError as e:
            return self._error_outcome(e)

        result = await self._run_verify(tokens, profile)

        if isinstance(result, VerifyFailure):
            if not options.failure_redirect:
                return ErrorResponse(status=401, body={"message": result.message})
            session.set(self.session_error_key, {"message": result.message})
            return await self._redirect(options.failure_redirect, session, session_storage)

        if not options.success_redirect:
            return Authenticated(result.user, session)

        session.set(options.session_key, result.user)
        return await self._redirect(options.success_redirect, session, session_storage)

    async def refresh_access_token(self, refresh_token: str) -> TokenResult:
        """
        Exchange a refresh token for a new access token.

        Raises:
            TokenExchangeError: If the token endpoint rejects the refresh
        """
        params = dict(self.token_params())
        params["grant_type"] = "refresh_token"
        return await self.fetch_access_token(refresh_token, params)

    # ------------------------------------------------------------------
    # Extension hooks
    # ------------------------------------------------------------------

    async def user_profile(self, access_token: str, extra_params: dict[str, Any]) -> OAuth2Profile:
        """
        Retrieve user profile from the provider.

        Provider strategies override this to call their userinfo endpoint.
        The default makes no network call.
        """
        return OAuth2Profile(provider="oauth2")

    def authorization_params(self) -> dict[str, str]:
        """Extra, non-standard parameters for the authorization request."""
        return {}

    def token_params(self) -> dict[str, str]:
        """Extra, non-standard parameters for the token request."""
        return {}

    def token_request_headers(self) -> dict[str, str]:
        return {"Content-Type": "application/x-www-form-urlencoded"}

    async def get_access_token(self, response: httpx.Response) -> TokenResult:
        """
        Parse a successful token endpoint response.

        `access_token` and `refresh_token` are lifted out; every other field is
        kept verbatim in extra_params.

        Raises:
            TokenExchangeError: If the body is not a JSON object with an access token
        """
        try:
            data = response.json()
        except ValueError as e:
            raise TokenExchangeError(response.text, upstream_status=response.status_code) from e
        if not isinstance(data, dict) or not data.get("access_token"):
            raise TokenExchangeError(response.text, upstream_status=response.status_code)

        extra_params = dict(data)
        access_token = extra_params.pop("access_token")
        refresh_token = extra_params.pop("refresh_token", None) or ""
        return TokenResult(
            access_token=str(access_token),
            refresh_token=str(refresh_token),
            extra_params=extra_params,
        )

    # ------------------------------------------------------------------
    # Flow steps
    # ------------------------------------------------------------------

    def get_callback_url(self, request_url: str) -> str:
        """
        Resolve the configured callback against the current request.

        Absolute URLs are used as-is, paths are resolved against the request
        origin and anything else is treated as a host on the request's scheme.
        """
        callback = self.config.callback_url
        if callback.startswith("http:") or callback.startswith("https:"):
            return callback
        if callback.startswith("/"):
            return urljoin(request_url, callback)
        return f"{urlsplit(request_url).scheme}://{callback}"

    def get_authorization_url(self, state: str, callback_url: str) -> str:
        params = dict(self.authorization_params())
        params["response_type"] = "code"
        params["client_id"] = self.config.client_id
        params["redirect_uri"] = callback_url
        params["state"] = state

        parsed = urlsplit(self.config.authorization_url)
        existing_params = dict(parse_qsl(parsed.query, keep_blank_values=True))
        existing_params.update(params)
        return urlunsplit(parsed._replace(query=urlencode(existing_params)))

    async def fetch_access_token(self, code: str, params: dict[str, str]) -> TokenResult:
        """
        POST the token request and parse the response.

        client_id and client_secret are always injected here. When the params
        ask for grant_type=refresh_token, `code` is sent as the refresh token.

        Raises:
            TokenExchangeError: On transport failure or a non-success status
        """
        data = dict(params)
        data["client_id"] = self.config.client_id
        data["client_secret"] = self.config.client_secret
        grant_type = data.get("grant_type")
        if grant_type == "refresh_token":
            data["refresh_token"] = code
        else:
            data["code"] = code

        logger.info(
            "Token exchange attempt",
            extra=self._log_fields(grant_type=grant_type, client_id=self.config.client_id),
        )

        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            try:
                response = await client.post(
                    self.config.token_url,
                    data=data,
                    headers=self.token_request_headers(),
                )
            except httpx.RequestError as e:
                logger.error("Token exchange request failed: %s", e, extra=self._log_fields(reason="transport_error"))
                raise TokenExchangeError(str(e) or "Failed to connect to OAuth provider") from e

        if not response.is_success:
            logger.error(
                "Token exchange failed",
                extra=self._log_fields(reason="token_rejected", upstream_status=response.status_code),
            )
            raise TokenExchangeError(response.text, upstream_status=response.status_code)

        logger.info("Token exchange succeeded", extra=self._log_fields())
        return await self.get_access_token(response)

    def _consume_state(self, query: dict[str, list[str]], session: Session) -> None:
        state = _first(query, "state")
        if not state:
            logger.warning("OAuth callback rejected: missing state", extra=self._log_fields(reason="missing_state"))
            raise ProtocolValidationError("Missing state")

        if not states_match(session.get(self.session_state_key), state):
            logger.warning("OAuth callback rejected: state mismatch", extra=self._log_fields(reason="state_mismatch"))
            raise ProtocolValidationError("State doesn't match")

        session.unset(self.session_state_key)

    async def _run_verify(self, tokens: TokenResult, profile: OAuth2Profile) -> VerifyResult:
        try:
            value = self.verify(tokens.access_token, tokens.refresh_token, tokens.extra_params, profile)
            if inspect.isawaitable(value):
                value = await value
        except Exception as e:  # noqa: BLE001 - any verify failure rejects the login
            logger.warning("Verify rejected user: %s", e, extra=self._log_fields(reason="verify_raised"))
            return VerifyFailure(str(e))

        if isinstance(value, VerifyFailure):
            logger.warning("Verify rejected user: %s", value.message, extra=self._log_fields(reason="verify_failed"))
            return value
        if isinstance(value, Verified):
            return value
        return Verified(value)

    async def _redirect_to_provider(
        self,
        callback_url: str,
        session: Session,
        session_storage: SessionStorage,
    ) -> Redirect:
        state = generate_state()
        session.set(self.session_state_key, state)
        logger.info("Redirecting to provider", extra=self._log_fields(redirect_uri=callback_url))
        return await self._redirect(self.get_authorization_url(state, callback_url), session, session_storage)

    async def _redirect(self, url: str, session: Session, session_storage: SessionStorage) -> Redirect:
        cookie = await session_storage.commit_session(session)
        return Redirect(url=url, headers={"Set-Cookie": cookie})

    def _log_fields(self, **fields: Any) -> dict[str, Any]:
        return {"strategy": self.name, **fields}

    def _error_outcome(self, error: OAuthError, headers: dict[str, str] | None = None) -> ErrorResponse:
        if isinstance(error, TokenExchangeError):
            return ErrorResponse(
                status=error.status_code,
                body=error.message,
                content_type="text/plain",
                headers=headers or {},
            )
        return ErrorResponse(status=error.status_code, body=error.to_dict(), headers=headers or {})


def _first(query: dict[str, list[str]], key: str) -> str | None:
    values = query.get(key)
    return values[0] if values else None
