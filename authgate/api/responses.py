"""Translate strategy outcomes into Starlette responses."""
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse, Response

from authgate.services.oauth import Authenticated, AuthOutcome, ErrorResponse, Redirect


def to_response(outcome: AuthOutcome, status_code: int = 302) -> Response:
    """
    Build the HTTP response for an authentication outcome.

    Authenticated outcomes are rendered as `{"user": ...}`; hosts that want
    something else should dispatch on the outcome themselves.
    """
    if isinstance(outcome, Redirect):
        return RedirectResponse(url=outcome.url, status_code=status_code, headers=outcome.headers)
    if isinstance(outcome, ErrorResponse):
        if outcome.content_type == "application/json":
            return JSONResponse(status_code=outcome.status, content=outcome.body, headers=outcome.headers)
        return PlainTextResponse(status_code=outcome.status, content=str(outcome.body), headers=outcome.headers)
    if isinstance(outcome, Authenticated):
        return JSONResponse(content={"user": jsonable_encoder(outcome.user)})
    raise TypeError(f"Unknown authentication outcome: {outcome!r}")
