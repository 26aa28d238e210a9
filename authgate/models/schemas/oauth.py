"""OAuth profile schemas."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ProfileName(BaseModel):
    family_name: str | None = None
    given_name: str | None = None
    middle_name: str | None = None


class ProfileEmail(BaseModel):
    value: str
    type: str | None = None


class ProfilePhoto(BaseModel):
    value: str


class OAuth2Profile(BaseModel):
    """
    User identity returned by a provider after authentication.

    Only `provider` is required; everything else is provider-defined.
    Provider strategies may attach extra fields (e.g. the raw payload).
    """

    model_config = ConfigDict(extra="allow")

    provider: str
    id: str | None = None
    display_name: str | None = None
    name: ProfileName | None = None
    emails: list[ProfileEmail] | None = None
    photos: list[ProfilePhoto] | None = None
