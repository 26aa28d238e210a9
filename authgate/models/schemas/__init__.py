"""Pydantic schemas."""
from .oauth import OAuth2Profile, ProfileEmail, ProfileName, ProfilePhoto

__all__ = ["OAuth2Profile", "ProfileEmail", "ProfileName", "ProfilePhoto"]
