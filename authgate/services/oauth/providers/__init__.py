"""OAuth provider strategies."""
from .base import ProviderOAuth2Strategy
from .github import GitHubOAuth2Strategy
from .google import GoogleOAuth2Strategy

__all__ = ["ProviderOAuth2Strategy", "GoogleOAuth2Strategy", "GitHubOAuth2Strategy"]
