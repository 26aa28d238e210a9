"""AuthGate: OAuth 2.0 authorization code strategy with pluggable session storage."""

__version__ = "0.1.0"
