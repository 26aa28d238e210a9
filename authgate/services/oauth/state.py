"""CSRF state tokens for the authorization redirect."""
import secrets

# Bytes of entropy per state token.
STATE_BYTES = 100


def generate_state() -> str:
    """Generate a fresh, URL-safe, single-use state token."""
    return secrets.token_urlsafe(STATE_BYTES)


def states_match(expected: str | None, received: str | None) -> bool:
    if not expected or not received:
        return False
    # Constant-time comparison to prevent timing attacks
    return secrets.compare_digest(expected.encode(), received.encode())
