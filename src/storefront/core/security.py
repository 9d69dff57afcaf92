"""Security utilities for cookie-session authentication."""

import base64
import hmac
import secrets
from functools import lru_cache

from passlib.context import CryptContext

from src.storefront.runtime.context import get_config


def generate_secure_token(length: int = 32) -> str:
    """Generate a cryptographically secure random token.

    Args:
        length: Number of random bytes to generate (default 32)

    Returns:
        URL-safe base64 encoded token
    """
    return (
        base64.urlsafe_b64encode(secrets.token_bytes(length))
        .decode("utf-8")
        .rstrip("=")
    )


def generate_session_id() -> str:
    """Generate an opaque session identifier (256 bits of entropy)."""
    return generate_secure_token(32)


def generate_csrf_token() -> str:
    """Generate a CSRF token for the double-submit cookie pattern."""
    return generate_secure_token(40)


def csrf_tokens_match(expected: str | None, presented: str | None) -> bool:
    """Constant-time comparison of two CSRF tokens; missing values never match."""
    if not expected or not presented:
        return False
    return hmac.compare_digest(expected.encode("utf-8"), presented.encode("utf-8"))


@lru_cache(maxsize=4)
def _password_context(schemes: tuple[str, ...]) -> CryptContext:
    return CryptContext(schemes=list(schemes), deprecated="auto")


def get_password_context() -> CryptContext:
    """Return the passlib context for the configured hashing schemes."""
    return _password_context(tuple(get_config().security.password_schemes))


def hash_password(password: str) -> str:
    """Hash ``password`` with the preferred configured scheme."""
    return get_password_context().hash(password)


def verify_password(password: str, password_hash: str | None) -> bool:
    """Check ``password`` against a stored hash.

    Unknown or malformed hashes count as a failed check.
    """
    if not password_hash:
        return False
    try:
        return get_password_context().verify(password, password_hash)
    except ValueError:
        return False
