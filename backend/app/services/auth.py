"""
Stateless bearer tokens.

A token is base64("<expires_at_ms>:<hex HMAC-SHA256 of expires_at_ms>"), keyed
by the site password, so verifying one needs no server-side session state.
"""

import base64
import binascii
import hashlib
import hmac
import time
from typing import Optional

from app.config import Settings
from app.models.auth import LoginOutput


class AuthError(Exception):
    """Authentication failed. ``status_code`` is the HTTP status to report."""

    def __init__(self, message: str, status_code: int = 401):
        super().__init__(message)
        self.status_code = status_code


def now_ms() -> int:
    return int(time.time() * 1000)


def _sign(secret: str, payload: str) -> str:
    return hmac.new(secret.encode(), payload.encode(), hashlib.sha256).hexdigest()


def generate_token(secret: str, expires_at: int) -> str:
    payload = str(expires_at)
    token_data = f"{payload}:{_sign(secret, payload)}"
    return base64.b64encode(token_data.encode()).decode()


def _decode(token: str) -> Optional[tuple[int, str]]:
    try:
        decoded = base64.b64decode(token.encode(), validate=True).decode()
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return None
    parts = decoded.split(":")
    if len(parts) != 2:
        return None
    try:
        expires_at = int(parts[0])
    except ValueError:
        return None
    return expires_at, parts[1]


def parse_token(token: str) -> Optional[int]:
    """Expiry (epoch ms) carried by a token, or None if it is malformed."""
    decoded = _decode(token)
    return decoded[0] if decoded else None


def verify_token(token: str, secret: str) -> bool:
    decoded = _decode(token)
    if decoded is None:
        return False
    expires_at, signature = decoded
    return hmac.compare_digest(signature, _sign(secret, str(expires_at)))


def issue_token(password: Optional[str], settings: Settings) -> LoginOutput:
    """Exchange the site password for a signed token."""
    if not password:
        raise AuthError("Password is required", status_code=400)
    if not settings.site_password:
        raise AuthError("Password not configured", status_code=500)
    if not hmac.compare_digest(password.encode(), settings.site_password.encode()):
        raise AuthError("Invalid password")

    expires_in = settings.token_expiry_hours * 60 * 60
    expires_at = now_ms() + expires_in * 1000
    return LoginOutput(
        token=generate_token(settings.site_password, expires_at),
        expires_at=expires_at,
        expires_in=expires_in,
    )


def check_bearer(authorization: Optional[str], secret: str, current_ms: Optional[int] = None) -> None:
    """Raise AuthError unless ``authorization`` is a valid, unexpired bearer token."""
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthError("Missing or invalid authorization header")

    token = authorization[len("Bearer "):]
    expires_at = parse_token(token)
    if expires_at is None:
        raise AuthError("Invalid token format")
    if expires_at < (current_ms if current_ms is not None else now_ms()):
        raise AuthError("Token expired")
    if not secret:
        raise AuthError("Password not configured")
    if not verify_token(token, secret):
        raise AuthError("Invalid token")
