"""Stateless session tokens.

Tokens are HS256 JWTs carrying only iat/exp claims, so any process holding
the session secret can verify them without shared storage.
"""

import logging
import time
from typing import Optional

import jwt
from fastapi import Depends, Header

from transcription_proxy.config import Settings, get_settings
from transcription_proxy.core.errors import AuthenticationError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
BEARER_PREFIX = "Bearer "


def issue_token(secret: str, expiry_seconds: int, now: Optional[int] = None) -> str:
    """
    Issue a signed session token.

    Args:
        secret: Key used to sign the token
        expiry_seconds: Token lifetime
        now: Issue time as a unix timestamp (defaults to the current time)

    Returns:
        Encoded JWT string
    """
    issued_at = int(time.time()) if now is None else now
    payload = {
        "iat": issued_at,
        "exp": issued_at + expiry_seconds,
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def decode_token(token: str, secret: str) -> dict:
    """
    Verify a session token and return its claims.

    Raises:
        AuthenticationError: If the token is expired, tampered with or malformed
    """
    try:
        return jwt.decode(
            token,
            secret,
            algorithms=[ALGORITHM],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Session expired, please refresh the page")
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid session token")


async def require_session(
    authorization: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> dict:
    """FastAPI dependency guarding endpoints behind a session token."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        logger.warning("Rejected request without bearer token")
        raise AuthenticationError(
            "Authorization header with Bearer token is required",
            code="MISSING_TOKEN",
        )

    token = authorization[len(BEARER_PREFIX):]
    try:
        return decode_token(token, settings.session_secret)
    except AuthenticationError as e:
        logger.warning(f"Rejected session token: {e.message}")
        raise
