from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from app.exceptions.http import UnauthorizedError

ALGORITHM = "HS256"

# The only identity claim carried by issued tokens.
PHONE_NUMBER_CLAIM = "phone_number"


def issue_token(claims: Mapping[str, Any], key: str, ttl: timedelta) -> str:
    """Signs the given claims into a JWT that expires after ttl."""
    payload = dict(claims)
    payload["exp"] = datetime.now(UTC) + ttl
    return jwt.encode(payload, key, algorithm=ALGORITHM)


def decode_token(token: str, key: str) -> dict[str, Any]:
    """
    Verifies signature and expiry of a token and returns its claims.

    Raises:
        UnauthorizedError: If the token is malformed, tampered with, expired or carries no expiry.
    """
    try:
        return jwt.decode(token, key, algorithms=[ALGORITHM], options={"require": ["exp"]})
    except jwt.PyJWTError as exc:
        raise UnauthorizedError("Invalid or expired token.") from exc
