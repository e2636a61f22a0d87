"""
Note Nexus Backend — Access Tokens
===================================

Tokens carry the caller's email in an `email` claim plus `iat`/`exp`, are
signed with the shared ACCESS_TOKEN_SECRET and expire after
TOKEN_EXPIRES_MINUTES (two hours by default).
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from notenexus.config import settings


def create_access_token(email: str, expires_minutes: Optional[int] = None) -> str:
    expire_minutes = expires_minutes or settings.token_expires_minutes
    now = datetime.now(timezone.utc)
    payload = {
        "email": email,
        "iat": now,
        "exp": now + timedelta(minutes=expire_minutes),
    }
    return jwt.encode(payload, settings.access_token_secret, algorithm=settings.token_algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verify signature and expiry and return the claims.

    Raises:
        jwt.InvalidTokenError (or a subclass such as ExpiredSignatureError)
    """
    return jwt.decode(
        token,
        settings.access_token_secret,
        algorithms=[settings.token_algorithm],
        options={"require": ["exp"]},
    )
