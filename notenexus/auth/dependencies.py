"""
Note Nexus Backend — Route Capabilities
========================================

What:  Every route declares one Capability; require() turns it into a
       FastAPI dependency that performs exactly the checks it implies.

    PUBLIC         → nothing, identity is None
    AUTHENTICATED  → valid bearer token
    ADMIN          → valid token + users.role == Admin (read per request)
    INSTRUCTOR     → valid token + users.role == Instructor (read per request)

Failures raise, so a rejected request never reaches the route body:
    missing header  → AuthenticationMissingError (403)
    bad/expired     → AuthenticationInvalidError (401)
    wrong role      → AuthorizationDeniedError   (403)
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Coroutine, Dict, Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from notenexus.auth import tokens
from notenexus.database import get_db_session
from notenexus.exceptions import (
    AuthenticationInvalidError,
    AuthenticationMissingError,
    AuthorizationDeniedError,
    IdentityMismatchError,
)
from notenexus.models.user import Role, User

logger = logging.getLogger(__name__)

# auto_error=False: status codes for a missing header are ours, not FastAPI's
bearer_scheme = HTTPBearer(auto_error=False)


class Capability(str, enum.Enum):
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    ADMIN = "admin"
    INSTRUCTOR = "instructor"


_REQUIRED_ROLE = {
    Capability.ADMIN: Role.ADMIN,
    Capability.INSTRUCTOR: Role.INSTRUCTOR,
}


@dataclass(frozen=True)
class Identity:
    """The verified caller, as decoded from the bearer token."""

    email: str
    claims: Dict[str, Any] = field(default_factory=dict)

    def ensure_is(self, email: str) -> None:
        """Reject requests about a different user than the caller."""
        if email != self.email:
            raise IdentityMismatchError(caller=self.email, requested=email)


def authenticate(credentials: Optional[HTTPAuthorizationCredentials]) -> Identity:
    if credentials is None or not credentials.credentials:
        raise AuthenticationMissingError()

    try:
        payload = tokens.decode_access_token(credentials.credentials)
    except jwt.ExpiredSignatureError as exc:
        raise AuthenticationInvalidError(reason="token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthenticationInvalidError(reason=type(exc).__name__) from exc

    email = payload.get("email")
    if not email or not isinstance(email, str):
        raise AuthenticationInvalidError(reason="missing email claim")
    return Identity(email=email, claims=payload)


async def lookup_role(db: AsyncSession, email: str) -> Optional[str]:
    result = await db.execute(select(User.role).where(User.email == email))
    return result.scalar_one_or_none()


def require(
    capability: Capability,
) -> Callable[..., Coroutine[Any, Any, Optional[Identity]]]:
    """
    Build the dependency for a route's capability.

    Usage:
        @router.get("/classes")
        async def list_classes(caller: Identity = Depends(require(Capability.ADMIN))):
            ...
    """

    async def dependency(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
        db: AsyncSession = Depends(get_db_session),
    ) -> Optional[Identity]:
        if capability is Capability.PUBLIC:
            return None

        identity = authenticate(credentials)

        required_role = _REQUIRED_ROLE.get(capability)
        if required_role is not None:
            role = await lookup_role(db, identity.email)
            if role != required_role.value:
                logger.info(
                    "Role check failed for %s: needs %s, has %s",
                    identity.email,
                    required_role.value,
                    role,
                )
                raise AuthorizationDeniedError(required_role=required_role.value, actual_role=role)

        return identity

    dependency.__name__ = f"require_{capability.value}"
    return dependency
