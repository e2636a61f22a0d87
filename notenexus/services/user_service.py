"""
Note Nexus Backend — User Service
==================================

What:  First-contact registration, role reads and admin role changes.
Who:   Called by routes/users.py.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from notenexus.models.user import Role, User
from notenexus.schemas.common import MessageResponse, UpdateResult
from notenexus.schemas.user import UserProfile, UserResponse

logger = logging.getLogger(__name__)

USER_EXISTS_MESSAGE = "User Exists"


class UserService:
    """
    Stateless; every method receives the request's session.
    """

    async def register(
        self, db: AsyncSession, email: str, profile: UserProfile
    ) -> MessageResponse | UpdateResult:
        """
        Insert the user as a Student unless the email is already known.

        An existing user is left exactly as stored (no profile refresh, no
        role reset) and the caller gets the "User Exists" marker instead.
        """
        existing = await db.execute(select(User.id).where(User.email == email))
        if existing.scalar_one_or_none() is not None:
            return MessageResponse(message=USER_EXISTS_MESSAGE)

        user = User(
            email=email,
            name=profile.name,
            photo=profile.photo,
            role=Role.STUDENT.value,
            enrolled=0,
        )
        db.add(user)
        try:
            await db.flush()
        except IntegrityError:
            # Two first-contact requests for the same email raced each other
            await db.rollback()
            return MessageResponse(message=USER_EXISTS_MESSAGE)

        logger.info("Registered new user %s as %s", email, Role.STUDENT.value)
        return UpdateResult(upserted_count=1, upserted_id=user.id)

    async def get_role(self, db: AsyncSession, email: str) -> Optional[Role]:
        result = await db.execute(select(User.role).where(User.email == email))
        role = result.scalar_one_or_none()
        return Role(role) if role is not None else None

    async def list_users(self, db: AsyncSession) -> List[UserResponse]:
        result = await db.execute(select(User).order_by(User.created_at.asc()))
        return [UserResponse.model_validate(u) for u in result.scalars().all()]

    async def set_role(self, db: AsyncSession, user_id: uuid.UUID, role: Role) -> UpdateResult:
        """Set any role on an existing user. Unknown ids match nothing."""
        current = await db.execute(select(User.role).where(User.id == user_id))
        previous = current.scalar_one_or_none()
        if previous is None:
            logger.warning("Role change requested for unknown user %s", user_id)
            return UpdateResult(matched_count=0)

        await db.execute(update(User).where(User.id == user_id).values(role=role.value))
        logger.info("User %s role changed: %s -> %s", user_id, previous, role.value)
        return UpdateResult(
            matched_count=1,
            modified_count=0 if previous == role.value else 1,
        )

    async def list_instructors(
        self, db: AsyncSession, limit: Optional[int] = None
    ) -> List[UserResponse]:
        """Instructors by total enrollments, most popular first."""
        stmt = (
            select(User)
            .where(User.role == Role.INSTRUCTOR.value)
            .order_by(User.enrolled.desc(), User.created_at.asc())
        )
        if limit:
            stmt = stmt.limit(limit)
        result = await db.execute(stmt)
        return [UserResponse.model_validate(u) for u in result.scalars().all()]


user_service = UserService()
