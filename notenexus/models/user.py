"""
Note Nexus Backend — User Model
================================

What:  ORM model for the `users` table.
How:   A user row is created the first time a client calls PUT /user/{email}
       (role Student). Admins change roles; recorded payments bump the
       owning instructor's `enrolled` counter.
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from notenexus.database import Base


class Role(str, enum.Enum):
    STUDENT = "Student"
    INSTRUCTOR = "Instructor"
    ADMIN = "Admin"


class User(Base):
    """
    A platform account, keyed for lookups by its unique email.

    Query Patterns:
        - Role check on every protected request: WHERE email = :email
        - Popular instructors: WHERE role = 'Instructor' ORDER BY enrolled DESC
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        unique=True,
        index=True,
    )

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    photo: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=Role.STUDENT.value,
        comment="Student, Instructor or Admin",
    )

    # Only meaningful for instructors: total paid enrollments across their classes
    enrolled: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<User(email='{self.email}', role='{self.role}')>"
