"""
Note Nexus Backend — Class Model
=================================

What:  ORM model for the `classes` table (a course offering by an instructor).

Lifecycle:
    1. Created by an instructor (status = 'Pending', enrolled = 0)
    2. Admin approves (status = 'Approved') or denies it with feedback
       (status = 'Denied'); either decision can be overwritten later
    3. Instructor edits replace the supplied fields and clear feedback;
       the status is left as it was
    4. Every recorded payment moves one seat into `enrolled`
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, Float, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from notenexus.database import Base


class ClassStatus(str, enum.Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    DENIED = "Denied"


class CourseClass(Base):
    """A class offering. Named CourseClass to keep `class` out of identifiers."""

    __tablename__ = "classes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    instructor_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    instructor_email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)

    seats: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    enrolled: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ClassStatus.PENDING.value,
        comment="Pending, Approved or Denied",
    )
    feedback: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Admin's reason for denial; cleared when the instructor edits",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        CheckConstraint("seats >= 0", name="ck_classes_seats_non_negative"),
        Index("idx_classes_status_enrolled", "status", "enrolled"),
    )

    def __repr__(self) -> str:
        return f"<CourseClass(id={self.id}, name='{self.name}', status='{self.status}')>"
