"""
Note Nexus Backend — Saved Class (Bookmark) Model
==================================================

One row per (class, student) bookmark. A bookmark is removed when the student
deletes it or when the student pays for the class.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from notenexus.database import Base
from notenexus.models.course_class import CourseClass


class SavedClass(Base):
    __tablename__ = "saved_classes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    class_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("classes.id", ondelete="CASCADE"),
        nullable=False,
    )
    student_email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    course: Mapped[CourseClass] = relationship(lazy="raise")

    __table_args__ = (
        UniqueConstraint("class_id", "student_email", name="uq_saved_classes_class_student"),
    )

    def __repr__(self) -> str:
        return f"<SavedClass(class_id={self.class_id}, student_email='{self.student_email}')>"
