"""
Note Nexus Backend — Payment Record Model
==========================================

What:  ORM model for the `payments` table.
How:   Inserted once per successful card payment, never updated. Its presence
       for a (class, student) pair is what "enrolled" means.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, ForeignKey, Index, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from notenexus.database import Base
from notenexus.models.course_class import CourseClass


class Payment(Base):
    __tablename__ = "payments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    class_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("classes.id"),
        nullable=False,
    )
    student_email: Mapped[str] = mapped_column(String(320), nullable=False)
    instructor_email: Mapped[str] = mapped_column(String(320), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)

    # Gateway reference (payment intent id) supplied by the client after confirmation
    transaction_id: Mapped[str | None] = mapped_column(String(255), nullable=True)

    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    course: Mapped[CourseClass] = relationship(lazy="raise")

    __table_args__ = (
        UniqueConstraint("class_id", "student_email", name="uq_payments_class_student"),
        Index("idx_payments_student_date", "student_email", "date"),
    )

    def __repr__(self) -> str:
        return (
            f"<Payment(class_id={self.class_id}, student_email='{self.student_email}', "
            f"price={self.price})>"
        )
