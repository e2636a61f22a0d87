"""
Note Nexus Backend — Class Service
===================================

What:  Class submission, admin review and the public catalogue.

Status transitions:
    create            → Pending
    approve (admin)   → Approved
    deny (admin)      → Denied, feedback stored
    edit (instructor) → status unchanged, feedback cleared

Admin decisions overwrite each other; there is no terminal state.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notenexus.exceptions import DatabaseError, NotFoundError
from notenexus.models.course_class import ClassStatus, CourseClass
from notenexus.schemas.common import InsertResult, UpdateResult
from notenexus.schemas.course_class import ClassCreate, ClassResponse, ClassUpdate

logger = logging.getLogger(__name__)


class ClassService:

    async def create_class(
        self, db: AsyncSession, payload: ClassCreate, instructor_email: str
    ) -> InsertResult:
        """
        Store a new class as Pending with no enrollments.

        The submitting instructor's email is used when the body has none.
        """
        course = CourseClass(
            name=payload.name,
            description=payload.description,
            image=payload.image,
            price=payload.price,
            seats=payload.seats,
            instructor_name=payload.instructor_name,
            instructor_email=payload.instructor_email or instructor_email,
            enrolled=0,
            status=ClassStatus.PENDING.value,
            feedback=None,
        )
        db.add(course)
        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error storing class %r: %s", payload.name, str(e))
            raise DatabaseError(
                message="Could not save the class. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e
        logger.info("Class %s submitted by %s", course.id, course.instructor_email)
        return InsertResult(inserted_id=course.id)

    async def list_all(self, db: AsyncSession) -> List[ClassResponse]:
        result = await db.execute(select(CourseClass).order_by(CourseClass.created_at.desc()))
        return [ClassResponse.model_validate(c) for c in result.scalars().all()]

    async def list_for_instructor(self, db: AsyncSession, email: str) -> List[ClassResponse]:
        result = await db.execute(
            select(CourseClass)
            .where(CourseClass.instructor_email == email)
            .order_by(CourseClass.created_at.desc())
        )
        return [ClassResponse.model_validate(c) for c in result.scalars().all()]

    async def get_class(self, db: AsyncSession, class_id: uuid.UUID) -> ClassResponse:
        course = await db.get(CourseClass, class_id)
        if course is None:
            raise NotFoundError(resource="class", resource_id=str(class_id))
        return ClassResponse.model_validate(course)

    async def list_approved(
        self, db: AsyncSession, limit: Optional[int] = None
    ) -> List[ClassResponse]:
        """Public catalogue: approved classes, most enrolled first."""
        stmt = (
            select(CourseClass)
            .where(CourseClass.status == ClassStatus.APPROVED.value)
            .order_by(CourseClass.enrolled.desc(), CourseClass.created_at.asc())
        )
        if limit:
            stmt = stmt.limit(limit)
        result = await db.execute(stmt)
        return [ClassResponse.model_validate(c) for c in result.scalars().all()]

    async def approve(self, db: AsyncSession, class_id: uuid.UUID) -> UpdateResult:
        return await self._apply(
            db, class_id, {"status": ClassStatus.APPROVED.value}
        )

    async def deny(self, db: AsyncSession, class_id: uuid.UUID, feedback: str) -> UpdateResult:
        return await self._apply(
            db, class_id, {"status": ClassStatus.DENIED.value, "feedback": feedback}
        )

    async def edit(
        self, db: AsyncSession, class_id: uuid.UUID, payload: ClassUpdate
    ) -> UpdateResult:
        """
        Overwrite the fields present in the body and drop any admin feedback.

        Ownership is not checked: any instructor may edit any class.
        """
        values = payload.model_dump(exclude_unset=True)
        values["feedback"] = None
        return await self._apply(db, class_id, values)

    async def _apply(
        self, db: AsyncSession, class_id: uuid.UUID, values: Dict[str, Any]
    ) -> UpdateResult:
        course = await db.get(CourseClass, class_id)
        if course is None:
            logger.warning("Update for unknown class %s ignored", class_id)
            return UpdateResult(matched_count=0)

        changed = False
        for key, value in values.items():
            if getattr(course, key) != value:
                setattr(course, key, value)
                changed = True
        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating class %s: %s", class_id, str(e))
            raise DatabaseError(
                message="Could not update the class. Please try again.",
                context={"class_id": str(class_id), "error_type": type(e).__name__},
            ) from e
        logger.info("Class %s updated: %s", class_id, ", ".join(sorted(values)))
        return UpdateResult(matched_count=1, modified_count=1 if changed else 0)


class_service = ClassService()
