"""
Note Nexus Backend — Bookmark Service
======================================

What:  Students save classes for later ("selected classes").
How:   Every query is filtered by the student's email taken from the token,
       so one student can never read or delete another student's bookmarks.
"""

import logging
import uuid
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from notenexus.exceptions import NotFoundError
from notenexus.models.course_class import CourseClass
from notenexus.models.saved_class import SavedClass
from notenexus.schemas.common import DeleteResult, ExistResponse, InsertResult
from notenexus.schemas.saved_class import SavedClassResponse

logger = logging.getLogger(__name__)

ALREADY_BOOKMARKED_MESSAGE = "This Class Is Already In Your Bookmark"


class BookmarkService:

    async def select_class(
        self, db: AsyncSession, class_id: uuid.UUID, student_email: str
    ) -> ExistResponse | InsertResult:
        """
        Bookmark a class once per student.

        A repeat request is not an error: it answers {"exist": true} and
        leaves the stored bookmark alone.
        """
        existing = await db.execute(
            select(SavedClass.id).where(
                SavedClass.class_id == class_id,
                SavedClass.student_email == student_email,
            )
        )
        if existing.scalar_one_or_none() is not None:
            return ExistResponse(exist=True, message=ALREADY_BOOKMARKED_MESSAGE)

        if await db.get(CourseClass, class_id) is None:
            raise NotFoundError(resource="class", resource_id=str(class_id))

        bookmark = SavedClass(class_id=class_id, student_email=student_email)
        db.add(bookmark)
        try:
            await db.flush()
        except IntegrityError:
            # A concurrent request inserted the same pair first
            await db.rollback()
            return ExistResponse(exist=True, message=ALREADY_BOOKMARKED_MESSAGE)

        logger.info("%s bookmarked class %s", student_email, class_id)
        return InsertResult(inserted_id=bookmark.id)

    async def list_for_student(
        self, db: AsyncSession, student_email: str
    ) -> List[SavedClassResponse]:
        result = await db.execute(
            select(SavedClass)
            .options(selectinload(SavedClass.course))
            .where(SavedClass.student_email == student_email)
            .order_by(SavedClass.created_at.desc())
        )
        return [SavedClassResponse.model_validate(b) for b in result.scalars().all()]

    async def remove(
        self, db: AsyncSession, bookmark_id: uuid.UUID, student_email: str
    ) -> DeleteResult:
        result = await db.execute(
            delete(SavedClass).where(
                SavedClass.id == bookmark_id,
                SavedClass.student_email == student_email,
            )
        )
        return DeleteResult(deleted_count=result.rowcount or 0)


bookmark_service = BookmarkService()
