"""
Note Nexus Backend — Payment Service
=====================================

What:  Payment intents, enrollment recording, enrollment checks and history.

Recording Flow (POST /payment-histry):
    ┌───────────────┐   ┌──────────────────┐   ┌──────────────────┐
    │ already paid? │──▶│ seats - 1        │──▶│ instructor       │
    │ class exists? │   │ enrolled + 1     │   │ enrolled + 1     │
    └───────────────┘   │ (WHERE seats>0)  │   └────────┬─────────┘
                        └──────────────────┘            │
                        ┌──────────────────┐   ┌────────▼─────────┐
                        │ insert payment   │◀──│ drop bookmark    │
                        └──────────────────┘   └──────────────────┘

    All writes share the request's session. get_db_session commits them
    together or rolls every one back, so a failure part-way leaves no trace.
"""

import logging
import uuid
from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from notenexus.config import settings
from notenexus.exceptions import (
    AlreadyEnrolledError,
    DatabaseError,
    NotFoundError,
    SeatsUnavailableError,
)
from notenexus.models.course_class import CourseClass
from notenexus.models.payment import Payment
from notenexus.models.saved_class import SavedClass
from notenexus.models.user import User
from notenexus.schemas.common import InsertResult
from notenexus.schemas.payment import PaymentCreate, PaymentIntentResponse, PaymentResponse
from notenexus.services.payment_gateway import payment_gateway, to_minor_units

logger = logging.getLogger(__name__)


class PaymentService:

    async def create_payment_intent(self, price: float) -> PaymentIntentResponse:
        """
        Stage a card payment for `price` (currency units).

        Raises:
            PaymentGatewayError: gateway unconfigured or failing
        """
        amount = to_minor_units(price)
        client_secret = await payment_gateway.create_payment_intent(
            amount=amount,
            currency=settings.payment_currency,
        )
        return PaymentIntentResponse(client_secret=client_secret)

    async def record_payment(
        self, db: AsyncSession, payload: PaymentCreate, student_email: str
    ) -> InsertResult:
        """
        Enroll the student after a confirmed payment.

        Raises:
            NotFoundError: the class does not exist
            AlreadyEnrolledError: a payment for this pair is already stored
            SeatsUnavailableError: the class has no seats left
            DatabaseError: any other storage failure (all writes rolled back)
        """
        class_id = payload.class_id

        if await self.is_enrolled(db, class_id, student_email):
            raise AlreadyEnrolledError(class_id=str(class_id), student_email=student_email)

        course = await db.get(CourseClass, class_id)
        if course is None:
            raise NotFoundError(resource="class", resource_id=str(class_id))

        try:
            payment = await self._enroll(db, course, payload, student_email)
        except IntegrityError as e:
            # The unique (class, student) pair lost a race with another request
            raise AlreadyEnrolledError(class_id=str(class_id), student_email=student_email) from e
        except SQLAlchemyError as e:
            logger.error("Database error recording payment for class %s: %s", class_id, str(e))
            raise DatabaseError(
                message="Could not record the payment. Please try again.",
                context={"class_id": str(class_id), "error_type": type(e).__name__},
            ) from e

        logger.info(
            "Recorded payment %s: %s enrolled in class %s (%.2f)",
            payment.id,
            student_email,
            class_id,
            payload.price,
        )
        return InsertResult(inserted_id=payment.id)

    async def _enroll(
        self,
        db: AsyncSession,
        course: CourseClass,
        payload: PaymentCreate,
        student_email: str,
    ) -> Payment:
        class_id = course.id

        # ── Step 1: move one seat into enrolled, atomically ───────────────
        seat_update = await db.execute(
            update(CourseClass)
            .where(CourseClass.id == class_id, CourseClass.seats > 0)
            .values(seats=CourseClass.seats - 1, enrolled=CourseClass.enrolled + 1)
            .execution_options(synchronize_session=False)
        )
        if seat_update.rowcount == 0:
            raise SeatsUnavailableError(class_id=str(class_id))

        # ── Step 2: instructor popularity counter ─────────────────────────
        # Only existing users are touched; a stale email must not create one.
        instructor_email = payload.instructor_email or course.instructor_email
        instructor_update = await db.execute(
            update(User)
            .where(User.email == instructor_email)
            .values(enrolled=User.enrolled + 1)
            .execution_options(synchronize_session=False)
        )
        if instructor_update.rowcount == 0:
            logger.warning(
                "Payment for class %s names unknown instructor %s; counter not updated",
                class_id,
                instructor_email,
            )

        # ── Step 3: a paid class is no longer just bookmarked ─────────────
        await db.execute(
            delete(SavedClass).where(
                SavedClass.class_id == class_id,
                SavedClass.student_email == student_email,
            )
        )

        # ── Step 4: the payment record itself ─────────────────────────────
        payment = Payment(
            class_id=class_id,
            student_email=student_email,
            instructor_email=instructor_email,
            price=payload.price,
            transaction_id=payload.transaction_id,
        )
        if payload.date is not None:
            payment.date = payload.date
        db.add(payment)
        await db.flush()
        return payment

    async def is_enrolled(self, db: AsyncSession, class_id: uuid.UUID, student_email: str) -> bool:
        result = await db.execute(
            select(Payment.id).where(
                Payment.class_id == class_id,
                Payment.student_email == student_email,
            )
        )
        return result.scalar_one_or_none() is not None

    async def history(self, db: AsyncSession, student_email: str) -> List[PaymentResponse]:
        """The student's payments, most recent first."""
        result = await db.execute(
            select(Payment)
            .options(selectinload(Payment.course))
            .where(Payment.student_email == student_email)
            .order_by(Payment.date.desc())
        )
        return [PaymentResponse.model_validate(p) for p in result.scalars().all()]


payment_service = PaymentService()
