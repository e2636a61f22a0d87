"""
Note Nexus Backend — Payment Routes
====================================

Route                                   Capability
POST /create-payment-intent             authenticated
POST /payment-histry                    authenticated
GET  /payment-histry                    authenticated
GET  /is-enrolled/{class_id}/{email}    authenticated (self only)

The "histry" spelling is part of the published client contract.
"""

import logging
import uuid
from typing import List, Union

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from notenexus.auth import Capability, Identity, require
from notenexus.database import get_db_session
from notenexus.exceptions import UNEXPECTED_ERROR_MESSAGE
from notenexus.schemas.common import ErrorResponse, ExistResponse, InsertResult
from notenexus.schemas.payment import (
    PaymentCreate,
    PaymentIntentRequest,
    PaymentIntentResponse,
    PaymentResponse,
)
from notenexus.services.payment_service import payment_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Payments"])


@router.post(
    "/create-payment-intent",
    response_model=Union[PaymentIntentResponse, ErrorResponse],
    response_model_exclude_none=True,
    responses={500: {"model": ErrorResponse}},
)
async def create_payment_intent(
    body: PaymentIntentRequest,
    caller: Identity = Depends(require(Capability.AUTHENTICATED)),
) -> Union[PaymentIntentResponse, ErrorResponse]:
    """
    Stage a card payment and return its client secret.

    A body without a price is answered with HTTP 200 and an error payload,
    which is what existing checkout pages check for.
    """
    if body.price is None:
        logger.info("Payment intent requested by %s without a price", caller.email)
        return ErrorResponse(message=UNEXPECTED_ERROR_MESSAGE)
    return await payment_service.create_payment_intent(body.price)


@router.post(
    "/payment-histry",
    response_model=InsertResult,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def record_payment(
    body: PaymentCreate,
    caller: Identity = Depends(require(Capability.AUTHENTICATED)),
    db: AsyncSession = Depends(get_db_session),
) -> InsertResult:
    """Enroll the caller in a class they have paid for."""
    if body.student_email is not None:
        caller.ensure_is(body.student_email)
    return await payment_service.record_payment(db, body, student_email=caller.email)


@router.get("/payment-histry", response_model=List[PaymentResponse])
async def payment_history(
    caller: Identity = Depends(require(Capability.AUTHENTICATED)),
    db: AsyncSession = Depends(get_db_session),
) -> List[PaymentResponse]:
    return await payment_service.history(db, caller.email)


@router.get(
    "/is-enrolled/{class_id}/{email}",
    response_model=ExistResponse,
    response_model_exclude_none=True,
)
async def check_enrollment(
    class_id: uuid.UUID,
    email: str,
    caller: Identity = Depends(require(Capability.AUTHENTICATED)),
    db: AsyncSession = Depends(get_db_session),
) -> ExistResponse:
    caller.ensure_is(email)
    return ExistResponse(exist=await payment_service.is_enrolled(db, class_id, email))
