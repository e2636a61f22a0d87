"""
Note Nexus Backend — Class Routes
==================================

Route                          Capability
POST /class                    instructor
GET  /classes                  admin
PUT  /class-approve/{id}       admin
PUT  /class-deny/{id}          admin
GET  /my-classes/{email}       instructor (self only)
GET  /class/{id}               instructor
PUT  /class/{id}               instructor
GET  /all-classes              public
"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from notenexus.auth import Capability, Identity, require
from notenexus.database import get_db_session
from notenexus.routes.params import parse_limit
from notenexus.schemas.common import ErrorResponse, InsertResult, UpdateResult
from notenexus.schemas.course_class import ClassCreate, ClassDeny, ClassResponse, ClassUpdate
from notenexus.services.class_service import class_service

router = APIRouter(tags=["Classes"])

_GUARDED = {401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}}


@router.post("/class", response_model=InsertResult, responses=_GUARDED)
async def create_class(
    body: ClassCreate,
    caller: Identity = Depends(require(Capability.INSTRUCTOR)),
    db: AsyncSession = Depends(get_db_session),
) -> InsertResult:
    """Submit a class for review; it starts out Pending."""
    return await class_service.create_class(db, body, instructor_email=caller.email)


@router.get("/classes", response_model=List[ClassResponse], responses=_GUARDED)
async def list_classes(
    caller: Identity = Depends(require(Capability.ADMIN)),
    db: AsyncSession = Depends(get_db_session),
) -> List[ClassResponse]:
    return await class_service.list_all(db)


@router.put("/class-approve/{class_id}", response_model=UpdateResult, responses=_GUARDED)
async def approve_class(
    class_id: uuid.UUID,
    caller: Identity = Depends(require(Capability.ADMIN)),
    db: AsyncSession = Depends(get_db_session),
) -> UpdateResult:
    return await class_service.approve(db, class_id)


@router.put("/class-deny/{class_id}", response_model=UpdateResult, responses=_GUARDED)
async def deny_class(
    class_id: uuid.UUID,
    body: ClassDeny,
    caller: Identity = Depends(require(Capability.ADMIN)),
    db: AsyncSession = Depends(get_db_session),
) -> UpdateResult:
    return await class_service.deny(db, class_id, body.feedback)


@router.get("/my-classes/{email}", response_model=List[ClassResponse], responses=_GUARDED)
async def list_my_classes(
    email: str,
    caller: Identity = Depends(require(Capability.INSTRUCTOR)),
    db: AsyncSession = Depends(get_db_session),
) -> List[ClassResponse]:
    caller.ensure_is(email)
    return await class_service.list_for_instructor(db, email)


@router.get(
    "/class/{class_id}",
    response_model=ClassResponse,
    responses={**_GUARDED, 404: {"model": ErrorResponse}},
)
async def get_class(
    class_id: uuid.UUID,
    caller: Identity = Depends(require(Capability.INSTRUCTOR)),
    db: AsyncSession = Depends(get_db_session),
) -> ClassResponse:
    return await class_service.get_class(db, class_id)


@router.put("/class/{class_id}", response_model=UpdateResult, responses=_GUARDED)
async def edit_class(
    class_id: uuid.UUID,
    body: ClassUpdate,
    caller: Identity = Depends(require(Capability.INSTRUCTOR)),
    db: AsyncSession = Depends(get_db_session),
) -> UpdateResult:
    """Replace the supplied fields and clear feedback. Status is kept."""
    return await class_service.edit(db, class_id, body)


@router.get("/all-classes", response_model=List[ClassResponse])
async def list_approved_classes(
    limit: Optional[str] = Query(default=None, description="Maximum items; omit for all"),
    _: None = Depends(require(Capability.PUBLIC)),
    db: AsyncSession = Depends(get_db_session),
) -> List[ClassResponse]:
    """Approved classes, most enrolled first."""
    return await class_service.list_approved(db, parse_limit(limit))
