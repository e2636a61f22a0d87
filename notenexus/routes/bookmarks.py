"""
Note Nexus Backend — Bookmark Routes
=====================================

Route                              Capability
POST   /select-class               authenticated
GET    /selected-classes           authenticated
DELETE /selected-classes/{id}      authenticated

The student is always the token's email.
"""

import uuid
from typing import List, Union

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from notenexus.auth import Capability, Identity, require
from notenexus.database import get_db_session
from notenexus.schemas.common import DeleteResult, ErrorResponse, ExistResponse, InsertResult
from notenexus.schemas.saved_class import SavedClassCreate, SavedClassResponse
from notenexus.services.bookmark_service import bookmark_service

router = APIRouter(tags=["Bookmarks"])


@router.post(
    "/select-class",
    response_model=Union[ExistResponse, InsertResult],
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def select_class(
    body: SavedClassCreate,
    caller: Identity = Depends(require(Capability.AUTHENTICATED)),
    db: AsyncSession = Depends(get_db_session),
) -> Union[ExistResponse, InsertResult]:
    if body.student_email is not None:
        caller.ensure_is(body.student_email)
    return await bookmark_service.select_class(db, body.class_id, caller.email)


@router.get("/selected-classes", response_model=List[SavedClassResponse])
async def list_selected_classes(
    caller: Identity = Depends(require(Capability.AUTHENTICATED)),
    db: AsyncSession = Depends(get_db_session),
) -> List[SavedClassResponse]:
    return await bookmark_service.list_for_student(db, caller.email)


@router.delete("/selected-classes/{bookmark_id}", response_model=DeleteResult)
async def delete_selected_class(
    bookmark_id: uuid.UUID,
    caller: Identity = Depends(require(Capability.AUTHENTICATED)),
    db: AsyncSession = Depends(get_db_session),
) -> DeleteResult:
    return await bookmark_service.remove(db, bookmark_id, caller.email)
