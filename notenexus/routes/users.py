"""
Note Nexus Backend — User Routes
=================================

Route                      Capability
PUT  /user/{email}         public
GET  /user-role/{email}    authenticated (self only)
GET  /all-users/{email}    admin
PUT  /set-role/{user_id}   admin
GET  /instructors          public
"""

import uuid
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from notenexus.auth import Capability, Identity, require
from notenexus.database import get_db_session
from notenexus.routes.params import parse_limit
from notenexus.schemas.common import ErrorResponse, MessageResponse, UpdateResult
from notenexus.schemas.user import RoleResponse, RoleUpdate, UserProfile, UserResponse
from notenexus.services.user_service import user_service

router = APIRouter(tags=["Users"])


@router.put(
    "/user/{email}",
    response_model=Union[MessageResponse, UpdateResult],
    summary="Register a user on first sign-in",
)
async def register_user(
    email: str,
    profile: Optional[UserProfile] = None,
    _: None = Depends(require(Capability.PUBLIC)),
    db: AsyncSession = Depends(get_db_session),
) -> Union[MessageResponse, UpdateResult]:
    """Creates the user as a Student; an existing user gets "User Exists"."""
    return await user_service.register(db, email, profile or UserProfile())


@router.get(
    "/user-role/{email}",
    response_model=RoleResponse,
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
    summary="Get the caller's role",
)
async def get_user_role(
    email: str,
    caller: Identity = Depends(require(Capability.AUTHENTICATED)),
    db: AsyncSession = Depends(get_db_session),
) -> RoleResponse:
    caller.ensure_is(email)
    return RoleResponse(role=await user_service.get_role(db, email))


@router.get(
    "/all-users/{email}",
    response_model=List[UserResponse],
    responses={403: {"model": ErrorResponse}},
    summary="List every user (admin)",
)
async def list_users(
    email: str,
    caller: Identity = Depends(require(Capability.ADMIN)),
    db: AsyncSession = Depends(get_db_session),
) -> List[UserResponse]:
    return await user_service.list_users(db)


@router.put(
    "/set-role/{user_id}",
    response_model=UpdateResult,
    responses={403: {"model": ErrorResponse}},
    summary="Change a user's role (admin)",
)
async def set_user_role(
    user_id: uuid.UUID,
    body: RoleUpdate,
    caller: Identity = Depends(require(Capability.ADMIN)),
    db: AsyncSession = Depends(get_db_session),
) -> UpdateResult:
    return await user_service.set_role(db, user_id, body.role)


@router.get(
    "/instructors",
    response_model=List[UserResponse],
    summary="Instructors, most enrolled first",
)
async def list_instructors(
    limit: Optional[str] = Query(default=None, description="Maximum items; omit for all"),
    _: None = Depends(require(Capability.PUBLIC)),
    db: AsyncSession = Depends(get_db_session),
) -> List[UserResponse]:
    return await user_service.list_instructors(db, parse_limit(limit))
