"""
Note Nexus Backend — User Schemas
==================================
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import Field

from notenexus.models.user import Role
from notenexus.schemas.common import CamelModel


class UserProfile(CamelModel):
    """
    Profile payload sent by the client on first sign-in.

    The email comes from the path; a role in the body is ignored because new
    users always start as Student.
    """

    name: Optional[str] = Field(default=None, max_length=255)
    photo: Optional[str] = Field(default=None, max_length=2048)


class UserResponse(CamelModel):
    id: uuid.UUID = Field(alias="_id")
    email: str
    name: Optional[str] = None
    photo: Optional[str] = None
    role: Role
    enrolled: int = 0
    created_at: Optional[datetime] = None


class RoleResponse(CamelModel):
    role: Optional[Role] = None


class RoleUpdate(CamelModel):
    role: Role
