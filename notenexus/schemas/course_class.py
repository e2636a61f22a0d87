"""
Note Nexus Backend — Class Schemas
===================================

ClassCreate is what an instructor submits. ClassUpdate has every field
optional; only the fields present in the body are written.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from notenexus.models.course_class import ClassStatus
from notenexus.schemas.common import CamelModel


class ClassCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    image: Optional[str] = Field(default=None, max_length=2048)
    price: float = Field(default=0.0, ge=0)
    seats: int = Field(ge=0)
    instructor_name: Optional[str] = Field(default=None, max_length=255)
    # Defaults to the authenticated instructor when omitted
    instructor_email: Optional[str] = Field(default=None, max_length=320)


class ClassUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    image: Optional[str] = Field(default=None, max_length=2048)
    price: Optional[float] = Field(default=None, ge=0)
    seats: Optional[int] = Field(default=None, ge=0)
    instructor_name: Optional[str] = Field(default=None, max_length=255)

    @field_validator("name", "price", "seats")
    @classmethod
    def reject_null(cls, v):
        """These columns are NOT NULL: a field may be omitted but not cleared."""
        if v is None:
            raise ValueError("must not be null")
        return v


class ClassDeny(CamelModel):
    feedback: str = Field(min_length=1, description="Why the class was denied")


class ClassResponse(CamelModel):
    id: uuid.UUID = Field(alias="_id")
    name: str
    description: Optional[str] = None
    image: Optional[str] = None
    price: float
    instructor_name: Optional[str] = None
    instructor_email: str
    seats: int
    enrolled: int
    status: ClassStatus
    feedback: Optional[str] = None
    created_at: Optional[datetime] = None
