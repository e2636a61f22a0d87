"""
Note Nexus Backend — Bookmark Schemas
======================================
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import Field

from notenexus.schemas.common import CamelModel
from notenexus.schemas.course_class import ClassResponse


class SavedClassCreate(CamelModel):
    class_id: uuid.UUID
    # Must match the token's email when given; defaults to it otherwise
    student_email: Optional[str] = Field(default=None, max_length=320)


class SavedClassResponse(CamelModel):
    id: uuid.UUID = Field(alias="_id")
    class_id: uuid.UUID
    student_email: str
    created_at: Optional[datetime] = None
    course: Optional[ClassResponse] = Field(default=None, alias="class")
