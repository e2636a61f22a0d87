"""
Note Nexus Backend — Payment Schemas
=====================================
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import Field

from notenexus.schemas.common import CamelModel
from notenexus.schemas.course_class import ClassResponse


class PaymentIntentRequest(CamelModel):
    # Optional at the schema level: a missing price gets the soft error body
    price: Optional[float] = Field(default=None, gt=0)


class PaymentIntentResponse(CamelModel):
    client_secret: str


class PaymentCreate(CamelModel):
    """Details of a payment the client has already confirmed with the gateway."""

    class_id: uuid.UUID
    student_email: Optional[str] = Field(default=None, max_length=320)
    # The class's own instructor is used when omitted
    instructor_email: Optional[str] = Field(default=None, max_length=320)
    price: float = Field(ge=0)
    transaction_id: Optional[str] = Field(default=None, max_length=255)
    date: Optional[datetime] = None


class PaymentResponse(CamelModel):
    id: uuid.UUID = Field(alias="_id")
    class_id: uuid.UUID
    student_email: str
    instructor_email: str
    price: float
    transaction_id: Optional[str] = None
    date: datetime
    course: Optional[ClassResponse] = Field(default=None, alias="class")
