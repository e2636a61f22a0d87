"""
Note Nexus Backend — Shared Pydantic Schemas
=============================================

What:  Base model and the response shapes every resource shares.
How:   Fields are snake_case in Python and camelCase on the wire; ids are
       exposed as `_id`. Write endpoints answer with acknowledgment objects
       (`insertedId`, `matchedCount`, ...) that existing clients already read.
"""

import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts camelCase or snake_case input, serializes camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ResultModel(CamelModel):
    """Response-only shapes; unknown keys are rejected so unions resolve unambiguously."""

    model_config = ConfigDict(extra="forbid")


# ══════════════════════════════════════════════════════════════════════════
# Write Acknowledgments
# ══════════════════════════════════════════════════════════════════════════


class InsertResult(ResultModel):
    acknowledged: bool = True
    inserted_id: uuid.UUID


class UpdateResult(ResultModel):
    """
    Outcome of an update by id.

    matched_count is 0 when the id does not exist; nothing is created in
    that case. upserted_* are only set by PUT /user/{email}.
    """

    acknowledged: bool = True
    matched_count: int = 0
    modified_count: int = 0
    upserted_count: int = 0
    upserted_id: Optional[uuid.UUID] = None


class DeleteResult(ResultModel):
    acknowledged: bool = True
    deleted_count: int = 0


# ══════════════════════════════════════════════════════════════════════════
# Small Responses
# ══════════════════════════════════════════════════════════════════════════


class MessageResponse(ResultModel):
    message: str


class ExistResponse(ResultModel):
    """Answer to "is this pair already stored?" style questions."""

    exist: bool
    message: Optional[str] = None


class ErrorResponse(CamelModel):
    """
    Error body returned by every exception handler.

    Example:
        {"error": true, "message": "Unauthorized Access", "requestId": "1a2b3c4d"}
    """

    error: bool = True
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(CamelModel):
    status: str = Field(description="healthy, degraded or unhealthy")
    version: str
    database: str = Field(description="connected or disconnected")
    payment_gateway: str = Field(description="configured or unconfigured")
    uptime_seconds: float
