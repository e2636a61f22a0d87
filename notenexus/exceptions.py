"""
Note Nexus Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for each failure the API reports.
How:   Each exception carries a client-safe message and an optional context
       dict (logged, never returned). Global handlers registered in main.py
       turn them into `{"error": true, "message": ...}` responses.
Who:   Raised by auth dependencies and services.

Exception Hierarchy:
    NoteNexusError (base)                   → 500
    ├── AuthenticationMissingError          → 403 (no bearer token)
    ├── AuthenticationInvalidError          → 401 (bad/expired token)
    ├── IdentityMismatchError               → 401 (asking about someone else)
    ├── AuthorizationDeniedError            → 403 (role mismatch)
    ├── NotFoundError                       → 404
    ├── ConflictError                       → 409
    │   ├── AlreadyEnrolledError
    │   └── SeatsUnavailableError
    ├── PaymentGatewayError                 → 500
    └── DatabaseError                       → 500
"""

from typing import Any, Dict, Optional

UNAUTHORIZED_MESSAGE = "Unauthorized Access"

# Wire-compatible with existing clients, which match on this exact string.
UNEXPECTED_ERROR_MESSAGE = "Unexped Error"


class NoteNexusError(Exception):
    """
    Base exception for all Note Nexus application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class AuthenticationMissingError(NoteNexusError):
    """No `Authorization: Bearer ...` header on a protected route."""

    status_code = 403

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message=UNAUTHORIZED_MESSAGE, context=context)


class AuthenticationInvalidError(NoteNexusError):
    """Token signature is wrong, the token expired, or it has no email claim."""

    status_code = 401

    def __init__(self, reason: str = "invalid token", context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["reason"] = reason
        super().__init__(message=UNAUTHORIZED_MESSAGE, context=ctx)


class IdentityMismatchError(NoteNexusError):
    """
    A valid caller asked for data keyed by another user's email.

    HTTP: 401, same body as an invalid token so the response does not
    confirm whether the other account exists.
    """

    status_code = 401

    def __init__(self, caller: str, requested: str):
        super().__init__(
            message=UNAUTHORIZED_MESSAGE,
            context={"caller": caller, "requested": requested},
        )


class AuthorizationDeniedError(NoteNexusError):
    """Caller is authenticated but lacks the role the route requires."""

    status_code = 403

    def __init__(self, required_role: str, actual_role: Optional[str] = None):
        super().__init__(
            message=UNAUTHORIZED_MESSAGE,
            context={"required_role": required_role, "actual_role": actual_role},
        )
        self.required_role = required_role


class NotFoundError(NoteNexusError):
    """A class, bookmark or user referenced by id does not exist."""

    status_code = 404

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(NoteNexusError):
    """The write would break a uniqueness or capacity rule."""

    status_code = 409

    def __init__(
        self,
        message: str = "The request conflicts with the current state",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AlreadyEnrolledError(ConflictError):
    """A payment record already exists for this (class, student) pair."""

    def __init__(self, class_id: str, student_email: str):
        super().__init__(
            message="You are already enrolled in this class",
            context={"class_id": class_id, "student_email": student_email},
        )


class SeatsUnavailableError(ConflictError):
    """The class has no seats left, so the enrollment cannot be recorded."""

    def __init__(self, class_id: str):
        super().__init__(
            message="No seats available for this class",
            context={"class_id": class_id},
        )


class PaymentGatewayError(NoteNexusError):
    """
    The payment gateway rejected or failed the request.

    HTTP: 500 with the generic message; the gateway's own error text is kept
    in context for the server log only.
    """

    def __init__(
        self,
        message: str = UNEXPECTED_ERROR_MESSAGE,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(NoteNexusError):
    """A database statement failed unexpectedly. Details are logged only."""

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
