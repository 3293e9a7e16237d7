"""
Codeloom Backend - Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception carries a user-facing message and an optional context
       dict. Global handlers (registered in main.py) map them to structured
       JSON responses with the right HTTP status code.
Who:   Raised by services and routes; caught by the global handlers.

Exception Hierarchy:
    CodeloomError (base)   → 500 Internal Server Error
    ├── ValidationError    → 400 Bad Request (client can fix)
    ├── NotFoundError      → 404 Not Found
    └── DatabaseError      → 500 Internal Server Error (generic message)

Note:
    The practice lookup accessor (`practice_service.get_practice_by_id`)
    raises none of these. It returns the ORM result unchanged; translation of
    an absent record into NotFoundError happens one layer up.
"""

from typing import Any, Dict, Optional


class CodeloomError(Exception):
    """
    Base exception for all Codeloom application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned for 5xx errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(CodeloomError):
    """
    Raised when client input fails a business rule.

    When:    Unknown plan key, unsupported llm mode, blank practice name.
    HTTP:    400 Bad Request

    Schema-level problems (wrong JSON types) are still answered by FastAPI
    with 422; this class is for rules the schemas cannot express.

    Example response:
        {
            "error": "validation_error",
            "message": "Invalid plan_key. Must be one of: plan_a, plan_b, plan_c",
            "details": {"field": "plan_key"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(CodeloomError):
    """
    Raised when a requested resource does not exist.

    When:    GET /api/practices/{id} with an unknown id.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing records; the service layer converts
    that None into this exception.
    """

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
        self.resource = resource
        self.resource_id = resource_id


class DatabaseError(CodeloomError):
    """
    Raised when a database operation fails unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. Query text,
    constraint names and driver errors are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
