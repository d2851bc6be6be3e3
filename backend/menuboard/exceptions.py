"""
MenuBoard — Custom Exception Hierarchy
========================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services, validation and route handlers; caught by global handlers.

Exception Hierarchy:
    MenuBoardError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, List, Optional


class MenuBoardError(Exception):
    """
    Base exception for all MenuBoard application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(MenuBoardError):
    """
    Raised when a request body fails validation.

    HTTP:    400 Bad Request

    `errors` holds one entry per failed rule, each a FieldError with the
    field name, the failing constraint and the rejected value.

    Example response:
        {
            "error": "validation_error",
            "message": "Request body failed validation",
            "errors": [
                {"field": "image", "constraint": "url",
                 "value": "not a url", "message": "image must be a valid URL"}
            ]
        }
    """

    def __init__(
        self,
        message: str = "Request body failed validation",
        errors: Optional[List[Any]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.errors = list(errors or [])


class NotFoundError(MenuBoardError):
    """
    Raised when a requested record does not exist.

    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows; the service layer converts
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


class DatabaseError(MenuBoardError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, constraint violation, etc.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; SQL details are
    logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
