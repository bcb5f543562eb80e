"""
SkyRoutes Backend - Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for the two failure classes of a
       read-only query API.
How:   Each exception carries a user-facing message and an optional context
       dict. Global handlers registered in main.py turn them into structured
       JSON error responses with the right HTTP status.
Who:   Raised by services and the database layer; caught by global handlers.

Exception Hierarchy:
    SkyRoutesError (base)     → 500 Internal Server Error
    ├── ValidationError       → 400 Bad Request (strictly enumerated parameter)
    └── DatabaseError         → 500 Internal Server Error (data source failure)

Not errors:
    - An empty result set (200 with an empty collection and total 0)
    - A non-numeric limit, offset or duration bound (silently defaulted/dropped)
"""

from typing import Any, Dict, Optional


class SkyRoutesError(Exception):
    """
    Base exception for all SkyRoutes application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client
                  unless the handler explicitly exposes it)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(SkyRoutesError):
    """
    Raised when a strictly validated request parameter has an unknown value.

    When:    `direction` is neither "departure" nor "arrival".
    HTTP:    400 Bad Request, raised before any query is executed.

    Example response:
        {
            "error": "validation_error",
            "message": "Invalid direction parameter",
            "details": {"field": "direction", "allowed": ["departure", "arrival"]}
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


class DatabaseError(SkyRoutesError):
    """
    Raised when reading the dataset fails.

    When:    The database file is missing or unreadable, a query fails to
             compile or execute, or the startup schema check finds a missing
             table or view.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. The SQL error and
    any table names stay in the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
