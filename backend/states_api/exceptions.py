"""
States API Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the three failure classes the API
       distinguishes: bad input, missing resources, and store failures.
How:   Each exception carries a user-safe message and an optional context dict.
       Global exception handlers (registered in main.py) map them to HTTP
       status codes and a structured JSON body.
Who:   Raised by the catalog, the fact service and the fact store.

Exception Hierarchy:
    StatesApiError (base)        → 500 Internal Server Error
    ├── ValidationError          → 400 Bad Request
    ├── NotFoundError            → 404 Not Found
    │   ├── StateNotFoundError   (unknown state code)
    │   └── FactNotFoundError    (no facts, or fact index out of range)
    └── FactStoreError           → 500 Internal Server Error (generic message)
"""

from typing import Any, Dict, Optional


class StatesApiError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged; only returned for client errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(StatesApiError):
    """
    Raised when client input fails validation.

    When:  Missing or malformed `funfacts`, `index` or `funfact` values.
    HTTP:  400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "State fun facts value must be an array",
            "details": {"field": "funfacts"}
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


class NotFoundError(StatesApiError):
    """
    Raised when a requested resource does not exist.

    HTTP:  404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id:
                message = f"{resource} '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StateNotFoundError(NotFoundError):
    """The path parameter is not one of the catalog's two-letter codes."""

    def __init__(self, code: str):
        super().__init__(
            resource="state",
            resource_id=code,
            message="Invalid state abbreviation parameter",
        )
        self.code = code


class FactNotFoundError(NotFoundError):
    """
    Raised when a fact operation has nothing to act on.

    When:  The state has no fun facts yet, or the 1-based index is outside
           the current list.
    """

    def __init__(self, state_name: str, index: Optional[int] = None):
        if index is None:
            message = f"No Fun Facts found for {state_name}"
        else:
            message = f"No Fun Fact found at that index for {state_name}"
        ctx: Dict[str, Any] = {"state": state_name}
        if index is not None:
            ctx["index"] = index
        super().__init__(resource="fun fact", message=message, context=ctx)
        self.index = index


class FactStoreError(StatesApiError):
    """
    Raised when the fun-facts store fails (connection lost, constraint
    violation, timeout).

    HTTP:  500 Internal Server Error. The response carries a generic
    message; details stay in the server log. Operations are not retried.
    """

    def __init__(
        self,
        message: str = "The fun facts store is unavailable. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
