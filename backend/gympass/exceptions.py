"""
GymPass Backend — Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for every domain rule and failure mode.
How:   Each exception carries a message, an optional context dict, an HTTP
       status code and a machine-readable error code. Global exception
       handlers (registered in main.py) turn them into JSON error responses.
Who:   Raised by services, repositories and auth dependencies.

Exception Hierarchy:
    GymPassError (base)
    ├── UserAlreadyExistsError        → 409 Conflict
    ├── InvalidCredentialsError       → 400 Bad Request
    ├── ResourceNotFoundError         → 404 Not Found
    ├── MaxDistanceError              → 400 Bad Request
    ├── MaxNumberOfCheckInsError      → 400 Bad Request
    ├── LateCheckInValidationError    → 400 Bad Request
    ├── CheckInAlreadyValidatedError  → 409 Conflict
    ├── UnauthorizedError             → 401 Unauthorized
    ├── ForbiddenError                → 403 Forbidden
    └── DatabaseError                 → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class GymPassError(Exception):
    """
    Base exception for all GymPass application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional info returned as `details` for 4xx errors;
                  only logged for 5xx errors
    """

    status_code: int = 500
    error_code: str = "internal_server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class UserAlreadyExistsError(GymPassError):
    """Raised on registration when the e-mail is already taken."""

    status_code = 409
    error_code = "user_already_exists"

    def __init__(self, email: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="E-mail already exists.", context=context)
        self.email = email


class InvalidCredentialsError(GymPassError):
    """
    Raised when authentication fails.

    Unknown e-mail and wrong password produce the same error so the response
    does not reveal which accounts exist.
    """

    status_code = 400
    error_code = "invalid_credentials"

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Invalid credentials.", context=context)


class ResourceNotFoundError(GymPassError):
    """
    Raised when a requested resource does not exist.

    When:    Unknown user id on GET /me, unknown gym on check-in,
             unknown check-in on validation.
    """

    status_code = 404
    error_code = "resource_not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = "Resource not found."
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class MaxDistanceError(GymPassError):
    """Raised when the user is farther from the gym than the check-in radius."""

    status_code = 400
    error_code = "max_distance"

    def __init__(
        self,
        distance_km: Optional[float] = None,
        max_distance_km: Optional[float] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if distance_km is not None:
            ctx["distance_km"] = round(distance_km, 4)
        if max_distance_km is not None:
            ctx["max_distance_km"] = max_distance_km
        super().__init__(message="Max distance reached.", context=ctx)
        self.distance_km = distance_km


class MaxNumberOfCheckInsError(GymPassError):
    """Raised when the user already checked in on the current UTC calendar day."""

    status_code = 400
    error_code = "max_number_of_check_ins"

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Max number of check-ins reached.", context=context)


class LateCheckInValidationError(GymPassError):
    """Raised when an admin validates a check-in after the validation window closed."""

    status_code = 400
    error_code = "late_check_in_validation"

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            message="The check-in can only be validated until 20 minutes of its creation.",
            context=context,
        )


class CheckInAlreadyValidatedError(GymPassError):
    """Raised when validating a check-in whose validated_at is already set."""

    status_code = 409
    error_code = "check_in_already_validated"

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Check-in has already been validated.", context=context)


class UnauthorizedError(GymPassError):
    """Missing, malformed, expired or wrong-type token."""

    status_code = 401
    error_code = "unauthorized"

    def __init__(self, message: str = "Unauthorized.", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class ForbiddenError(GymPassError):
    """Authenticated, but the token's role may not perform the action."""

    status_code = 403
    error_code = "forbidden"

    def __init__(self, message: str = "Forbidden.", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class DatabaseError(GymPassError):
    """
    Raised when database operations fail unexpectedly.

    Security Note:
        The message returned to the client is always generic.
        Details (constraint names, SQL) are logged server-side only.
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
