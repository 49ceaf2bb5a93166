"""
Domain errors raised by the service layer.

Services never build HTTP responses themselves.  They raise one of the
exceptions below and the handlers registered in ``main.create_app``
render it as ``{"message": ...}`` with the matching status code.
"""

from typing import Optional


class ServiceError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(ServiceError):
    """Bad or missing input."""

    status_code = 400
    default_message = "Invalid request"


class ConflictError(ServiceError):
    """The resource already exists or is in a conflicting state."""

    status_code = 409
    default_message = "Conflict"


class AuthError(ServiceError):
    """Bad credentials or a missing, invalid or expired token."""

    status_code = 401
    default_message = "Not authenticated"


class ForbiddenError(ServiceError):
    """Authenticated, but the role does not allow the operation."""

    status_code = 403
    default_message = "Insufficient permissions"


class NotFoundError(ServiceError):
    status_code = 404
    default_message = "Not found"


class PersistenceError(ServiceError):
    """Storage or transaction failure."""

    status_code = 500
    default_message = "Server error"
