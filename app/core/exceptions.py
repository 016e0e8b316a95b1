"""Domain error taxonomy.

Services raise these; the handlers registered in ``app.main`` turn them
into the ``{"success": false, "message": ...}`` envelope.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors that map to a client-facing HTTP status"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing or malformed input"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request data"


class AuthError(AppError):
    """Bad credentials or a missing/invalid/expired token"""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authorized"


class ForbiddenError(AppError):
    """The authenticated user does not own the resource.

    Reported as 401 to stay compatible with the deployed mobile client.
    """
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authorized to access this resource"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ConflictError(AppError):
    """Duplicate unique field or a state that forbids the operation"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Resource already exists"
