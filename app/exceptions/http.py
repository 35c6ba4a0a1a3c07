"""
Typed business-rule failures raised by the Service Layer.

Each error carries only a human-readable message and the transport status it
maps to. The boundary handler in app.main turns them into a
{success: false, message} envelope.
"""

from fastapi import status


class ServiceError(Exception):
    """Base class for all expected, user-facing failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(ServiceError):
    """Raised when the entity being created already exists."""

    status_code = status.HTTP_409_CONFLICT


class UnauthorizedError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
