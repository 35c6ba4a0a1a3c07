from .http import BadRequestError, ConflictError, ForbiddenError, NotFoundError, ServiceError, UnauthorizedError
from .startup import ConfigurationError

__all__ = [
    "ServiceError",
    "BadRequestError",
    "ConflictError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ConfigurationError",
]
