# catalog_api/errors.py
import functools
import logging
from typing import Callable, Optional

logger = logging.getLogger("catalog_api.errors")


class ApiError(Exception):
    """Failure that maps straight onto an HTTP status and ``{"error": ...}`` body."""

    status_code = 500
    default_message = "Something went wrong!"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ApiError):
    status_code = 400
    default_message = "Invalid product payload"


class AuthError(ApiError):
    status_code = 401
    default_message = "Unauthorized: Invalid or missing token"


class NotFoundError(ApiError):
    status_code = 404
    default_message = "Product not found"


class ConflictError(ApiError):
    status_code = 409
    default_message = "Product with this name already exists"


class InternalError(ApiError):
    status_code = 500


def handler_boundary(message: str) -> Callable:
    """Downgrade anything that is not an ``ApiError`` to ``InternalError(message)``.

    The real cause is logged with its traceback and never returned to
    the caller.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except ApiError:
                raise
            except Exception:
                logger.exception("%s: unexpected error in %s", message, func.__name__)
                raise InternalError(message)
        return wrapper
    return decorator
