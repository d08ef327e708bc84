from functools import wraps
from typing import Any, Awaitable, Callable, TypeVar
import logging
from sqlalchemy.exc import SQLAlchemyError

T = TypeVar('T')

logger = logging.getLogger(__name__)

class MatchingError(Exception):
    """Base class for errors raised by the matching engine."""
    pass

class ValidationError(MatchingError):
    """Raised when an interaction event is malformed or incomplete."""

    def __init__(self, message: str, errors: list = None):
        super().__init__(message)
        self.errors = errors or []

class StorageError(MatchingError):
    """Raised when a profile, interaction or success-pattern store fails."""
    pass

class ProfileNotFoundError(StorageError):
    """Raised when a profile lookup finds nothing."""

    def __init__(self, user_id: str):
        super().__init__(f"Profile {user_id} not found")
        self.user_id = user_id

def storage_operation(
    name: str,
    exceptions: tuple = (SQLAlchemyError,)
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Decorator that translates backend failures into StorageError.

    Errors are logged and surfaced, never retried here; retry policy belongs
    to the caller.

    Args:
        name: Name of the storage operation, used in log and error messages
        exceptions: Tuple of backend exceptions to translate
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except StorageError:
                raise
            except exceptions as e:
                logger.error(f"Storage operation {name} failed: {str(e)}")
                raise StorageError(f"{name} failed: {str(e)}") from e

        return wrapper
    return decorator
