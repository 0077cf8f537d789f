"""Base handler class to reduce duplication across feature handlers."""

from typing import TypeVar, Generic, Callable, Any
from functools import wraps
import logging
import asyncpg
from ..core.domain_exceptions import DomainException

# Type variable for handler return types
TResult = TypeVar('TResult')

logger = logging.getLogger(__name__)


class BaseHandler(Generic[TResult]):
    """Base handler class."""

    async def handle(self, *args, **kwargs) -> TResult:
        """Abstract method to be implemented by subclasses."""
        raise NotImplementedError("Subclasses must implement handle method")


def with_error_handling(func: Callable) -> Callable:
    """Decorator for consistent error handling across handlers."""
    @wraps(func)
    async def wrapper(self, *args, **kwargs) -> Any:
        try:
            return await func(self, *args, **kwargs)
        except DomainException as e:
            # Domain exceptions are expected - log at INFO level
            logger.info(f"Domain exception in {self.__class__.__name__}: {e}")
            raise
        except asyncpg.PostgresError as e:
            logger.error(f"Database error in {self.__class__.__name__}: {str(e)}")
            raise DomainException(
                "Database operation failed",
                details={"original_error": str(e), "error_type": type(e).__name__}
            ) from e
        except Exception as e:
            # Unexpected exceptions - log at ERROR level
            logger.error(f"Unexpected error in {self.__class__.__name__}: {str(e)}", exc_info=True)
            raise DomainException(
                "An unexpected error occurred",
                details={"original_error": str(e), "error_type": type(e).__name__}
            ) from e
    return wrapper


__all__ = ['BaseHandler', 'with_error_handling']
