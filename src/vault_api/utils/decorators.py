"""Decorator utilities for cross-cutting concerns."""
import time
import logging
import functools
from typing import Any, Callable, Optional, TypeVar, cast

logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])


def log_execution_time(func: F) -> F:
    """Decorator to log function execution time.

    Failures are logged with their duration and re-raised untouched.

    Args:
        func: The function to decorate

    Returns:
        Decorated function that logs execution time
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            duration = time.perf_counter() - start_time
            logger.error(f"{func.__qualname__} failed after {duration:.3f}s: {str(e)}")
            raise
        duration = time.perf_counter() - start_time
        logger.debug(f"{func.__qualname__} completed in {duration:.3f}s")
        return result
    return cast(F, wrapper)


def best_effort(exceptions: tuple = (Exception,), fallback: Any = None,
                logger_name: Optional[str] = None):
    """Decorator that absorbs the given exceptions and returns ``fallback``.

    The exception is logged at WARNING level at the point of the call and
    is never re-raised, retried or deferred.

    Args:
        exceptions: Tuple of exceptions to absorb
        fallback: Value returned when one of ``exceptions`` is raised
        logger_name: Optional logger name (defaults to module logger)

    Returns:
        Decorator function
    """
    boundary_logger = logging.getLogger(logger_name) if logger_name else logger

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except exceptions as e:
                boundary_logger.warning(f"{func.__name__} skipped: {str(e)}")
                return fallback
        return cast(F, wrapper)

    return decorator
