"""
Timing and operation logging for calculation runs and saved-file I/O
"""

import time
import logging
from typing import Dict, Any, Optional, Callable, TypeVar
from contextlib import contextmanager
from functools import wraps

logger = logging.getLogger(__name__)

T = TypeVar('T')


class Timer:
    """Logs elapsed milliseconds at DEBUG on exit; duration is kept in seconds"""

    def __init__(self, name: str, logger: Optional[logging.Logger] = None):
        self.name = name
        self.logger = logger or logging.getLogger(__name__)
        self.start_time = None
        self.duration = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = time.perf_counter() - self.start_time
        self.logger.debug(f"{self.name} took {self.duration * 1000:.2f}ms")


@contextmanager
def log_operation(operation_name: str, context: Dict[str, Any], logger: Optional[logging.Logger] = None):
    """Log start, completion or failure of an operation with its context as extras"""
    logger = logger or logging.getLogger(__name__)
    start_time = time.perf_counter()
    logger.info(f"Starting {operation_name}", extra={'operation': operation_name, 'context': context})

    try:
        yield
    except Exception as e:
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.error(f"Failed {operation_name} after {elapsed_ms:.2f}ms: {e}", extra={
            'operation': operation_name,
            'context': context,
            'error_type': type(e).__name__,
        })
        raise

    elapsed_ms = (time.perf_counter() - start_time) * 1000
    logger.info(f"Completed {operation_name} in {elapsed_ms:.2f}ms",
                extra={'operation': operation_name, 'context': context})


def timed_operation(operation_name: Optional[str] = None):
    """Decorator: DEBUG timing on success, ERROR with timing on failure"""
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        name = operation_name or func.__name__

        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(f"[TIMING] {name} failed after "
                             f"{(time.perf_counter() - start_time) * 1000:.2f}ms: {e}")
                raise
            logger.debug(f"[TIMING] {name} took {(time.perf_counter() - start_time) * 1000:.2f}ms")
            return result

        return wrapper
    return decorator
