"""
Operation Tracing
Structured start/end logging with durations for pipeline operations
"""

import time
from contextlib import contextmanager
from typing import Any, Iterator

from ..core.logging_config import get_logger

logger = get_logger(__name__)

SLOW_OPERATION_MS = 1000.0


class Span:
    """
    Timing span for one operation.

    Extra context recorded while the span is open is included in the
    finishing log line.
    """

    def __init__(self, name: str, **kwargs: Any) -> None:
        self.name = name
        self.context = kwargs
        self.start_time = time.perf_counter()

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self.start_time) * 1000

    def record(self, key: str, value: Any) -> None:
        """Record additional context."""
        self.context[key] = value


@contextmanager
def trace_operation(operation: str, slow_ms: float = SLOW_OPERATION_MS, **kwargs: Any) -> Iterator[Span]:
    """
    Context manager for tracing operations with structured logging.

    Args:
        operation: Name of the operation
        slow_ms: Duration above which the end is logged as a warning
        **kwargs: Additional context to log

    Yields:
        The open Span
    """
    span = Span(operation, **kwargs)
    logger.debug("operation_start", operation=operation, **kwargs)

    try:
        yield span
    except Exception as e:
        logger.error(
            "operation_error",
            operation=operation,
            error=str(e),
            duration_ms=span.elapsed_ms,
            **span.context,
        )
        raise
    else:
        duration_ms = span.elapsed_ms
        if duration_ms > slow_ms:
            logger.warning("operation_slow", operation=operation, duration_ms=duration_ms, **span.context)
        else:
            logger.debug("operation_end", operation=operation, duration_ms=duration_ms, **span.context)
