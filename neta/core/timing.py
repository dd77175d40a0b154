"""Timing utilities for profiling fetch and transform stages."""

import time
from collections.abc import Generator
from contextlib import contextmanager

from neta.core.logging import get_logger

logger = get_logger(__name__)


@contextmanager
def timed(operation: str, slow_ms: float = 5_000, very_slow_ms: float = 30_000) -> Generator[None]:
    """Context manager for timing operations.

    Args:
        operation: Description of the operation being timed.
        slow_ms: Duration above which the timing is logged at INFO as slow.
        very_slow_ms: Duration above which the timing is logged as a warning.

    Usage:
        with timed("transform 5 articles"):
            result = await orchestrator.process(items)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        if duration_ms < slow_ms:
            logger.debug(f"[{duration_ms:.2f}ms] {operation}")
        elif duration_ms < very_slow_ms:
            logger.info(f"[{duration_ms:.2f}ms] {operation} (slow)")
        else:
            logger.warning(f"[{duration_ms:.2f}ms] {operation} (very slow)")
