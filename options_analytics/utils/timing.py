"""Timing helpers for logging."""

import time
from contextlib import contextmanager
from typing import Iterator


@contextmanager
def log_timing(logger, label: str, enabled: bool = True) -> Iterator[None]:
    """Log the wall time of a code block at DEBUG level when enabled is True."""
    if not enabled:
        yield
        return
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        logger.debug("Timing %s: %.6fs", label, elapsed)
