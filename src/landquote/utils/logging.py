"""
Logging utility functions.

Provides redaction of credentials before provider URLs and request
payloads are written to logs, and a decorator for timing calls.
"""

import functools
import logging
import re
import time
from typing import Any, Callable, List, Pattern, Set, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

SENSITIVE_PATTERNS: List[Pattern[str]] = [
    re.compile(r"(?<=[?&]key=)[^&\s]+", re.IGNORECASE),
    re.compile(r"api[_-]?key[\"']?\s*[:=]\s*[\"']?([^\"'\s,}]+)", re.IGNORECASE),
    re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"),  # Email addresses
]

SENSITIVE_FIELDS: Set[str] = {
    "key",
    "api_key",
    "google_maps_api_key",
    "email",
    "phone",
    "token",
    "authorization",
}


def redact_sensitive(data: Any, redaction_text: str = "***REDACTED***") -> Any:
    """
    Redact sensitive information from data structures.

    Recursively traverses dictionaries, lists and tuples. Strings are
    scrubbed with the known credential patterns.

    Args:
        data: Data to redact
        redaction_text: Text to replace sensitive data with

    Returns:
        Data with sensitive information redacted

    Example:
        >>> redact_sensitive({"key": "AIza123", "address": "12 Oak St"})
        {'key': '***REDACTED***', 'address': '12 Oak St'}
    """
    if isinstance(data, dict):
        return {
            key: (
                redaction_text
                if str(key).lower() in SENSITIVE_FIELDS
                else redact_sensitive(value, redaction_text)
            )
            for key, value in data.items()
        }
    elif isinstance(data, list):
        return [redact_sensitive(item, redaction_text) for item in data]
    elif isinstance(data, tuple):
        return tuple(redact_sensitive(item, redaction_text) for item in data)
    elif isinstance(data, str):
        redacted = data
        for pattern in SENSITIVE_PATTERNS:
            redacted = pattern.sub(redaction_text, redacted)
        return redacted
    else:
        return data


def log_performance(
    threshold_ms: float = 0.0,
    log_level: int = logging.DEBUG,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator to log the execution time of a synchronous function.

    Args:
        threshold_ms: Only log calls slower than this many milliseconds
        log_level: Logging level to use

    Returns:
        Decorated function
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            start = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                duration_ms = (time.perf_counter() - start) * 1000
                if duration_ms >= threshold_ms:
                    logging.getLogger(func.__module__).log(
                        log_level,
                        f"{func.__qualname__} completed in {duration_ms:.3f}ms",
                        extra={"duration_ms": round(duration_ms, 3)},
                    )

        return wrapper

    return decorator
