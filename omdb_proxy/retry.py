from __future__ import annotations

import functools
import logging
import time
from typing import Any, Callable

logger = logging.getLogger(__name__)


def exponential_backoff(base: float) -> Callable[[int], float]:
    """Return a delay function mapping retry number ``n`` to ``base ** n`` seconds."""

    def delay(attempt: int) -> float:
        return base ** attempt

    return delay


def is_transient(exc: BaseException) -> bool:
    return bool(getattr(exc, "is_transient", False))


def retry_on(
    predicate: Callable[[BaseException], bool],
    retries: int = 3,
    backoff: Callable[[int], float] | None = None,
    sleep: Callable[[float], Any] | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Retry the decorated call while ``predicate`` accepts the raised exception.

    ``retries`` counts retries, not attempts: ``retries=3`` allows four calls.
    The last failure, or any failure the predicate rejects, is re-raised as is.
    """
    if backoff is None:
        backoff = exponential_backoff(3)

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            attempt = 0
            while True:
                try:
                    return func(*args, **kwargs)
                except Exception as exc:
                    if attempt >= retries or not predicate(exc):
                        raise
                    attempt += 1
                    wait_time = backoff(attempt)
                    logger.warning(
                        "%s failed (%s), retry %d/%d in %s seconds",
                        getattr(func, "__qualname__", repr(func)),
                        exc,
                        attempt,
                        retries,
                        wait_time,
                    )
                    (sleep or time.sleep)(wait_time)

        return wrapper

    return decorator
