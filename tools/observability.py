"""Observability helpers for instrumenting app operations."""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Callable, ParamSpec, TypeVar

from yourfit_app.logging_config import (
    get_logger,
    log_event,
    operation_context,
    redact_for_log,
)

LOGGER = get_logger(__name__)
P = ParamSpec("P")
R = TypeVar("R")


def _preview_args(args: tuple, kwargs: dict, max_keys: int = 6) -> dict:
    named = [(f"arg{idx}", value) for idx, value in enumerate(args)] + list(kwargs.items())
    preview: dict = dict(named[:max_keys])
    if len(named) > max_keys:
        preview["truncated"] = True
    return redact_for_log(preview)


def instrument_operation(operation: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Wrap a method to emit structured start/complete/fail logs with durations.

    The bound ``self`` is not included in the logged arguments.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            with operation_context(operation) as correlation_id:
                start = time.perf_counter()
                log_event(
                    LOGGER,
                    logging.DEBUG,
                    "operation_started",
                    operation=operation,
                    correlation_id=correlation_id,
                    arguments=_preview_args(tuple(args[1:]), dict(kwargs)),
                )
                try:
                    result = func(*args, **kwargs)
                except Exception:
                    duration_ms = round((time.perf_counter() - start) * 1000, 2)
                    log_event(
                        LOGGER,
                        logging.ERROR,
                        "operation_failed",
                        operation=operation,
                        correlation_id=correlation_id,
                        duration_ms=duration_ms,
                        exc_info=True,
                    )
                    raise
                duration_ms = round((time.perf_counter() - start) * 1000, 2)
                status = result.get("status") if isinstance(result, dict) else None
                log_event(
                    LOGGER,
                    logging.INFO,
                    "operation_completed",
                    operation=operation,
                    correlation_id=correlation_id,
                    duration_ms=duration_ms,
                    status=status,
                )
                return result

        return wrapper

    return decorator


__all__ = ["instrument_operation"]
