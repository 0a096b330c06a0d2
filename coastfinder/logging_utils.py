from __future__ import annotations

import logging
import reprlib
import time
from functools import wraps
from typing import Any, Callable, Mapping, Optional, Sequence, TypeVar, cast

import numpy as np

F = TypeVar("F", bound=Callable[..., Any])

LOG_FORMAT = "%(asctime)s %(levelname)s:%(name)s:%(message)s"

_repr = reprlib.Repr()
_repr.maxother = 160
_repr.maxlist = 10
_repr.maxtuple = 10


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for command-line entry points."""

    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=log_level, format=LOG_FORMAT)


def _safe_repr(value: Any, *, max_length: int = 400) -> str:
    if isinstance(value, np.ndarray):
        return f"ndarray(shape={tuple(value.shape)}, dtype={value.dtype})"

    # Datasets can hold many thousands of features; summarise instead of listing.
    if hasattr(value, "features") and hasattr(value, "bounds"):
        return f"{type(value).__name__}(features={len(value.features)})"

    try:
        rendered = _repr.repr(value)
    except Exception as exc:  # pragma: no cover - repr of foreign objects
        rendered = f"<repr-error {exc!r}>"
    if len(rendered) > max_length:
        return rendered[:max_length] + "... (truncated)"
    return rendered


def _call_signature(label: str, args: Sequence[Any], kwargs: Mapping[str, Any]) -> str:
    rendered = [_safe_repr(arg) for arg in args]
    rendered.extend(f"{key}={_safe_repr(value)}" for key, value in kwargs.items())
    return f"{label}({', '.join(rendered)})"


def debug_log_call(logger: logging.Logger, *, name: Optional[str] = None) -> Callable[[F], F]:
    """Trace a call at DEBUG level: arguments, then the result and elapsed time.

    Nothing is formatted unless ``logger`` has DEBUG enabled.
    """

    def decorator(func: F) -> F:
        label = name or func.__qualname__

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            if not logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)

            logger.debug("%s started", _call_signature(label, args, kwargs))
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                elapsed_ms = (time.perf_counter() - started) * 1000.0
                logger.debug("%s failed after %.1f ms: %r", label, elapsed_ms, exc)
                raise
            elapsed_ms = (time.perf_counter() - started) * 1000.0
            logger.debug("%s -> %s in %.1f ms", label, _safe_repr(result), elapsed_ms)
            return result

        return cast(F, wrapper)

    return decorator
