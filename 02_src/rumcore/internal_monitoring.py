"""Guard for instrumentation code running inside host call paths."""

import functools
from typing import Any, Callable, TypeVar

from .logging_config import get_logger

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def monitor(fn: F) -> F:
    """Log and swallow any exception raised by fn; return None instead.

    Only for agent bookkeeping. Never wrap the host's own call with it, or
    the host would stop seeing its exceptions.
    """

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return fn(*args, **kwargs)
        except Exception:
            logger.exception("Internal error in %s", fn.__qualname__)
            return None

    return wrapper  # type: ignore[return-value]
