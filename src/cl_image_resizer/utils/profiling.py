"""Stage timing for the image pipeline."""

import inspect
import time
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import ParamSpec, TypeVar, cast

from loguru import logger

P = ParamSpec("P")
R = TypeVar("R")


def timed_stage(stage: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator logging how long a pipeline stage took.

    Works for plain and ``async`` functions. The elapsed time is logged at
    DEBUG level even when the stage raises.

    Usage:
        @timed_stage("resize")
        def resize_image(image, ...):
            ...
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        def log_elapsed(start_time: float) -> None:
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            logger.debug(f"[PROFILE] {stage} took {elapsed_ms:.1f} ms")

        if inspect.iscoroutinefunction(func):
            async_func = cast(Callable[P, Awaitable[object]], func)

            @wraps(func)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> object:
                start_time = time.perf_counter()
                try:
                    return await async_func(*args, **kwargs)
                finally:
                    log_elapsed(start_time)

            return cast(Callable[P, R], async_wrapper)

        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            start_time = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                log_elapsed(start_time)

        return wrapper

    return decorator
