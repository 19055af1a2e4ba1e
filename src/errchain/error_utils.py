from __future__ import annotations

import asyncio
import functools
import inspect
from collections.abc import Callable
from typing import Any, NoReturn, ParamSpec, TypeVar

from loguru import logger

from errchain.errors import wrap
from errchain.http_errors import as_http_error
from errchain.log import log_error

P = ParamSpec("P")
R = TypeVar("R")


def log_and_wrap(
    exc: BaseException,
    message: str,
    *,
    log: Any = logger,
    event: str = "error.wrapped",
    context: dict[str, Any] | None = None,
) -> NoReturn:
    """Log *exc* and raise it wrapped with *message*.

    The raised error keeps its own cause chain: ``__cause__`` is the message
    layer, whose cause is *exc*.
    """
    log_error(exc, event, message, log=log, **(context or {}))
    wrapped = wrap(exc, message, skip=1)
    raise wrapped from wrapped.__cause__


def wrap_exceptions(
    message: str, *, event: str = "error.wrapped"
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator to log errors escaping the function and wrap them with *message*."""

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs):  # type: ignore[override]
                try:
                    return await func(*args, **kwargs)
                except asyncio.CancelledError:
                    raise
                except Exception as exc:
                    log_error(exc, event, message)
                    wrapped = wrap(exc, message, skip=1)
                    raise wrapped from wrapped.__cause__

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs):  # type: ignore[override]
            try:
                return func(*args, **kwargs)
            except Exception as exc:
                log_error(exc, event, message)
                wrapped = wrap(exc, message, skip=1)
                raise wrapped from wrapped.__cause__

        return sync_wrapper  # type: ignore[return-value]

    return decorator


def http_boundary(func: Callable[P, R]) -> Callable[P, R]:
    """Decorator for API handlers: every escaping error carries an HTTP status.

    Errors with an ``HTTPError`` in their chain propagate unchanged; anything
    else is re-raised as a 500 ``HTTPError`` caused by the original. The
    error is logged once, here.
    """
    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args: P.args, **kwargs: P.kwargs):  # type: ignore[override]
            try:
                return await func(*args, **kwargs)
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                http_err = as_http_error(exc)
                log_error(exc, "api.error", http_err.message, status=http_err.code)
                if http_err.cause is not exc:
                    raise
                raise http_err from exc

        return async_wrapper  # type: ignore[return-value]

    @functools.wraps(func)
    def sync_wrapper(*args: P.args, **kwargs: P.kwargs):  # type: ignore[override]
        try:
            return func(*args, **kwargs)
        except Exception as exc:
            http_err = as_http_error(exc)
            log_error(exc, "api.error", http_err.message, status=http_err.code)
            if http_err.cause is not exc:
                raise
            raise http_err from exc

    return sync_wrapper  # type: ignore[return-value]
