from __future__ import annotations

import sys
import traceback
from typing import Any

from loguru import logger

from errchain.config import Settings
from errchain.errors import Error

TAG_ERR_MESSAGE = "error.message"
TAG_ERR_KIND = "error.kind"
TAG_ERR_STACK = "error.stack"


def configure_logging(settings: Settings | None = None) -> int:
    """Replace loguru sinks with a single stderr sink; return its id."""
    settings = settings or Settings()
    logger.remove()
    return logger.add(
        sys.stderr,
        level=settings.log_level,
        serialize=settings.log_json,
        backtrace=False,
        diagnose=False,
    )


def error_kind(err: BaseException) -> str:
    cls = type(err)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def error_stack(err: BaseException) -> str:
    """Detailed rendering for our errors, the Python traceback for others."""
    if isinstance(err, Error):
        return format(err, "+v")
    return "".join(traceback.format_exception(err)).rstrip("\n")


def error_fields(err: BaseException, *, stack: bool = True) -> dict[str, str]:
    fields = {
        TAG_ERR_MESSAGE: str(err),
        TAG_ERR_KIND: error_kind(err),
    }
    if stack:
        fields[TAG_ERR_STACK] = error_stack(err)
    return fields


def log_error(
    err: BaseException,
    event: str,
    message: str,
    *,
    log: Any = logger,
    stack: bool = True,
    **fields: Any,
) -> None:
    """Log ``err`` at ERROR level bound with the event and error fields.

    The bound keys are ``event``, ``error.message``, ``error.kind`` and,
    unless ``stack`` is false, ``error.stack``.
    """
    log.bind(event=event, **fields, **error_fields(err, stack=stack)).error(message)
