"""Error values with stack traces, wrapping, joining and HTTP status mapping.

    err = new("database connection failed")
    err = wrap(err, "failed to initialize storage")
    str(err)          # 'failed to initialize storage: database connection failed'
    f"{err:+v}"       # the same chain with stack traces, for logs
    cause(err)        # the original error
    as_http_error(err).code  # 500
"""

from errchain.errors import (
    Error,
    Fundamental,
    HTTPError,
    MultiError,
    WithMessage,
    WithStack,
    as_,
    cause,
    errorf,
    is_,
    join,
    new,
    unwrap,
    unwrap_all,
    with_message,
    with_messagef,
    with_stack,
    wrap,
    wrapf,
)
from errchain.http_errors import (
    ERR_BAD_REQUEST,
    ERR_FORBIDDEN,
    ERR_INTERNAL_SERVER,
    ERR_NOT_FOUND,
    ERR_SERVICE_UNAVAILABLE,
    ERR_UNAUTHORIZED,
    INTERNAL_SERVER_ERROR_MESSAGE,
    as_http_error,
    is_bad_request,
    is_forbidden,
    is_internal_server,
    is_not_found,
    is_unauthorized,
    new_http_error,
)
from errchain.stack import Frame, StackTrace, callers

__all__ = [
    "ERR_BAD_REQUEST",
    "ERR_FORBIDDEN",
    "ERR_INTERNAL_SERVER",
    "ERR_NOT_FOUND",
    "ERR_SERVICE_UNAVAILABLE",
    "ERR_UNAUTHORIZED",
    "Error",
    "Frame",
    "Fundamental",
    "HTTPError",
    "INTERNAL_SERVER_ERROR_MESSAGE",
    "MultiError",
    "StackTrace",
    "WithMessage",
    "WithStack",
    "as_",
    "as_http_error",
    "callers",
    "cause",
    "errorf",
    "is_",
    "is_bad_request",
    "is_forbidden",
    "is_internal_server",
    "is_not_found",
    "is_unauthorized",
    "join",
    "new",
    "new_http_error",
    "unwrap",
    "unwrap_all",
    "with_message",
    "with_messagef",
    "with_stack",
    "wrap",
    "wrapf",
]
