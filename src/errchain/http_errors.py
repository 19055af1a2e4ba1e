from __future__ import annotations

from http import HTTPStatus

from errchain.errors import HTTPError, as_
from errchain.stack import callers

INTERNAL_SERVER_ERROR_MESSAGE = "Internal Server Error"


def new_http_error(
    code: int, message: str, cause: BaseException | None = None
) -> HTTPError:
    """Create an HTTP error; ``cause`` stays reachable through the chain.

        new_http_error(HTTPStatus.NOT_FOUND, "user not found")
        new_http_error(HTTPStatus.INTERNAL_SERVER_ERROR, "database error", db_err)
    """
    return HTTPError(int(code), message, cause, callers())


def as_http_error(err: BaseException | None) -> HTTPError:
    """Return the HTTP error in the chain of ``err``.

    Anything else is wrapped as a 500 with a generic message, keeping
    ``err`` as the cause.
    """
    found = as_(err, HTTPError)
    if found is not None:
        return found
    return HTTPError(
        int(HTTPStatus.INTERNAL_SERVER_ERROR),
        INTERNAL_SERVER_ERROR_MESSAGE,
        err,
        callers(),
    )


ERR_NOT_FOUND = new_http_error(HTTPStatus.NOT_FOUND, "Resource not found")
ERR_BAD_REQUEST = new_http_error(HTTPStatus.BAD_REQUEST, "Bad request")
ERR_UNAUTHORIZED = new_http_error(HTTPStatus.UNAUTHORIZED, "Unauthorized")
ERR_FORBIDDEN = new_http_error(HTTPStatus.FORBIDDEN, "Forbidden")
ERR_INTERNAL_SERVER = new_http_error(
    HTTPStatus.INTERNAL_SERVER_ERROR, "Internal server error"
)
ERR_SERVICE_UNAVAILABLE = new_http_error(
    HTTPStatus.SERVICE_UNAVAILABLE, "Service unavailable"
)

SENTINELS: dict[int, HTTPError] = {
    err.code: err
    for err in (
        ERR_NOT_FOUND,
        ERR_BAD_REQUEST,
        ERR_UNAUTHORIZED,
        ERR_FORBIDDEN,
        ERR_INTERNAL_SERVER,
        ERR_SERVICE_UNAVAILABLE,
    )
}


def _has_status(err: BaseException | None, status: HTTPStatus) -> bool:
    found = as_(err, HTTPError)
    return found is not None and found.code == status


def is_not_found(err: BaseException | None) -> bool:
    return _has_status(err, HTTPStatus.NOT_FOUND)


def is_bad_request(err: BaseException | None) -> bool:
    return _has_status(err, HTTPStatus.BAD_REQUEST)


def is_unauthorized(err: BaseException | None) -> bool:
    return _has_status(err, HTTPStatus.UNAUTHORIZED)


def is_forbidden(err: BaseException | None) -> bool:
    return _has_status(err, HTTPStatus.FORBIDDEN)


def is_internal_server(err: BaseException | None) -> bool:
    return _has_status(err, HTTPStatus.INTERNAL_SERVER_ERROR)
