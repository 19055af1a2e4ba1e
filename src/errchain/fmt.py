"""Rendering of error values.

Format specs:
    ``s``, ``v`` or empty   the one-line message chain, ``str(err)``
    ``q``                   the message chain as a double-quoted string
    ``+v``                  messages and stack traces, for logs only

In detailed mode every ``Fundamental``, ``WithStack``, ``MultiError`` and
``HTTPError`` layer prints its own stack; ``WithMessage`` layers only add
their message. ``wrap(new("a"), "b")`` therefore renders as::

    a
    <stack of new>
    b
    <stack of wrap>
"""

from __future__ import annotations

import json

from errchain.errors import (
    Fundamental,
    HTTPError,
    MultiError,
    WithMessage,
    WithStack,
)

__all__ = ["format_error", "detailed", "quote"]


def format_error(err: BaseException, format_spec: str) -> str:
    match format_spec:
        case "" | "s" | "v":
            return str(err)
        case "q":
            return quote(str(err))
        case "+v":
            return detailed(err)
    raise ValueError(
        f"unsupported format spec {format_spec!r} for {type(err).__name__}"
    )


def detailed(err: BaseException) -> str:
    match err:
        case Fundamental():
            return err.message + format(err.stack, "+v")
        case WithStack():
            return detailed(err.cause) + format(err.stack, "+v")
        case WithMessage():
            # own stack is never rendered
            return detailed(err.cause) + "\n" + err.message
        case MultiError():
            body = "\n".join(detailed(e) for e in err.errors)
            return body + format(err.stack, "+v")
        case HTTPError():
            out = err.message + "\n"
            if err.cause is not None:
                out += detailed(err.cause)
            return out + format(err.stack, "+v")
        case _:
            return str(err)


def quote(text: str) -> str:
    """Double-quote ``text`` escaping quotes, backslashes and control characters.

    Control characters use JSON escapes (``\\n``, ``\\u0001``). Other
    non-printable characters such as ``\\x7f`` are kept as they are.
    """
    return json.dumps(text, ensure_ascii=False)
