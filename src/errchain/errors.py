from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeVar, overload, override

from errchain.stack import StackTrace, callers

E = TypeVar("E", bound=BaseException)


class Error(Exception):
    """Base for every error value built by this package.

    Subclasses are immutable once constructed. Besides ``str()``, they
    support the ``s``, ``v``, ``q`` and ``+v`` format specs; ``+v`` includes
    stack traces.
    """

    stack: StackTrace

    def __setattr__(self, name: str, value: object) -> None:
        if name in getattr(type(self), "__dataclass_fields__", ()) and hasattr(self, name):
            raise AttributeError(f"{type(self).__name__}.{name} is read-only")
        Exception.__setattr__(self, name, value)

    def stack_trace(self) -> StackTrace:
        return self.stack

    def matches(self, target: BaseException) -> bool:
        """Report whether ``target`` should be treated as equal to this error.

        Only the node itself is compared; :func:`is_` walks the causes.
        """
        return False

    def __format__(self, format_spec: str) -> str:
        from errchain.fmt import format_error

        return format_error(self, format_spec)


@dataclass(slots=True, eq=False)
class Fundamental(Error):
    """A new failure: message and stack, no cause."""

    message: str
    stack: StackTrace = field(default_factory=StackTrace, repr=False)

    @override
    def __str__(self) -> str:
        return self.message

    @override
    def matches(self, target: BaseException) -> bool:
        return isinstance(target, Fundamental) and self.message == target.message


@dataclass(slots=True, eq=False)
class WithStack(Error):
    """Annotates ``cause`` with the stack of the place it was wrapped."""

    cause: BaseException
    stack: StackTrace = field(default_factory=StackTrace, repr=False)

    def __post_init__(self) -> None:
        self.__cause__ = self.cause

    @override
    def __str__(self) -> str:
        return str(self.cause)


@dataclass(slots=True, eq=False)
class WithMessage(Error):
    """Prefixes the message of ``cause``.

    The stack is recorded but never rendered: the detailed format prints
    the cause followed by the message only.
    """

    cause: BaseException
    message: str
    stack: StackTrace = field(default_factory=StackTrace, repr=False)

    def __post_init__(self) -> None:
        self.__cause__ = self.cause

    @override
    def __str__(self) -> str:
        return f"{self.message}: {self.cause}"


@dataclass(slots=True, eq=False)
class MultiError(Error):
    """Several independent errors collapsed into one value."""

    errors: tuple[BaseException, ...]
    stack: StackTrace = field(default_factory=StackTrace, repr=False)

    @override
    def __str__(self) -> str:
        return "\n".join(str(err) for err in self.errors)


@dataclass(slots=True, eq=False)
class HTTPError(Error):
    """An error carrying an HTTP status code.

    Two HTTP errors match when both code and message are equal, so the
    sentinels in :mod:`errchain.http_errors` can be compared with ``is_``.
    """

    code: int
    message: str
    cause: BaseException | None = None
    stack: StackTrace = field(default_factory=StackTrace, repr=False)

    def __post_init__(self) -> None:
        self.__cause__ = self.cause

    @override
    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message

    @override
    def matches(self, target: BaseException) -> bool:
        return (
            isinstance(target, HTTPError)
            and self.code == target.code
            and self.message == target.message
        )

    def to_dict(self) -> dict[str, int | str]:
        """Transport payload: status code and message, never the cause."""
        return {"code": self.code, "message": self.message}


def new(message: str) -> Error:
    """Return a new error with a stack trace.

        err = new("connection failed")
        f"{err:+v}"  # message followed by the stack
    """
    return Fundamental(message, callers())


def errorf(template: str, *args: object) -> Error:
    """Like :func:`new` with a printf-style formatted message.

    The template is used verbatim when no arguments are given.
    """
    return Fundamental(_sprintf(template, args), callers())


@overload
def wrap(err: BaseException, message: str, *, skip: int = ...) -> Error: ...
@overload
def wrap(err: None, message: str, *, skip: int = ...) -> None: ...
def wrap(err: BaseException | None, message: str, *, skip: int = 0) -> Error | None:
    """Annotate ``err`` with ``message`` and the stack of this call.

    Returns ``None`` when ``err`` is ``None``. ``skip`` drops that many
    frames from the recorded stack, for helpers that wrap on behalf of
    their caller.
    """
    return _wrap(err, message, skip=skip + 1)


def wrapf(err: BaseException | None, template: str, *args: object) -> Error | None:
    """Like :func:`wrap` with a printf-style formatted message."""
    return _wrap(err, _sprintf(template, args), skip=1)


def with_stack(err: BaseException | None) -> Error | None:
    """Annotate ``err`` with the stack of this call. ``None`` stays ``None``."""
    if err is None:
        return None
    return WithStack(err, callers())


def with_message(err: BaseException | None, message: str) -> Error | None:
    """Prefix the message of ``err``. ``None`` stays ``None``."""
    if err is None:
        return None
    return WithMessage(err, message, callers())


def with_messagef(
    err: BaseException | None, template: str, *args: object
) -> Error | None:
    if err is None:
        return None
    return WithMessage(err, _sprintf(template, args), callers())


@overload
def join(err: BaseException, *errs: BaseException | None) -> Error: ...
@overload
def join(*errs: BaseException | None) -> Error | None: ...
def join(*errs: BaseException | None) -> Error | None:
    """Combine ``errs`` into a single error, dropping ``None`` entries.

    Returns ``None`` when nothing is left. The text of the result is the
    text of each error on its own line:

        str(join(new("first error"), new("second error")))
        # 'first error\\nsecond error'
    """
    kept = tuple(err for err in errs if err is not None)
    if not kept:
        return None
    return MultiError(kept, callers())


def _wrap(err: BaseException | None, message: str, *, skip: int) -> Error | None:
    if err is None:
        return None
    stack = callers(skip)
    return WithStack(WithMessage(err, message, stack), stack)


def _sprintf(template: str, args: tuple[object, ...]) -> str:
    if not args:
        return template
    return template % args


def unwrap(err: BaseException | None) -> BaseException | None:
    """Return the single direct cause of ``err``, or ``None``.

    Errors joined by :func:`join` have many causes and return ``None`` here;
    use :func:`unwrap_all` for them.
    """
    match err:
        case WithStack() | WithMessage():
            return err.cause
        case HTTPError():
            return err.cause
        case Fundamental() | MultiError() | None:
            return None
        case BaseExceptionGroup():
            return None
        case _:
            return err.__cause__


def unwrap_all(err: BaseException | None) -> tuple[BaseException, ...]:
    """Return every direct cause of ``err`` in order."""
    match err:
        case MultiError():
            return err.errors
        case BaseExceptionGroup():
            return tuple(err.exceptions)
    single = unwrap(err)
    if single is None:
        return ()
    return (single,)


def cause(err: BaseException | None) -> BaseException | None:
    """Return the root cause of ``err``.

    Follows single-cause links until an error without one is reached.
    ``Fundamental`` and ``MultiError`` end the walk.
    """
    while err is not None:
        next_err = unwrap(err)
        if next_err is None:
            break
        err = next_err
    return err


def is_(err: BaseException | None, target: BaseException | None) -> bool:
    """Report whether any error in the chain of ``err`` matches ``target``.

    A node matches when it is ``target`` itself or when its ``matches``
    method accepts ``target``.
    """
    if err is None or target is None:
        return err is target

    while True:
        if err is target:
            return True
        if isinstance(err, Error) and err.matches(target):
            return True
        causes = unwrap_all(err)
        if len(causes) == 1:
            err = causes[0]
            continue
        return any(is_(c, target) for c in causes)


def as_(err: BaseException | None, cls: type[E]) -> E | None:
    """Return the first error in the chain of ``err`` that is a ``cls``."""
    if err is None:
        return None
    if isinstance(err, cls):
        return err
    for c in unwrap_all(err):
        found = as_(c, cls)
        if found is not None:
            return found
    return None
