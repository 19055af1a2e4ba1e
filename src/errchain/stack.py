from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from types import CodeType

DEFAULT_DEPTH = 32


@dataclass(frozen=True, slots=True)
class Frame:
    """A single captured program location.

    Only the code object, the line number and the module name are kept;
    file, function and line strings are resolved when the frame is
    formatted.

    Supported format specs:
        ``s``   base file name
        ``+s``  qualified function name and full path, tab separated on two lines
        ``d``   line number
        ``n``   function name without its module (``Class.method`` for methods)
        ``v``   ``file:line`` (also the empty spec)
        ``+v``  qualified function name and ``path:line``
    """

    code: CodeType | None = None
    lineno: int = 0
    module: str = ""

    @property
    def file(self) -> str:
        if self.code is None:
            return "unknown"
        return self.code.co_filename

    @property
    def line(self) -> int:
        if self.code is None:
            return 0
        return self.lineno

    @property
    def name(self) -> str:
        if self.code is None:
            return ""
        return self.code.co_qualname

    @property
    def function(self) -> str:
        if self.code is None:
            return "unknown"
        if not self.module:
            return self.name
        return f"{self.module}.{self.name}"

    def __format__(self, format_spec: str) -> str:
        match format_spec:
            case "s":
                return os.path.basename(self.file)
            case "+s":
                if self.code is None:
                    return "unknown"
                return f"{self.function}\n\t{self.file}"
            case "d":
                return str(self.line)
            case "n":
                return self.name
            case "" | "v":
                return f"{format(self, 's')}:{self.line}"
            case "+v":
                return f"{format(self, '+s')}:{self.line}"
        raise ValueError(f"unsupported frame format spec {format_spec!r}")

    def __str__(self) -> str:
        return format(self, "v")

    def __repr__(self) -> str:
        return f"Frame({self})"


class StackTrace(tuple[Frame, ...]):
    """Frames from the innermost call site to the outermost caller.

    ``+v`` renders every frame on its own block, each preceded by a line
    break. Any other spec renders ``[f1, f2, ...]`` with the frames
    formatted by that spec.
    """

    __slots__ = ()

    def __format__(self, format_spec: str) -> str:
        if format_spec == "+v":
            return "".join("\n" + format(frame, "+v") for frame in self)
        verb = format_spec.lstrip("+")
        return "[" + ", ".join(format(frame, verb) for frame in self) + "]"

    def __str__(self) -> str:
        return format(self, "v")

    def __repr__(self) -> str:
        return f"StackTrace({self})"


def callers(skip: int = 0, depth: int = DEFAULT_DEPTH) -> StackTrace:
    """Capture the stack of the function that called the caller of ``callers``.

    ``skip`` drops that many additional frames, for helpers that sit between
    the public constructor and ``callers``.
    """
    try:
        frame = sys._getframe(skip + 2)
    except ValueError:
        return StackTrace()

    frames: list[Frame] = []
    while frame is not None and len(frames) < depth:
        frames.append(
            Frame(
                frame.f_code,
                frame.f_lineno or 0,
                frame.f_globals.get("__name__", ""),
            )
        )
        frame = frame.f_back
    return StackTrace(frames)
