"""Shared shell types."""

from __future__ import annotations

import io
import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import IO, TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from .core import Shell


@dataclass(slots=True)
class CommandResult:
    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0


@dataclass(slots=True)
class Terminal:
    """The interpreter's own standard streams.

    ``None`` means the matching ``sys`` stream, looked up on every access so
    that replacements made after construction are honoured.
    """

    stdin: TextIO | None = None
    stdout: TextIO | None = None
    stderr: TextIO | None = None

    def input(self) -> TextIO:
        return self.stdin if self.stdin is not None else sys.stdin

    def output(self) -> TextIO:
        return self.stdout if self.stdout is not None else sys.stdout

    def error(self) -> TextIO:
        return self.stderr if self.stderr is not None else sys.stderr

    def flush(self) -> None:
        for stream in (self.output(), self.error()):
            try:
                stream.flush()
            except (OSError, ValueError):
                pass


def fileno_or_none(stream: IO | None) -> int | None:
    """Descriptor to hand a child process, or ``None`` to inherit ours."""

    if stream is None:
        return None
    try:
        return stream.fileno()
    except (AttributeError, OSError, ValueError, io.UnsupportedOperation):
        return None


def strip_trailing_newline(text: str) -> str:
    return text[:-1] if text.endswith("\n") else text


BuiltinHandler = Callable[[list[str], TextIO, TextIO], None]
ShellCommand = Callable[["Shell", list[str], TextIO, TextIO], None]


__all__ = [
    "CommandResult",
    "Terminal",
    "BuiltinHandler",
    "ShellCommand",
    "fileno_or_none",
    "strip_trailing_newline",
]
