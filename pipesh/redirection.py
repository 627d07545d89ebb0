"""Trailing output redirection for single commands."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import IO

from .exceptions import RedirectionIOError


STDOUT = "stdout"
STDERR = "stderr"

_FILE_MODE = 0o644


@dataclass(frozen=True)
class RedirectionSpec:
    stream: str
    path: str
    append: bool = False

    @classmethod
    def from_operator(cls, operator: str, path: str) -> "RedirectionSpec":
        # Recognized forms: > 1> >> 1>> 2> 2>>
        stream = STDERR if operator.startswith("2") else STDOUT
        return cls(stream=stream, path=path, append=">>" in operator)


def extract_redirection(args: list[str]) -> tuple[RedirectionSpec | None, list[str]]:
    """Pull an ``operator target`` pair off the end of ``args``.

    Only the last two arguments are considered, and a lone operator without a
    target is left in place.
    """

    if len(args) < 2:
        return None, list(args)
    operator, target = args[-2], args[-1]
    if ">" not in operator:
        return None, list(args)
    return RedirectionSpec.from_operator(operator, target), list(args[:-2])


def open_target(spec: RedirectionSpec) -> IO[bytes]:
    flags = os.O_WRONLY | os.O_CREAT
    flags |= os.O_APPEND if spec.append else os.O_TRUNC
    try:
        fd = os.open(spec.path, flags, _FILE_MODE)
    except OSError as exc:
        raise RedirectionIOError(f"redirect error: {exc}") from exc
    return os.fdopen(fd, "ab" if spec.append else "wb")


__all__ = ["RedirectionSpec", "extract_redirection", "open_target", "STDOUT", "STDERR"]
