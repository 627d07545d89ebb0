"""Navigation-oriented commands."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, TextIO

from ..registry import COMMAND_REGISTRY
from ...exceptions import BuiltinExecutionError, ChdirError

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from ..core import Shell


@COMMAND_REGISTRY.command("pwd")
def pwd(shell: "Shell", _: list[str], stdin: TextIO, stdout: TextIO) -> None:
    try:
        cwd = os.getcwd()
    except OSError as exc:
        raise BuiltinExecutionError(f"pwd: {exc}") from exc
    stdout.write(cwd + "\n")


@COMMAND_REGISTRY.command("cd")
def cd(shell: "Shell", args: list[str], stdin: TextIO, stdout: TextIO) -> None:
    target = args[0] if args else "~"
    path = os.path.expanduser(target)
    if path.startswith("~"):
        raise ChdirError(f"cd: {target}: cannot determine home directory")
    try:
        os.chdir(path)
    except OSError as exc:
        raise ChdirError(f"cd: {target}: No such file or directory") from exc
