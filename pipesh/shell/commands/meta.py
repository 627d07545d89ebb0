"""Meta commands for shell introspection and lifecycle."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

from ..registry import COMMAND_REGISTRY
from ...exceptions import BuiltinExecutionError, NumericArgumentRequired, ShellExit

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from ..core import Shell


@COMMAND_REGISTRY.command("type")
def type(shell: "Shell", args: list[str], stdin: TextIO, stdout: TextIO) -> None:  # noqa: A001
    if not args:
        return
    name = args[0]
    if shell.table.is_builtin(name):
        stdout.write(f"{name} is a shell builtin\n")
        return
    path = shell.resolver.resolve(name)
    if path is not None:
        stdout.write(f"{name} is {path}\n")
    else:
        stdout.write(f"{name}: not found\n")


@COMMAND_REGISTRY.command("exit")
def exit(shell: "Shell", args: list[str], stdin: TextIO, stdout: TextIO) -> None:  # noqa: A001
    if not args:
        raise ShellExit(0)
    try:
        code = int(args[0])
    except ValueError:
        error = NumericArgumentRequired("exit", args[0])
        raise ShellExit(error.exit_code, str(error)) from None
    raise ShellExit(code)


_HISTORY_FILE_FLAGS = ("-r", "-w", "-a")


@COMMAND_REGISTRY.command("history")
def history(shell: "Shell", args: list[str], stdin: TextIO, stdout: TextIO) -> None:
    hist = shell.history
    if len(args) == 2 and args[0] in _HISTORY_FILE_FLAGS:
        flag, path = args
        try:
            if flag == "-r":
                hist.read_file(path)
            elif flag == "-w":
                hist.write_file(path)
            else:
                hist.append_file(path)
        except OSError as exc:
            raise BuiltinExecutionError(f"history: {path}: {exc.strerror or exc}") from exc
        return

    limit: int | None = None
    if args:
        try:
            limit = int(args[0])
        except ValueError:
            raise NumericArgumentRequired("history", args[0]) from None
    for number, line in hist.numbered(limit):
        stdout.write(f"{number:>5}  {line}\n")
