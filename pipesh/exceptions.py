"""Exception hierarchy for pipesh."""

from __future__ import annotations


class ShellError(Exception):
    """Base error for command interpretation failures."""

    exit_code = 1


class CommandNotFound(ShellError):
    exit_code = 127

    def __init__(self, name: str) -> None:
        super().__init__(f"{name}: command not found")
        self.name = name


class RedirectionIOError(ShellError):
    """Raised when a redirection target cannot be opened."""


class ChdirError(ShellError):
    """Raised when ``cd`` cannot enter the requested directory."""


class NumericArgumentRequired(ShellError):
    exit_code = 2

    def __init__(self, command: str, argument: str) -> None:
        super().__init__(f"{command}: {argument}: numeric argument required")
        self.argument = argument


class PipeCreationError(ShellError):
    """Raised when the OS refuses to hand out another pipe."""


class BuiltinExecutionError(ShellError):
    """A built-in failed for reasons of its own."""


class ExternalCommandError(ShellError):
    """A child process exited unsuccessfully."""

    def __init__(self, message: str, exit_code: int) -> None:
        super().__init__(message)
        self.exit_code = exit_code


class ShellExit(Exception):
    """Signal raised by ``exit`` to stop the interpreter.

    ``message`` is printed to stderr before the interpreter stops.
    """

    def __init__(self, code: int = 0, message: str | None = None) -> None:
        super().__init__(code)
        self.code = code
        self.message = message


__all__ = [
    "ShellError",
    "CommandNotFound",
    "RedirectionIOError",
    "ChdirError",
    "NumericArgumentRequired",
    "PipeCreationError",
    "BuiltinExecutionError",
    "ExternalCommandError",
    "ShellExit",
]
