"""Registry for built-in commands."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, TextIO

from ..exceptions import CommandNotFound
from .common import BuiltinHandler, ShellCommand

if TYPE_CHECKING:
    from .core import Shell


@dataclass(slots=True)
class CommandSpec:
    name: str
    handler: ShellCommand


class CommandRegistry:
    """Simple container that stores built-in command handlers."""

    def __init__(self) -> None:
        self._commands: list[CommandSpec] = []

    def register(self, name: str, handler: ShellCommand) -> ShellCommand:
        self._commands.append(CommandSpec(name, handler))
        return handler

    def command(self, name: str) -> Callable[[ShellCommand], ShellCommand]:
        """Decorator variant for registering built-in commands."""

        def decorator(func: ShellCommand) -> ShellCommand:
            return self.register(name, func)

        return decorator

    def iter_commands(self) -> Iterable[CommandSpec]:
        return tuple(self._commands)


class CommandTable:
    """Built-in handlers bound to one shell; read-only once constructed."""

    def __init__(self, shell: "Shell", registry: CommandRegistry) -> None:
        self._handlers: dict[str, BuiltinHandler] = {
            spec.name: self._bind(shell, spec.handler) for spec in registry.iter_commands()
        }

    @staticmethod
    def _bind(shell: "Shell", func: ShellCommand) -> BuiltinHandler:
        def bound(args: list[str], stdin: TextIO, stdout: TextIO) -> None:
            func(shell, args, stdin, stdout)

        return bound

    def is_builtin(self, name: str) -> bool:
        return name in self._handlers

    def names(self) -> list[str]:
        return sorted(self._handlers)

    def invoke(self, name: str, args: list[str], stdin: TextIO, stdout: TextIO) -> None:
        handler = self._handlers.get(name)
        if handler is None:
            raise CommandNotFound(name)
        handler(args, stdin, stdout)


COMMAND_REGISTRY = CommandRegistry()


__all__ = ["COMMAND_REGISTRY", "CommandRegistry", "CommandSpec", "CommandTable"]
