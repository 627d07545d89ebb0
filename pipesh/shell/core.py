"""Core Shell implementation."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TextIO

from ..exceptions import ShellError, ShellExit
from ..history import History
from ..path_utils import PathResolver
from ..shell_parser import split_pipeline
from .common import CommandResult, Terminal
from .executor import CommandExecutor
from .pipeline import PipelineExecutor
from .registry import COMMAND_REGISTRY, CommandTable


logger = logging.getLogger(__name__)


class Shell:
    """Interprets command lines against built-ins and the host search path."""

    def __init__(
        self,
        *,
        search_paths: Iterable[str] | None = None,
        history: History | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self.resolver = PathResolver(search_paths)
        self.history = history if history is not None else History.from_env()
        self.terminal = Terminal(stdin=stdin, stdout=stdout, stderr=stderr)
        self.table = self._build_command_table()
        self.executor = CommandExecutor(self.table, self.resolver, self.terminal)
        self.pipeline = PipelineExecutor(self.table, self.resolver, self.terminal)

    # ------------------------------------------------------------------
    # Command registration
    # ------------------------------------------------------------------
    def _build_command_table(self) -> CommandTable:
        # Import command modules for their side effects (registration)
        from . import commands  # noqa: F401

        return CommandTable(self, COMMAND_REGISTRY)

    def available_commands(self) -> list[str]:
        return self.table.names()

    def completion_names(self) -> list[str]:
        """Built-in names followed by every executable on the search path."""

        return [*self.table.names(), *self.resolver.iter_executables()]

    # ------------------------------------------------------------------
    # Dispatcher
    # ------------------------------------------------------------------
    def exec(self, line: str) -> CommandResult:
        """Run one input line.

        Pipelines write straight to the terminal streams, so their result only
        carries the last stage's status. :class:`~pipesh.exceptions.ShellExit`
        propagates once its message is printed and history is saved.
        """

        line = line.strip()
        if not line:
            return CommandResult()
        try:
            if len(split_pipeline(line)) > 1:
                return CommandResult(exit_code=self.pipeline.run(line))
            return CommandResult(stdout=self.executor.execute(line))
        except ShellError as exc:
            logger.debug("%r failed: %s", line, exc)
            return CommandResult(stderr=str(exc), exit_code=exc.exit_code)
        except ShellExit as exc:
            if exc.message:
                stderr = self.terminal.error()
                stderr.write(exc.message + "\n")
                stderr.flush()
            self.history.save()
            raise


__all__ = ["Shell"]
