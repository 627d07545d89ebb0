"""Single (non-piped) command execution."""

from __future__ import annotations

import io
import logging
import subprocess

from ..exceptions import CommandNotFound, ExternalCommandError
from ..path_utils import PathResolver
from ..redirection import STDOUT, RedirectionSpec, extract_redirection, open_target
from ..shell_parser import tokenize
from .common import Terminal, fileno_or_none, strip_trailing_newline
from .registry import CommandTable


logger = logging.getLogger(__name__)


class CommandExecutor:
    """Runs one command line that contains no pipe."""

    def __init__(self, table: CommandTable, resolver: PathResolver, terminal: Terminal) -> None:
        self.table = table
        self.resolver = resolver
        self.terminal = terminal

    def execute(self, line: str) -> str:
        """Run ``line`` and return its captured output.

        Built-ins run against a buffer unless the line mentions ``>``, in
        which case the name is looked up on the search path like any other
        program so the redirection can be applied to a real process.
        """

        tokens = tokenize(line)
        if not tokens:
            return ""
        name, *args = tokens
        if self.table.is_builtin(name) and ">" not in line:
            buffer = io.StringIO()
            self.table.invoke(name, args, self.terminal.input(), buffer)
            return strip_trailing_newline(buffer.getvalue())
        return self.run_external(name, args)

    def run_external(self, name: str, args: list[str]) -> str:
        path = self.resolver.resolve(name)
        if path is None:
            raise CommandNotFound(name)
        redirection, remaining = extract_redirection(args)
        # argv[0] stays the bare name; the resolved path is only used to launch.
        argv = [name, *remaining]
        if redirection is not None:
            self._run_redirected(argv, path, redirection)
            return ""

        self.terminal.flush()
        try:
            completed = subprocess.run(
                argv,
                executable=path,
                stdin=fileno_or_none(self.terminal.input()),
                capture_output=True,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as exc:
            raise ExternalCommandError(f"{name}: {exc.strerror or exc}", 126) from exc
        if completed.returncode != 0:
            logger.debug("%s exited with status %d", name, completed.returncode)
            message = strip_trailing_newline(completed.stderr)
            raise ExternalCommandError(
                message or f"{name}: exit status {completed.returncode}",
                completed.returncode,
            )
        if completed.stderr:
            self.terminal.error().write(completed.stderr)
        return strip_trailing_newline(completed.stdout)

    def _run_redirected(self, argv: list[str], path: str, redirection: RedirectionSpec) -> None:
        with open_target(redirection) as target:
            stdout = fileno_or_none(self.terminal.output())
            stderr = fileno_or_none(self.terminal.error())
            if redirection.stream == STDOUT:
                stdout = target.fileno()
            else:
                stderr = target.fileno()
            self.terminal.flush()
            try:
                completed = subprocess.run(
                    argv,
                    executable=path,
                    stdin=fileno_or_none(self.terminal.input()),
                    stdout=stdout,
                    stderr=stderr,
                    check=False,
                )
            except OSError as exc:
                # Redirected runs report nothing back to the caller.
                logger.warning("could not start %s: %s", argv[0], exc)
                return
        logger.debug(
            "%s -> %s (%s) exited with status %d",
            argv[0],
            redirection.path,
            redirection.stream,
            completed.returncode,
        )


__all__ = ["CommandExecutor"]
