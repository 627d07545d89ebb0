"""Command-line interface for pipesh."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Any, TextIO

from .completion import BELL, CompletionEngine, PrefixIndex
from .exceptions import ShellExit
from .history import History
from .shell import CommandResult, Shell

try:
    import readline
except ImportError:  # pragma: no cover - platforms without GNU readline
    readline = None


logger = logging.getLogger(__name__)

PROMPT = "$ "
_LOG_LEVEL_ENV = "PIPESH_LOG_LEVEL"


class ReadlineCompleter:
    """Adapts :class:`CompletionEngine` to the ``readline`` completer hook.

    Text is inserted directly with ``insert_text`` so that a shared prefix is
    not followed by the space readline would append to a lone match.

    readline reports no keystrokes between completions, so the engine is
    disarmed only when the buffer differs from the one left by the previous
    completion. Typing a character and deleting it again leaves it armed.
    """

    def __init__(
        self,
        engine: CompletionEngine,
        *,
        backend: Any = None,
        prompt: str = PROMPT,
        output: TextIO | None = None,
    ) -> None:
        self.engine = engine
        self.backend = backend if backend is not None else readline
        self.prompt = prompt
        self.output = output
        self._last_buffer: str | None = None

    def install(self) -> None:
        self.backend.set_completer(self.complete)
        self.backend.set_completer_delims(" \t")
        self.backend.parse_and_bind("tab: complete")
        self.backend.parse_and_bind("set bell-style none")

    def reset(self) -> None:
        self.engine.notify_other_key()
        self._last_buffer = None

    def complete(self, text: str, state: int) -> str | None:
        if state != 0:
            return None
        line = self.backend.get_line_buffer()
        cursor = self.backend.get_endidx()
        if self._last_buffer is not None and line != self._last_buffer:
            self.engine.notify_other_key()

        result = self.engine.complete(line, cursor)
        out = self.output if self.output is not None else sys.stdout
        if result.insertion is not None:
            suffix = result.insertion[cursor - result.start :]
            if result.unique:
                suffix += " "
            if suffix:
                self.backend.insert_text(suffix)
                self.backend.redisplay()
        elif result.listing:
            out.write(f"\n{result.render_listing()}\n{self.prompt}{line}")
            out.flush()
        if result.bell:
            out.write(BELL)
            out.flush()
        self._last_buffer = self.backend.get_line_buffer()
        return None


def _add_common_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--path",
        default=None,
        help=f"Search path for executables ({os.pathsep}-separated). Defaults to $PATH.",
    )
    parser.add_argument(
        "--histfile",
        default=None,
        help="History file loaded at startup and written on exit. Defaults to $HISTFILE.",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get(_LOG_LEVEL_ENV, "WARNING"),
        help=f"Logging level (default: ${_LOG_LEVEL_ENV} or WARNING).",
    )


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _build_shell(args: argparse.Namespace) -> Shell:
    search_paths = None
    if args.path is not None:
        search_paths = [entry for entry in args.path.split(os.pathsep) if entry]
    history = History(args.histfile) if args.histfile else History.from_env()
    return Shell(search_paths=search_paths, history=history)


def _emit(result: CommandResult) -> None:
    if result.stdout:
        sys.stdout.write(result.stdout + "\n")
    if result.stderr:
        sys.stderr.write(result.stderr + "\n")
    sys.stdout.flush()


def _run_exec(args: argparse.Namespace) -> int:
    shell = _build_shell(args)
    shell.history.load()
    try:
        result = shell.exec(args.command)
    except ShellExit as exc:
        return exc.code
    _emit(result)
    return result.exit_code


def _install_completion(shell: Shell) -> ReadlineCompleter | None:
    if readline is None or not sys.stdin.isatty():
        logger.debug("tab completion disabled: no readline or stdin is not a terminal")
        return None
    engine = CompletionEngine(PrefixIndex(shell.completion_names()))
    completer = ReadlineCompleter(engine)
    completer.install()
    for entry in shell.history.entries:
        readline.add_history(entry)
    return completer


def _run_shell(args: argparse.Namespace) -> int:
    shell = _build_shell(args)
    shell.history.load()
    completer = _install_completion(shell)
    try:
        while True:
            line = input(PROMPT)
            if completer is not None:
                completer.reset()
            shell.history.add(line)
            try:
                result = shell.exec(line)
            except ShellExit as exc:
                return exc.code
            _emit(result)
    except (EOFError, KeyboardInterrupt):
        shell.history.save()
        return 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="pipesh")
    subparsers = parser.add_subparsers(dest="command_name", required=True)

    exec_parser = subparsers.add_parser("exec", help="Run a single command line")
    _add_common_flags(exec_parser)
    exec_parser.add_argument("command", help="Command line to execute")
    exec_parser.set_defaults(func=_run_exec)

    shell_parser = subparsers.add_parser("shell", help="Start an interactive shell")
    _add_common_flags(shell_parser)
    shell_parser.set_defaults(func=_run_shell)

    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    exit_code = args.func(args)
    raise SystemExit(exit_code)


__all__ = ["main", "ReadlineCompleter"]
