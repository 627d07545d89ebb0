"""Multi-stage pipeline execution over OS pipes."""

from __future__ import annotations

import io
import logging
import os
import subprocess
import threading
from dataclasses import dataclass
from typing import TextIO

from ..exceptions import PipeCreationError, ShellError, ShellExit
from ..path_utils import PathResolver
from ..shell_parser import Command, parse_pipeline
from .common import Terminal, fileno_or_none
from .registry import CommandTable


logger = logging.getLogger(__name__)

_ENCODING = "utf-8"


class PipeConnection:
    """One OS pipe joining stage ``i`` to stage ``i + 1``.

    Each end is closed at most once no matter how many parties ask.
    """

    def __init__(self, read_fd: int, write_fd: int) -> None:
        self.read_fd: int | None = read_fd
        self.write_fd: int | None = write_fd
        self._lock = threading.Lock()

    @classmethod
    def open(cls) -> "PipeConnection":
        read_fd, write_fd = os.pipe()
        return cls(read_fd, write_fd)

    def close_read(self) -> None:
        with self._lock:
            fd, self.read_fd = self.read_fd, None
        if fd is not None:
            os.close(fd)

    def close_write(self) -> None:
        with self._lock:
            fd, self.write_fd = self.write_fd, None
        if fd is not None:
            os.close(fd)

    def close(self) -> None:
        self.close_write()
        self.close_read()

    @property
    def closed(self) -> bool:
        return self.read_fd is None and self.write_fd is None


@dataclass
class PipelineStage:
    index: int
    command: Command | None
    stdin: PipeConnection | None = None
    stdout: PipeConnection | None = None
    is_builtin: bool = False
    process: subprocess.Popen | None = None
    thread: threading.Thread | None = None
    exit_code: int = 0

    @property
    def name(self) -> str:
        return self.command.name if self.command is not None else ""

    def release(self) -> None:
        """Drop this stage's hold on both of its pipe ends."""

        if self.stdin is not None:
            self.stdin.close_read()
        if self.stdout is not None:
            self.stdout.close_write()


class PipelineExecutor:
    """Wires ``a | b | c`` together and runs every stage concurrently.

    External stages are child processes; built-in stages run on threads
    against file objects wrapping their pipe ends. A stage whose program
    cannot be found is dropped: its input is discarded and its reader sees
    end-of-file straight away.
    """

    def __init__(self, table: CommandTable, resolver: PathResolver, terminal: Terminal) -> None:
        self.table = table
        self.resolver = resolver
        self.terminal = terminal

    def run(self, line: str) -> int:
        pipeline = parse_pipeline(line)
        count = len(pipeline.commands)
        if count == 0:
            return 0
        connections = self._open_connections(count - 1)
        stages = [
            PipelineStage(
                index=idx,
                command=command,
                stdin=connections[idx - 1] if idx > 0 else None,
                stdout=connections[idx] if idx < count - 1 else None,
                is_builtin=command is not None and self.table.is_builtin(command.name),
            )
            for idx, command in enumerate(pipeline.commands)
        ]
        self.terminal.flush()
        try:
            for stage in stages:
                self._launch(stage)
            for stage in stages:
                if stage.process is not None:
                    status = stage.process.wait()
                    # Killed by a signal: report it the way sh does.
                    stage.exit_code = 128 - status if status < 0 else status
            for stage in stages:
                if stage.thread is not None:
                    stage.thread.join()
        finally:
            for connection in connections:
                connection.close()
        self._flush_output()
        return stages[-1].exit_code

    def _open_connections(self, count: int) -> list[PipeConnection]:
        connections: list[PipeConnection] = []
        try:
            for _ in range(count):
                connections.append(PipeConnection.open())
        except OSError as exc:
            for connection in connections:
                connection.close()
            raise PipeCreationError(f"pipe: {exc.strerror or exc}") from exc
        logger.debug("opened %d pipe(s)", count)
        return connections

    def _launch(self, stage: PipelineStage) -> None:
        if stage.command is None:
            logger.debug("stage %d is empty; dropping it", stage.index)
            stage.exit_code = 0
            stage.release()
            return
        if stage.is_builtin:
            stage.thread = threading.Thread(
                target=self._run_builtin,
                args=(stage,),
                name=f"pipesh-stage-{stage.index}-{stage.name}",
                daemon=True,
            )
            stage.thread.start()
            return
        self._spawn(stage)

    def _spawn(self, stage: PipelineStage) -> None:
        command = stage.command
        assert command is not None
        path = self.resolver.resolve(command.name)
        if path is None:
            logger.info("%s: command not found; dropping stage %d", command.name, stage.index)
            stage.exit_code = 127
            stage.release()
            return
        stdin = stage.stdin.read_fd if stage.stdin is not None else fileno_or_none(self.terminal.input())
        stdout = stage.stdout.write_fd if stage.stdout is not None else fileno_or_none(self.terminal.output())
        try:
            stage.process = subprocess.Popen(
                command.argv,
                executable=path,
                stdin=stdin,
                stdout=stdout,
                stderr=fileno_or_none(self.terminal.error()),
            )
        except OSError as exc:
            logger.warning("could not start %s: %s", command.name, exc)
            self._report(f"{command.name}: {exc.strerror or exc}")
            stage.exit_code = 126
        finally:
            # The child holds its own copies now.
            stage.release()

    def _run_builtin(self, stage: PipelineStage) -> None:
        command = stage.command
        assert command is not None
        stdin = self._reader(stage)
        stdout = self._writer(stage)
        try:
            self.table.invoke(command.name, command.args, stdin, stdout)
        except BrokenPipeError:
            logger.debug("%s: downstream closed early", command.name)
        except ShellExit as exc:
            logger.debug("exit inside a pipeline only ends its own stage")
            stage.exit_code = exc.code
            if exc.message:
                self._report(exc.message)
        except ShellError as exc:
            stage.exit_code = exc.exit_code
            self._report(str(exc))
        finally:
            if stage.stdout is not None:
                _close_quietly(stdout)
            else:
                self._flush_output()
            if stage.stdin is not None:
                _close_quietly(stdin)
            stage.release()

    def _reader(self, stage: PipelineStage) -> TextIO:
        if stage.stdin is None:
            return self.terminal.input()
        fd = stage.stdin.read_fd
        if fd is None:
            return io.StringIO()
        return os.fdopen(fd, "r", encoding=_ENCODING, errors="replace", closefd=False)

    def _writer(self, stage: PipelineStage) -> TextIO:
        if stage.stdout is None:
            return self.terminal.output()
        fd = stage.stdout.write_fd
        if fd is None:
            return io.StringIO()
        return os.fdopen(fd, "w", encoding=_ENCODING, closefd=False)

    def _report(self, message: str) -> None:
        try:
            self.terminal.error().write(message + "\n")
        except (OSError, ValueError):
            logger.warning("%s", message)

    def _flush_output(self) -> None:
        try:
            self.terminal.output().flush()
        except (OSError, ValueError):
            pass


def _close_quietly(stream: TextIO) -> None:
    try:
        stream.close()
    except BrokenPipeError:
        logger.debug("pipe reader went away before the final flush")


__all__ = ["PipeConnection", "PipelineExecutor", "PipelineStage"]
