"""Text output commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

from ..registry import COMMAND_REGISTRY

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from ..core import Shell


@COMMAND_REGISTRY.command("echo")
def echo(shell: "Shell", args: list[str], stdin: TextIO, stdout: TextIO) -> None:
    stdout.write(" ".join(args) + "\n")
