"""Quote-aware tokenizer and pipeline splitter."""

from __future__ import annotations

from dataclasses import dataclass, field


_WHITESPACE = (" ", "\t")
_DOUBLE_QUOTE_ESCAPABLE = ("\\", '"')


@dataclass
class Command:
    name: str
    args: list[str] = field(default_factory=list)

    @property
    def argv(self) -> list[str]:
        return [self.name, *self.args]


@dataclass
class Pipeline:
    segments: list[str]
    commands: list[Command | None]

    @property
    def is_pipeline(self) -> bool:
        return len(self.segments) > 1


def tokenize(line: str) -> list[str]:
    """Split ``line`` into shell words.

    Single quotes keep everything literal up to the closing quote. Inside
    double quotes a backslash only escapes ``\\`` and ``"``; before any other
    character both are kept. Outside quotes a backslash makes the next
    character literal. Quote characters never contribute to the word and never
    end it, so ``'a''b'c`` is the single word ``abc``. An unterminated quote
    swallows the rest of the line.
    """

    args: list[str] = []
    current: list[str] = []
    in_single = False
    in_double = False
    escaped = False

    for char in line:
        if escaped:
            if in_double and char not in _DOUBLE_QUOTE_ESCAPABLE:
                current.append("\\")
            current.append(char)
            escaped = False
            continue
        if char == "\\" and not in_single:
            escaped = True
            continue
        if char == "'" and not in_double:
            in_single = not in_single
            continue
        if char == '"' and not in_single:
            in_double = not in_double
            continue
        if char in _WHITESPACE and not in_single and not in_double:
            if current:
                args.append("".join(current))
                current = []
            continue
        current.append(char)

    if current:
        args.append("".join(current))
    return args


def split_pipeline(line: str) -> list[str]:
    """Split ``line`` on ``|`` characters that are not quoted or escaped.

    Segments keep their raw text (quotes included) so each one can be
    tokenized on its own.
    """

    segments: list[str] = []
    start = 0
    in_single = False
    in_double = False
    escaped = False

    for idx, char in enumerate(line):
        if escaped:
            escaped = False
        elif char == "\\" and not in_single:
            escaped = True
        elif char == "'" and not in_double:
            in_single = not in_single
        elif char == '"' and not in_single:
            in_double = not in_double
        elif char == "|" and not in_single and not in_double:
            segments.append(line[start:idx].strip())
            start = idx + 1

    segments.append(line[start:].strip())
    return segments


def parse_command(segment: str) -> Command | None:
    tokens = tokenize(segment)
    if not tokens:
        return None
    name, *args = tokens
    return Command(name=name, args=args)


def parse_pipeline(line: str) -> Pipeline:
    if not line.strip():
        return Pipeline(segments=[], commands=[])
    segments = split_pipeline(line)
    return Pipeline(segments=segments, commands=[parse_command(seg) for seg in segments])


__all__ = [
    "Command",
    "Pipeline",
    "tokenize",
    "split_pipeline",
    "parse_command",
    "parse_pipeline",
]
