"""Tab-completion matching for command names."""

from __future__ import annotations

import bisect
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field


BELL = "\x07"

CandidateSource = Callable[[str], Iterable[str]]


@dataclass(slots=True)
class Completion:
    """Outcome of one completion request.

    ``insertion`` replaces ``line[start:cursor]`` when set; ``unique`` marks it
    as the only candidate rather than a shared prefix. ``listing`` holds the
    candidates to print, each already prefixed by the text before the partial
    word.
    """

    start: int = 0
    insertion: str | None = None
    unique: bool = False
    bell: bool = False
    listing: list[str] = field(default_factory=list)

    def render_listing(self) -> str:
        return "  ".join(self.listing)


class PrefixIndex:
    """Sorted name index answering prefix queries.

    Duplicates are kept; callers decide how to collapse them.
    """

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names: list[str] = sorted(names)

    def add(self, names: Iterable[str]) -> None:
        self._names = sorted([*self._names, *names])

    def __call__(self, prefix: str) -> list[str]:
        lo = bisect.bisect_left(self._names, prefix)
        matches: list[str] = []
        for name in self._names[lo:]:
            if not name.startswith(prefix):
                break
            matches.append(name)
        return matches


def dedupe(items: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(items))


def longest_common_prefix(items: Sequence[str]) -> str:
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    first = items[0]
    min_len = min(len(item) for item in items)
    for idx in range(min_len):
        char = first[idx]
        for other in items[1:]:
            if other[idx] != char:
                return first[:idx]
    return first[:min_len]


def _partial_word(line: str, cursor: int) -> tuple[int, str, bool]:
    head = line[:cursor]
    start = max(head.rfind(" "), head.rfind("\t")) + 1
    is_command_word = not head[:start].strip()
    return start, head[start:], is_command_word


class CompletionEngine:
    """Completes the command word with a two-press listing protocol.

    The first press on an ambiguous word extends it to the longest common
    prefix (or rings the bell when nothing can be added) and arms the engine.
    A second consecutive press prints every candidate. Any other key disarms.
    """

    def __init__(self, source: CandidateSource) -> None:
        self.source = source
        self.awaiting_second_press = False

    def notify_other_key(self) -> None:
        self.awaiting_second_press = False

    def candidates(self, partial: str) -> list[str]:
        return sorted(dedupe(self.source(partial)))

    def complete(self, line: str, cursor: int | None = None) -> Completion:
        if cursor is None:
            cursor = len(line)
        start, partial, is_command_word = _partial_word(line, cursor)
        matches = self.candidates(partial) if is_command_word else []

        if not matches:
            return Completion(start=start, bell=True)
        if len(matches) == 1:
            return Completion(start=start, insertion=matches[0], unique=True)

        lcp = longest_common_prefix(matches)
        armed = self.awaiting_second_press
        if armed and (not lcp or lcp == partial):
            self.awaiting_second_press = False
            prefix = line[:start]
            return Completion(start=start, listing=[f"{prefix}{match}" for match in matches])

        self.awaiting_second_press = True
        if lcp and len(lcp) > len(partial):
            return Completion(start=start, insertion=lcp)
        return Completion(start=start, bell=True)


__all__ = [
    "BELL",
    "Completion",
    "CompletionEngine",
    "PrefixIndex",
    "dedupe",
    "longest_common_prefix",
]
