"""In-memory command history with optional file persistence."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path


logger = logging.getLogger(__name__)


class History:
    """Ordered list of submitted lines.

    ``path`` is the default file used by :meth:`load` and :meth:`save`; the
    ``history -r/-w/-a`` operations take an explicit file instead.
    """

    def __init__(self, path: str | os.PathLike[str] | None = None, entries: Iterable[str] = ()) -> None:
        self.path = Path(path) if path is not None else None
        self._entries: list[str] = list(entries)
        self._appended = 0

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "History":
        env = os.environ if env is None else env
        histfile = env.get("HISTFILE")
        return cls(histfile or None)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    def add(self, line: str) -> None:
        if line.strip():
            self._entries.append(line)

    def numbered(self, limit: int | None = None) -> list[tuple[int, str]]:
        start = 0 if limit is None else max(len(self._entries) - limit, 0)
        return [(idx + 1, self._entries[idx]) for idx in range(start, len(self._entries))]

    # ------------------------------------------------------------------
    # File operations
    # ------------------------------------------------------------------
    def read_file(self, path: str | os.PathLike[str]) -> None:
        with open(path, encoding="utf-8", errors="replace") as handle:
            for line in handle:
                self.add(line.rstrip("\n"))

    def write_file(self, path: str | os.PathLike[str]) -> None:
        with open(path, "w", encoding="utf-8") as handle:
            handle.writelines(f"{entry}\n" for entry in self._entries)
        self._appended = len(self._entries)

    def append_file(self, path: str | os.PathLike[str]) -> None:
        with open(path, "a", encoding="utf-8") as handle:
            handle.writelines(f"{entry}\n" for entry in self._entries[self._appended :])
        self._appended = len(self._entries)

    def load(self) -> None:
        if self.path is None or not self.path.exists():
            return
        try:
            self.read_file(self.path)
        except OSError as exc:
            logger.warning("could not load history from %s: %s", self.path, exc)
            return
        self._appended = len(self._entries)
        logger.debug("loaded %d history entries from %s", len(self._entries), self.path)

    def save(self) -> None:
        if self.path is None:
            return
        try:
            self.write_file(self.path)
        except OSError as exc:
            logger.warning("could not save history to %s: %s", self.path, exc)


__all__ = ["History"]
