"""Executable lookup along a search path."""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path


logger = logging.getLogger(__name__)

_EXEC_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def search_paths_from_env(env: Mapping[str, str] | None = None) -> list[str]:
    env = os.environ if env is None else env
    raw = env.get("PATH", "")
    return [entry for entry in raw.split(os.pathsep) if entry]


def _is_executable_file(path: Path) -> bool:
    try:
        info = path.stat()
    except OSError:
        return False
    return stat.S_ISREG(info.st_mode) and bool(info.st_mode & _EXEC_BITS)


def find_executable(name: str, search_paths: Iterable[str]) -> str | None:
    """Return the first executable called ``name`` along ``search_paths``."""

    if not name:
        return None
    for directory in search_paths:
        candidate = Path(directory, name)
        if _is_executable_file(candidate):
            return str(candidate)
    return None


class PathResolver:
    """Resolves command names against an ordered list of directories.

    Nothing is cached; every lookup stats the filesystem again.
    """

    def __init__(self, search_paths: Iterable[str] | None = None) -> None:
        if search_paths is None:
            search_paths = search_paths_from_env()
        self.search_paths: list[str] = list(search_paths)

    def resolve(self, name: str) -> str | None:
        path = find_executable(name, self.search_paths)
        if path is None:
            logger.debug("%s not found on search path", name)
        return path

    def iter_executables(self) -> Iterator[str]:
        """Yield the distinct executable names found in the search path."""

        seen: set[str] = set()
        for directory in self.search_paths:
            try:
                entries = list(os.scandir(directory))
            except OSError:
                continue
            for entry in entries:
                if entry.name in seen:
                    continue
                if _is_executable_file(Path(entry.path)):
                    seen.add(entry.name)
                    yield entry.name


__all__ = ["PathResolver", "find_executable", "search_paths_from_env"]
