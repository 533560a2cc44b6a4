"""Repository statistics walker.

Counts files, total byte size and a file-extension histogram for a
working copy. Hidden directories and dependency caches are skipped;
symbolic links are never followed.
"""

from __future__ import annotations

import enum
import os
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable

from .logs import get_logger

logger = get_logger("walker")

EXCLUDED_DIRS = {"node_modules"}


class EntryKind(enum.Enum):
    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"  # symlinks, sockets, devices


@dataclass(frozen=True)
class Entry:
    name: str
    path: str
    kind: EntryKind
    size: int = 0


@dataclass
class RepositoryStats:
    """Aggregate counts for a directory tree."""

    files: int = 0
    size: int = 0
    languages: dict[str, int] = field(default_factory=dict)

    def merge(self, other: RepositoryStats) -> RepositoryStats:
        """Combine stats of two disjoint subtrees."""
        histogram = Counter(self.languages)
        histogram.update(other.languages)
        return RepositoryStats(
            files=self.files + other.files,
            size=self.size + other.size,
            languages=dict(histogram),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"files": self.files, "size": self.size, "languages": dict(self.languages)}


def list_entries(directory: str) -> list[Entry]:
    """List a directory without following symlinks."""
    entries = []
    with os.scandir(directory) as it:
        for item in it:
            if item.is_symlink():
                kind = EntryKind.OTHER
            elif item.is_dir(follow_symlinks=False):
                kind = EntryKind.DIRECTORY
            elif item.is_file(follow_symlinks=False):
                kind = EntryKind.FILE
            else:
                kind = EntryKind.OTHER
            size = item.stat(follow_symlinks=False).st_size if kind is EntryKind.FILE else 0
            entries.append(Entry(name=item.name, path=item.path, kind=kind, size=size))
    return entries


def should_descend(name: str) -> bool:
    """Hidden directories and dependency caches are skipped with their contents."""
    return not name.startswith(".") and name not in EXCLUDED_DIRS


def _extension(name: str) -> str:
    return os.path.splitext(name)[1].lower()


def _accumulate(
    root: str,
    lister: Callable[[str], Iterable[Entry]],
) -> RepositoryStats:
    files = 0
    size = 0
    extensions: Counter = Counter()

    stack = [root]
    while stack:
        directory = stack.pop()
        for entry in lister(directory):
            if entry.kind is EntryKind.DIRECTORY:
                if should_descend(entry.name):
                    stack.append(entry.path)
            elif entry.kind is EntryKind.FILE:
                files += 1
                size += entry.size
                ext = _extension(entry.name)
                if ext:
                    extensions[ext] += 1

    return RepositoryStats(files=files, size=size, languages=dict(extensions))


def walk(
    root_path: str | Path,
    lister: Callable[[str], Iterable[Entry]] = list_entries,
) -> RepositoryStats:
    """Collect statistics for a tree.

    All-or-nothing: a filesystem error anywhere in the walk is logged and a
    zero-valued record is returned instead of partial counts.
    """
    try:
        return _accumulate(str(root_path), lister)
    except OSError as e:
        logger.warning("Could not get repository stats: %s", e)
        return RepositoryStats()
