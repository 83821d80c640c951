"""Directory traversal and size aggregation.

Every node is classified by its own link metadata (``lstat``). Symbolic links
are never followed: a link to a directory is reported as an entry but not
descended into, and its size is the size of the link itself.

Descent uses an explicit stack of pending directories instead of call
recursion, so tree depth is not bounded by the interpreter recursion limit.
Each directory is read completely before any of its children are visited.
"""

from __future__ import annotations

import os
import stat
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .exceptions import TraversalError

type PathLike = str | os.PathLike[str]


class EntryKind(str, Enum):
    """Classification of a filesystem node by its own link metadata."""

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"

    @classmethod
    def from_mode(cls, mode: int) -> EntryKind:
        """Map an ``st_mode`` value to an entry kind."""
        if stat.S_ISDIR(mode):
            return cls.DIRECTORY
        if stat.S_ISLNK(mode):
            return cls.SYMLINK
        if stat.S_ISREG(mode):
            return cls.FILE
        return cls.OTHER


@dataclass(frozen=True, slots=True)
class _Child:
    path: Path
    is_dir: bool
    size: int


def _lstat(path: Path) -> os.stat_result:
    try:
        return path.lstat()
    except OSError as exc:
        raise TraversalError(path, "stat", exc) from exc


def _scandir(directory: Path) -> list[os.DirEntry[str]]:
    # Read the whole directory so the handle is closed before descending.
    try:
        with os.scandir(directory) as iterator:
            return list(iterator)
    except OSError as exc:
        raise TraversalError(directory, "scandir", exc) from exc


def _read_children(directory: Path) -> list[_Child]:
    children: list[_Child] = []
    for entry in _scandir(directory):
        child_path = directory / entry.name
        try:
            meta = entry.stat(follow_symlinks=False)
        except OSError as exc:
            raise TraversalError(child_path, "stat", exc) from exc
        children.append(_Child(child_path, stat.S_ISDIR(meta.st_mode), meta.st_size))
    return children


def entry_kind(path: PathLike) -> EntryKind:
    """Classify a path without following symbolic links.

    Raises:
        TraversalError: If the path cannot be stat'ed
    """
    return EntryKind.from_mode(_lstat(Path(path)).st_mode)


def list_entries(path: PathLike) -> list[Path]:
    """List the direct children of a directory.

    If ``path`` is a directory, one entry per child is returned in filesystem
    enumeration order (not sorted). Any other kind of path, including a
    symbolic link to a directory, yields a single-element list holding the
    path itself.

    Args:
        path: Path to list

    Returns:
        Child paths, or ``[path]`` for a non-directory

    Raises:
        TraversalError: If the path cannot be stat'ed or enumerated
    """
    root = Path(path)
    if not stat.S_ISDIR(_lstat(root).st_mode):
        return [root]
    return [root / entry.name for entry in _scandir(root)]


def list_recursive(path: PathLike) -> list[Path]:
    """List every descendant of a directory, depth-first and pre-order.

    Directories are included alongside files, each directory appearing
    immediately before its own contents. Symbolic links are listed but never
    descended into.

    Args:
        path: Path to list

    Returns:
        All descendant paths, or ``[path]`` for a non-directory

    Raises:
        TraversalError: On the first path that cannot be stat'ed or enumerated
    """
    root = Path(path)
    if not stat.S_ISDIR(_lstat(root).st_mode):
        return [root]

    entries: list[Path] = []
    pending: list[Iterator[_Child]] = [iter(_read_children(root))]
    while pending:
        child = next(pending[-1], None)
        if child is None:
            _ = pending.pop()
            continue
        entries.append(child.path)
        if child.is_dir:
            pending.append(iter(_read_children(child.path)))
    return entries


def total_size(path: PathLike) -> int:
    """Compute the apparent size in bytes of a path and everything below it.

    For a directory this is the sum of the link-level byte lengths of every
    non-directory descendant; directories themselves contribute nothing. For
    any other path it is the path's own link-level length.

    Args:
        path: Path to measure

    Returns:
        Total size in bytes

    Raises:
        TraversalError: If any path along the descent cannot be stat'ed or
            enumerated. No partial total is returned.
    """
    root = Path(path)
    meta = _lstat(root)
    if not stat.S_ISDIR(meta.st_mode):
        return meta.st_size

    total = 0
    pending: list[Path] = [root]
    while pending:
        for child in _read_children(pending.pop()):
            if child.is_dir:
                pending.append(child.path)
            else:
                total += child.size
    return total
