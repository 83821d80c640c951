"""Filesystem traversal and size aggregation."""

from __future__ import annotations

from .exceptions import TraversalError
from .traversal import EntryKind, entry_kind, list_entries, list_recursive, total_size

__all__ = [
    "EntryKind",
    "TraversalError",
    "entry_kind",
    "list_entries",
    "list_recursive",
    "total_size",
]
