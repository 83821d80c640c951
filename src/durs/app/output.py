"""Non-interactive output built on Rich."""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from durs.core.config import SortKey
from durs.core.filesystem import EntryKind, entry_kind, list_entries, total_size
from durs.utils.formatting import format_entry_name, format_size


@dataclass(frozen=True, slots=True)
class Row:
    """A direct child of an inspected directory with its total size."""

    path: Path
    kind: EntryKind
    size: int

    @property
    def name(self) -> str:
        return format_entry_name(self.path, self.kind)

    @property
    def is_hidden(self) -> bool:
        return self.path.name.startswith(".")


def collect_rows(path: str | os.PathLike[str]) -> list[Row]:
    """Build one row per direct child of ``path``.

    A non-directory path yields a single row for the path itself.

    Raises:
        TraversalError: If any child cannot be listed or measured
    """
    return [Row(child, entry_kind(child), total_size(child)) for child in list_entries(path)]


def sort_rows(rows: Iterable[Row], sort_by: SortKey) -> list[Row]:
    """Order rows by size (largest first), by name, or keep them as listed."""
    if sort_by is SortKey.SIZE:
        return sorted(rows, key=lambda row: (-row.size, row.path.name))
    if sort_by is SortKey.NAME:
        return sorted(rows, key=lambda row: row.path.name)
    return list(rows)


def print_paths(console: Console, paths: Iterable[Path]) -> None:
    """Write one path per line without markup or wrapping."""
    for path in paths:
        console.out(str(path), highlight=False)


def print_total(console: Console, path: Path, size: int, *, human_readable: bool) -> None:
    """Write a ``du``-style ``<size>\\t<path>`` line."""
    console.out(f"{format_size(size, human_readable=human_readable)}\t{path}", highlight=False)


def build_summary_table(rows: Sequence[Row], *, human_readable: bool, title: str | None = None) -> Table:
    """Build a table of rows with a footer holding the combined size.

    Args:
        rows: Rows to display, already ordered
        human_readable: Show sizes in binary units instead of raw bytes
        title: Optional table title

    Returns:
        Rich table ready to print
    """
    total = sum(row.size for row in rows)
    table = Table(
        title=title,
        box=box.SIMPLE,
        show_header=True,
        show_footer=True,
        header_style="bold cyan",
    )
    table.add_column("Name", footer="Total", overflow="fold")
    table.add_column("Kind", no_wrap=True)
    table.add_column(
        "Size",
        footer=format_size(total, human_readable=human_readable),
        justify="right",
        no_wrap=True,
    )
    for row in rows:
        table.add_row(
            Text(row.name, style="bold blue" if row.kind is EntryKind.DIRECTORY else ""),
            row.kind.value,
            format_size(row.size, human_readable=human_readable),
        )
    return table
