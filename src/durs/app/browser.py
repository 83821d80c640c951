"""Interactive directory browser.

Shows the direct children of one directory with their total sizes and lets
the user move the selection, descend into sub-directories and climb back up.
Every traversal call blocks the redraw loop until it completes.
"""

from __future__ import annotations

import io
import os
from pathlib import Path

from rich.console import Console, Group, RenderableType
from rich.table import Table
from rich.text import Text

from durs.app.output import Row, collect_rows, sort_rows
from durs.app.terminal import KEY_DOWN, KEY_ENTER, KEY_INTERRUPT, KEY_LEFT, KEY_RIGHT, KEY_UP, TerminalController
from durs.core.config import SortKey
from durs.core.filesystem import EntryKind, TraversalError
from durs.utils.formatting import format_size
from durs.utils.logging import get_logger, path_context

logger = get_logger(__name__)

HELP_TEXT = "j/k move  l/enter open  h back  r reload  q quit"

# Header line, table header and footer line
_CHROME_LINES = 3


class Browser:
    """State and key handling for the interactive browser."""

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        sort_by: SortKey = SortKey.SIZE,
        show_hidden: bool = True,
        human_readable: bool = True,
    ) -> None:
        """Initialize the browser.

        Args:
            path: Directory to show first
            sort_by: Row ordering
            show_hidden: Whether dot-entries are shown
            human_readable: Show sizes in binary units instead of raw bytes
        """
        # Absolute but not resolved, so symlinked paths keep their names
        self.path: Path = Path(os.path.abspath(path))
        self.sort_by: SortKey = sort_by
        self.show_hidden: bool = show_hidden
        self.human_readable: bool = human_readable
        self.rows: list[Row] = []
        self.selected: int = 0
        self.scroll: int = 0
        self.error: str | None = None
        self.running: bool = True

    @property
    def total(self) -> int:
        return sum(row.size for row in self.rows)

    @property
    def selected_row(self) -> Row | None:
        if not self.rows:
            return None
        return self.rows[self.selected]

    def should_close(self) -> bool:
        return not self.running

    def load(self) -> None:
        """Rebuild the rows for the current directory.

        A traversal failure clears the rows and keeps the message for
        display instead of ending the session.
        """
        with path_context(self.path):
            logger.debug("Loading directory")
            try:
                rows = collect_rows(self.path)
            except TraversalError as exc:
                logger.error("Failed to load directory: %s", exc)
                self.rows = []
                self.selected = 0
                self.scroll = 0
                self.error = str(exc)
                return

        if not self.show_hidden:
            rows = [row for row in rows if not row.is_hidden]
        self.rows = sort_rows(rows, self.sort_by)
        self.error = None
        self.selected = min(self.selected, max(len(self.rows) - 1, 0))

    def on_key(self, key: str) -> None:
        """Dispatch a key returned by ``read_key``.

        Raises:
            KeyboardInterrupt: On Ctrl+C, which raw mode delivers as a key
        """
        if key == KEY_INTERRUPT:
            raise KeyboardInterrupt
        if key in ("q", "Q"):
            self.running = False
        elif key in ("j", KEY_DOWN):
            self.on_down()
        elif key in ("k", KEY_UP):
            self.on_up()
        elif key in ("h", KEY_LEFT):
            self.on_left()
        elif key in ("l", KEY_RIGHT, KEY_ENTER):
            self.on_right()
        elif key == "r":
            self.load()

    def on_down(self) -> None:
        if self.rows:
            self.selected = min(self.selected + 1, len(self.rows) - 1)

    def on_up(self) -> None:
        self.selected = max(self.selected - 1, 0)

    def on_left(self) -> None:
        """Go to the parent directory and select the directory we came from."""
        parent = self.path.parent
        if parent == self.path:
            return
        previous = self.path
        self._change_directory(parent)
        for index, row in enumerate(self.rows):
            if row.path == previous:
                self.selected = index
                break

    def on_right(self) -> None:
        """Open the selected row if it is a directory (symlinks stay closed)."""
        row = self.selected_row
        if row is None or row.kind is not EntryKind.DIRECTORY:
            return
        self._change_directory(row.path)

    def _change_directory(self, path: Path) -> None:
        logger.info("Changing directory to %s", path)
        self.path = path
        self.selected = 0
        self.scroll = 0
        self.load()

    def _scroll_into_view(self, visible: int) -> None:
        if self.selected < self.scroll:
            self.scroll = self.selected
        elif self.selected >= self.scroll + visible:
            self.scroll = self.selected - visible + 1

    def render(self, height: int) -> RenderableType:
        """Build the screen contents for a terminal ``height`` lines tall."""
        header = Text.assemble(
            (str(self.path), "bold"),
            "  ",
            (format_size(self.total, human_readable=self.human_readable), "cyan"),
        )

        table = Table(box=None, show_header=True, header_style="bold", expand=True, pad_edge=False)
        table.add_column("Size", justify="right", no_wrap=True, width=12)
        table.add_column("Name", no_wrap=True, overflow="ellipsis", ratio=1)

        visible = max(1, height - _CHROME_LINES)
        self._scroll_into_view(visible)
        window = self.rows[self.scroll : self.scroll + visible]
        for offset, row in enumerate(window):
            style = "reverse" if self.scroll + offset == self.selected else ""
            name_style = "bold blue" if row.kind is EntryKind.DIRECTORY else ""
            table.add_row(
                format_size(row.size, human_readable=self.human_readable),
                Text(row.name, style=name_style),
                style=style,
            )

        if self.error is not None:
            footer = Text(self.error, style="bold red")
        else:
            footer = Text(HELP_TEXT, style="dim")
        return Group(header, table, footer)


def render_frame(renderable: RenderableType, *, width: int, height: int) -> str:
    """Render to an ANSI string with ``\\r\\n`` line endings for raw mode."""
    buffer = io.StringIO()
    console = Console(file=buffer, width=width, height=height, force_terminal=True)
    console.print(renderable)
    return buffer.getvalue().rstrip("\n").replace("\n", "\r\n")


def run_browser(browser: Browser, terminal: TerminalController, *, poll_interval: float) -> None:
    """Run the draw / wait-for-key loop until the user quits.

    Args:
        browser: Browser state to display and drive
        terminal: Terminal to draw on and read keys from
        poll_interval: Seconds to wait for a key before redrawing
    """
    browser.load()
    with terminal.raw_mode():
        while not browser.should_close():
            width, height = terminal.size()
            terminal.draw(render_frame(browser.render(height), width=width, height=height))
            key = terminal.read_key(timeout=poll_interval)
            if key:
                browser.on_key(key)
