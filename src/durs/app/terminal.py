"""Terminal control for the interactive browser.

Owns raw-mode lifecycle and alternate-screen switching, and decodes key
presses read from the terminal.
"""

from __future__ import annotations

import contextlib
import os
import select
import shutil
import termios
import tty
from collections.abc import Iterator
from typing import Final

# Key names returned by read_key for non-printable keys
KEY_UP: Final[str] = "UP"
KEY_DOWN: Final[str] = "DOWN"
KEY_LEFT: Final[str] = "LEFT"
KEY_RIGHT: Final[str] = "RIGHT"
KEY_ENTER: Final[str] = "ENTER"
KEY_ESCAPE: Final[str] = "ESC"
# Ctrl+C arrives as a plain byte while ISIG is off in raw mode
KEY_INTERRUPT: Final[str] = "\x03"

_ARROWS: Final[dict[bytes, str]] = {
    b"A": KEY_UP,
    b"B": KEY_DOWN,
    b"C": KEY_RIGHT,
    b"D": KEY_LEFT,
}

# Parameter and intermediate bytes of a CSI sequence (0x20-0x3F)
_CSI_PARAMETER_BYTES: Final[range] = range(0x20, 0x40)

# How long to wait for the rest of an escape sequence
ESC_SEQUENCE_TIMEOUT: Final[float] = 0.05


def _read_byte(fd: int, timeout: float | None) -> bytes:
    if timeout is not None:
        ready, _, _ = select.select([fd], [], [], max(0.0, timeout))
        if not ready:
            return b""
    return os.read(fd, 1)


def read_key(fd: int, timeout: float | None = None) -> str:
    """Read one key press from ``fd``.

    Args:
        fd: File descriptor of a terminal in raw mode
        timeout: Seconds to wait for input (None blocks)

    Returns:
        The typed character, one of the ``KEY_*`` names for Enter, Escape
        and arrow keys (modifiers ignored), or an empty string when nothing
        arrived in time. Unrecognised escape sequences are consumed whole and
        reported as ``KEY_ESCAPE``.
    """
    ch = _read_byte(fd, timeout)
    if not ch:
        return ""
    if ch in {b"\r", b"\n"}:
        return KEY_ENTER
    if ch != b"\x1b":
        return ch.decode("utf-8", errors="replace")

    # Arrow keys arrive as ESC [ A..D (or ESC O A..D in application mode).
    # Other CSI sequences carry parameter bytes before their final byte.
    prefix = _read_byte(fd, ESC_SEQUENCE_TIMEOUT)
    if prefix not in {b"[", b"O"}:
        return KEY_ESCAPE
    final = _read_byte(fd, ESC_SEQUENCE_TIMEOUT)
    if prefix == b"[":
        while final and final[0] in _CSI_PARAMETER_BYTES:
            final = _read_byte(fd, ESC_SEQUENCE_TIMEOUT)
    return _ARROWS.get(final, KEY_ESCAPE)


class TerminalController:
    """Manage terminal mode transitions for a full-screen session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd: int = stdin_fd
        self.stdout_fd: int = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        """Enter raw mode on the alternate screen with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l")

    def disable_tui_mode(self) -> None:
        """Show the cursor, restore the main screen and the saved tty state."""
        os.write(self.stdout_fd, b"\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator[None]:
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()

    def size(self) -> tuple[int, int]:
        """Return the terminal size as ``(columns, lines)``."""
        try:
            size = os.get_terminal_size(self.stdout_fd)
        except OSError:
            size = shutil.get_terminal_size()
        return size.columns, size.lines

    def read_key(self, timeout: float | None = None) -> str:
        """Read one key press from the controlled terminal."""
        return read_key(self.stdin_fd, timeout)

    def draw(self, frame: str) -> None:
        """Replace the screen contents with ``frame``."""
        os.write(self.stdout_fd, b"\x1b[H\x1b[2J" + frame.encode("utf-8"))
