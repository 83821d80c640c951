"""Pure formatting utilities for human-readable output.

Stateless helpers converting raw sizes and paths into display strings.
"""

from pathlib import Path
from typing import Final

from durs.core.filesystem import EntryKind

# Binary unit suffixes above bytes (1024-based)
_UNITS: Final[tuple[str, ...]] = ("KiB", "MiB", "GiB", "TiB", "PiB")
_STEP: Final[int] = 1024


def format_size(num_bytes: int, *, human_readable: bool = True) -> str:
    """Convert a byte count to a display string.

    Uses binary units (1024-based) with one decimal place once the value
    reaches one kibibyte.

    Args:
        num_bytes: Number of bytes to format (must be non-negative)
        human_readable: When False, return the plain integer

    Returns:
        Display string for the size

    Examples:
        >>> format_size(512)
        '512 B'
        >>> format_size(1536)
        '1.5 KiB'
        >>> format_size(5 * 1024**3)
        '5.0 GiB'
        >>> format_size(1536, human_readable=False)
        '1536'
    """
    if num_bytes < 0:
        msg = "num_bytes must be non-negative"
        raise ValueError(msg)

    if not human_readable:
        return str(num_bytes)

    if num_bytes < _STEP:
        return f"{num_bytes} B"

    value = num_bytes / _STEP
    for unit in _UNITS[:-1]:
        if round(value, 1) < _STEP:
            return f"{value:.1f} {unit}"
        value /= _STEP
    return f"{value:.1f} {_UNITS[-1]}"


def format_entry_name(path: Path, kind: EntryKind) -> str:
    """Return the display name of a listing row.

    Directories get a trailing ``/`` and symbolic links a trailing ``@``.
    """
    if not path.name:
        return str(path)
    name = path.name
    if kind is EntryKind.DIRECTORY:
        return f"{name}/"
    if kind is EntryKind.SYMLINK:
        return f"{name}@"
    return name
