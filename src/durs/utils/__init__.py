"""Shared utility modules.

Pure, stateless helpers for size and name formatting, plus the logging
setup used by the application layer.
"""

from durs.utils.formatting import format_entry_name, format_size

__all__ = [
    "format_entry_name",
    "format_size",
]
