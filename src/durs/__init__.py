"""durs - disk usage inspection.

Recursively enumerates directory contents and computes aggregate byte
sizes, presented as plain command output or through an interactive
terminal browser.
"""

from durs.__main__ import main

__all__ = ["main"]
