"""Application layer: command-line interface, output and interactive browser."""

from __future__ import annotations

from durs.app.cli import cli
from durs.app.runner import ApplicationRunner, Mode

__all__ = [
    "cli",
    "ApplicationRunner",
    "Mode",
]
