"""Application entry point for durs."""

from __future__ import annotations

from durs.app.cli import cli

__all__ = ["main"]


def main() -> None:
    """Run the durs command-line interface."""
    cli(prog_name="durs")


if __name__ == "__main__":
    main()
