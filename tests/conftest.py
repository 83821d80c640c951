"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest


def build_tree(root: Path, layout: dict[str, str | None]) -> Path:
    """Create files and directories below ``root``.

    Keys are relative paths; a string value is written as file content and
    ``None`` creates a directory.
    """
    root.mkdir(parents=True, exist_ok=True)
    for relative, content in layout.items():
        target = root / relative
        if content is None:
            target.mkdir(parents=True, exist_ok=True)
        else:
            target.parent.mkdir(parents=True, exist_ok=True)
            _ = target.write_text(content)
    return root


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Directory holding a 4-byte file and a sub-directory with 12 + 21 bytes."""
    return build_tree(
        tmp_path / "root",
        {
            "file": "test",
            "dir/other_file": "testing test",
            "dir/and_another_file": "testing test of tests",
        },
    )


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    """Put the root logger back the way pytest configured it."""
    root_logger = logging.getLogger()
    saved_handlers = root_logger.handlers[:]
    saved_level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    for handler in saved_handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(saved_level)
