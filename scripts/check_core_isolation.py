#!/usr/bin/env python3
"""Core isolation validation script.

Enforces the architectural rule that ``durs.core`` stays a pure library:
it must not import the application layer, user-interface libraries or the
logging machinery. Traversal failures are raised to the caller, which
decides how to report them.

This script scans ``src/durs/core`` for:
- Imports from durs.app or durs.utils
- Imports of click or rich
- Imports of the logging module

Exit codes:
    0: No violations found (clean)
    1: Violations detected (architectural rule broken)
"""

from __future__ import annotations

import re
import sys
from pathlib import Path
from typing import Final

# ANSI color codes for terminal output
RED: Final[str] = "\033[91m"
GREEN: Final[str] = "\033[92m"
YELLOW: Final[str] = "\033[93m"
RESET: Final[str] = "\033[0m"

FORBIDDEN_IMPORTS: Final[tuple[tuple[re.Pattern[str], str], ...]] = (
    (re.compile(r"^\s*(?:from|import)\s+durs\.(?:app|utils)\b"), "Import from application layer"),
    (re.compile(r"^\s*(?:from|import)\s+(?:click|rich)\b"), "Import of user-interface library"),
    (re.compile(r"^\s*(?:from|import)\s+logging\b"), "Import of logging"),
)


def check_file(file_path: Path) -> list[tuple[int, str]]:
    """Check a single Python file for core isolation violations.

    Args:
        file_path: Path to the Python file to check.

    Returns:
        List of (line_number, violation_description) tuples.
    """
    violations: list[tuple[int, str]] = []

    try:
        lines = file_path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        print(f"{YELLOW}Warning: Could not read {file_path}: {e}{RESET}", file=sys.stderr)
        return violations

    for line_num, line in enumerate(lines, start=1):
        for pattern, description in FORBIDDEN_IMPORTS:
            if pattern.search(line):
                violations.append((line_num, f"{description}: {line.strip()}"))

    return violations


def main() -> int:
    """Main entry point for the core isolation check.

    Returns:
        Exit code: 0 if no violations, 1 if violations found.
    """
    project_root = Path(__file__).parent.parent
    core_path = project_root / "src" / "durs" / "core"

    if not core_path.exists():
        print(f"{RED}Error: Could not find src/durs/core directory{RESET}", file=sys.stderr)
        return 1

    print(f"Checking core isolation in {core_path}\n")

    all_violations: dict[Path, list[tuple[int, str]]] = {}
    for py_file in core_path.rglob("*.py"):
        if "__pycache__" in py_file.parts:
            continue
        file_violations = check_file(py_file)
        if file_violations:
            all_violations[py_file] = file_violations

    if not all_violations:
        print(f"{GREEN}✓ No core isolation violations found{RESET}")
        return 0

    total_violations = sum(len(v) for v in all_violations.values())
    print(f"{RED}✗ Found {total_violations} core isolation violations:{RESET}\n")
    for file_path, violations in sorted(all_violations.items()):
        print(f"{RED}{file_path.relative_to(project_root)}{RESET}")
        for line_num, description in violations:
            print(f"  {line_num}: {description}")
        print()

    print("durs.core must not depend on the application layer, UI libraries or logging.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
