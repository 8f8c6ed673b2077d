#!/usr/bin/env python3
"""Run import sorting, formatting and the test suite.

Usage:
    python scripts/lint_all.py [--check] [--skip-tests] [--only STEP ...]

In the default mode isort and black rewrite files in place; ``--check``
reports problems without touching anything (the mode CI uses).
"""

import argparse
import subprocess
import sys
from pathlib import Path
from typing import List, NamedTuple

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent
SOURCE_DIRS = ["shopassist", "tests", "scripts"]


class Step(NamedTuple):
    name: str
    fix_cmd: List[str]
    check_cmd: List[str]


STEPS = [
    Step("isort", ["isort", *SOURCE_DIRS], ["isort", *SOURCE_DIRS, "--check-only", "--diff"]),
    Step("black", ["black", *SOURCE_DIRS], ["black", *SOURCE_DIRS, "--check"]),
    Step("pytest", ["pytest", "tests/", "-v"], ["pytest", "tests/", "-q"]),
]


def run_command(cmd: List[str], description: str) -> bool:
    """Run a command from the project root.

    Returns:
        True if the command exited with status 0.
    """
    print(f"\n{'=' * 60}")
    print(f"Running: {description}")
    print(f"Command: {' '.join(cmd)}")
    print(f"{'=' * 60}\n")

    try:
        result = subprocess.run(cmd, cwd=PROJECT_ROOT, check=False)
    except FileNotFoundError as e:
        print(f"\n✗ Error: {e}")
        print("  Install the dev extras: pip install -e '.[test,dev]'\n")
        return False

    if result.returncode == 0:
        print(f"\n✓ {description} passed\n")
        return True
    print(f"\n✗ {description} failed (exit code: {result.returncode})\n")
    return False


def main() -> int:
    parser = argparse.ArgumentParser(description="Run formatting and test checks")
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only report formatting problems (don't modify files)",
    )
    parser.add_argument("--skip-tests", action="store_true", help="Skip running pytest")
    parser.add_argument(
        "--only",
        nargs="+",
        choices=[step.name for step in STEPS],
        help="Run only the named steps",
    )
    args = parser.parse_args()

    selected = [
        step for step in STEPS
        if (not args.only or step.name in args.only)
        and not (args.skip_tests and step.name == "pytest")
    ]

    print("\n" + "=" * 60)
    print("ShopAssist Code Quality Checks")
    print("=" * 60)

    failed = []
    for step in selected:
        cmd = step.check_cmd if args.check else step.fix_cmd
        if not run_command(cmd, step.name):
            failed.append(step.name)

    print("\n" + "=" * 60)
    if failed:
        print(f"✗ Failed: {', '.join(failed)}")
    else:
        print("✓ All checks passed!")
    print("=" * 60 + "\n")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
