#!/usr/bin/env python3
# Copyright 2026 busstep Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the CI checks locally: format, lint, type check, tests, CLI smoke test and build."""

import argparse
import subprocess
import sys
import time
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: dict[str, list[str]] = {
    "format": ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"],
    "lint": ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"],
    "types": ["uv", "run", "ty", "check", "src/"],
    "tests": ["uv", "run", "pytest", "--cov=busstep", "--cov-report=term-missing"],
    "smoke": ["uv", "run", "busstep", "members", "--xml-path", "tests/xml"],
    "docs": ["uv", "run", "sphinx-build", "-b", "html", "docs/sphinx", "docs/_build/html"],
    "build": ["uv", "build"],
}


def main() -> int:
    """Run the selected CI steps (all by default) and report results."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("steps", nargs="*", help=f"Steps to run (default: all of {', '.join(STEPS)})")
    parser.add_argument("--keep-going", action="store_true", help="Run remaining steps after a failure")
    args = parser.parse_args()

    unknown = [name for name in args.steps if name not in STEPS]
    if unknown:
        parser.error(f"unknown step(s): {', '.join(unknown)}")

    selected = args.steps or list(STEPS)
    results: list[tuple[str, bool, float]] = []

    for name in selected:
        passed, elapsed = _run_step(name, STEPS[name])
        results.append((name, passed, elapsed))
        if not passed and not args.keep_going:
            break

    _print_summary(results, skipped=selected[len(results) :])
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################

_RULE = "=" * 60


def _repo_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _run_step(name: str, cmd: list[str]) -> tuple[bool, float]:
    print(f"\n{chalk.blue(_RULE)}")
    print(chalk.blue(f"{name}: {' '.join(cmd)}"))
    print(chalk.blue(_RULE))
    start = time.monotonic()
    proc = subprocess.run(cmd, cwd=_repo_root())
    return proc.returncode == 0, time.monotonic() - start


def _print_summary(results: list[tuple[str, bool, float]], skipped: list[str]) -> None:
    print(f"\n{chalk.blue(_RULE)}")
    print(chalk.blue("  Summary"))
    print(chalk.blue(_RULE))
    for name, passed, elapsed in results:
        if passed:
            print(chalk.green(f"  PASS  {name} ({elapsed:.1f}s)"))
        else:
            print(chalk.red(f"  FAIL  {name} ({elapsed:.1f}s)"))
    for name in skipped:
        print(chalk.yellow(f"  SKIP  {name}"))
    print()


if __name__ == "__main__":
    sys.exit(main())
