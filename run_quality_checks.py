#!/usr/bin/env python
"""Local quality checks and tests runner.

Runs formatting, import ordering, lint, type, dead-code and complexity checks
plus the test suite, the same set CI runs.

Usage:
    python run_quality_checks.py                    # Run all checks (no fixes)
    python run_quality_checks.py --fix              # Let black/isort rewrite files
    python run_quality_checks.py --skip lint type   # Skip selected checks
"""

import argparse
import subprocess
import sys

PACKAGE_DIR = "periphsim"
TESTS_DIR = "tests"
DIRS_TO_CHECK = [PACKAGE_DIR, TESTS_DIR, "examples"]


class CheckRunner:
    """Runs quality checks in order and reports a summary."""

    def __init__(self, fix: bool = False, skip_checks: list[str] | None = None):
        self.fix = fix
        self.skip_checks = set(skip_checks or [])
        self.failed_checks: list[str] = []
        self.passed_checks: list[str] = []

    def checks(self) -> list[tuple[str, list[str]]]:
        black = ["black", *DIRS_TO_CHECK] if self.fix else ["black", "--check", *DIRS_TO_CHECK]
        isort = ["isort", *DIRS_TO_CHECK] if self.fix else ["isort", "--check-only", *DIRS_TO_CHECK]
        return [
            ("formatting", black),
            ("imports", isort),
            ("lint", ["pylint", PACKAGE_DIR]),
            ("type", ["mypy", PACKAGE_DIR]),
            ("deadcode", ["vulture", PACKAGE_DIR]),
            ("complexity", ["radon", "cc", PACKAGE_DIR, "-a"]),
            ("tests", ["pytest", f"--cov={PACKAGE_DIR}", "--cov-report=term-missing", TESTS_DIR]),
        ]

    def run_command(self, name: str, cmd: list[str]) -> bool:
        """Run one check and record whether it passed."""
        if name in self.skip_checks:
            print(f"-- skipping {name}")
            return True

        print(f"\n{'=' * 70}\n>> {name}: {' '.join(cmd)}\n{'=' * 70}")
        try:
            success = subprocess.run(cmd, check=False).returncode == 0
        except FileNotFoundError as e:
            print(f"!! {e}\n   Install the tools with: pip install -e .[dev]")
            success = False

        (self.passed_checks if success else self.failed_checks).append(name)
        return success

    def run_all(self) -> int:
        for name, cmd in self.checks():
            self.run_command(name, cmd)

        print(f"\n{'=' * 70}\nSUMMARY")
        for name in self.passed_checks:
            print(f"  passed  {name}")
        for name in self.failed_checks:
            print(f"  FAILED  {name}")
        return 0 if not self.failed_checks else 1


def main() -> int:
    parser = argparse.ArgumentParser(description="Run local quality checks and tests")
    parser.add_argument(
        "--fix",
        action="store_true",
        help="Let black and isort rewrite files instead of only checking",
    )
    parser.add_argument(
        "--skip",
        nargs="+",
        default=[],
        help="Skip checks (formatting, imports, lint, type, deadcode, complexity, tests)",
    )
    args = parser.parse_args()

    return CheckRunner(fix=args.fix, skip_checks=args.skip).run_all()


if __name__ == "__main__":
    sys.exit(main())
