"""Run formatting checks for kctrust.

Default (no flags):
    - Run black in check mode over the package, tests and scripts

With --fix:
    - Run black to reformat those paths in place

Equivalent commands:
    Check: black --check kctrust tests scripts
    Fix:   black kctrust tests scripts
"""

from __future__ import annotations

import subprocess
import sys
from typing import List

LINT_PATHS = ["kctrust", "tests", "scripts"]


def _run(cmd: List[str]) -> int:
    """Run a subprocess command and return its exit code."""
    proc = subprocess.run(cmd, stdout=sys.stdout, stderr=sys.stderr)  # noqa: S603,S607
    return proc.returncode


def main() -> None:
    """Check formatting, or apply it when --fix is given."""
    fix = "--fix" in sys.argv[1:]

    black_cmd = [sys.executable, "-m", "black"]
    if not fix:
        black_cmd.append("--check")
    black_cmd.extend(LINT_PATHS)

    code = _run(black_cmd)
    print("✓ Formatting OK" if code == 0 else "✗ Formatting issues found", file=sys.stderr)
    sys.exit(1 if code else 0)


if __name__ == "__main__":  # pragma: no cover
    main()
