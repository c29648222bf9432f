#!/usr/bin/env python3
"""Run releasebucket quality gates: format, lint, typecheck, test.

Usage:
    python scripts/run_gates.py [format|lint|typecheck|test]

Stops at the first failing gate and exits with its status.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).parent.parent

GATES: dict[str, list[str]] = {
    "format": ["ruff", "format", "--check", "."],
    "lint": ["ruff", "check", "."],
    "typecheck": [sys.executable, "-m", "mypy", "src/releasebucket"],
    "test": [sys.executable, "-m", "pytest", "-q"],
}


def main(argv: list[str]) -> int:
    selected = argv or list(GATES)
    unknown = [name for name in selected if name not in GATES]
    if unknown:
        print(f"Unknown gate(s): {', '.join(unknown)}. Available: {', '.join(GATES)}")
        return 1

    for name in selected:
        print(f"==> {name}: {' '.join(GATES[name])}")
        try:
            subprocess.run(GATES[name], cwd=REPO_ROOT, check=True)
        except subprocess.CalledProcessError as e:
            print(f"GATE FAILED: {name} (exit code {e.returncode})")
            return e.returncode
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
