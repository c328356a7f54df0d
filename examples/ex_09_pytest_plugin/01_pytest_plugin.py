"""Pytest plugin smoke test.

Runs ``pytest -q test_demo.py`` in this folder. The demo overrides the
``fixtura_registry`` fixture, and module-level ``fixtura.create`` calls in the
tests use that per-test registry.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path


def main() -> None:
    completed = subprocess.run(  # noqa: S603
        [sys.executable, "-m", "pytest", "-q", "-p", "no:cacheprovider", "test_demo.py"],
        cwd=Path(__file__).resolve().parent,
        capture_output=True,
        text=True,
        check=False,
    )
    print(f"exit_code={completed.returncode}")  # => exit_code=0


if __name__ == "__main__":
    main()
