#!/usr/bin/env python3
from __future__ import annotations

import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SAMPLE = Path(__file__).with_name("sample_content.json")


def run(cmd: list[str]) -> int:
    print("$", " ".join(cmd))
    return subprocess.run(cmd, check=False, cwd=ROOT).returncode


def main() -> int:
    steps = [
        [sys.executable, "-m", "unittest", "discover", "-s", "tests", "-p", "test_*.py"],
        # Smoke: the sample strip lays out at a desktop and a phone width.
        [sys.executable, "-m", "app.folio.main", str(SAMPLE), "--progress", "0.5", "--jump", "Lab"],
        [sys.executable, "-m", "app.folio.main", str(SAMPLE), "--width", "375", "--progress", "0.9"],
    ]
    for cmd in steps:
        code = run(cmd)
        if code != 0:
            print("\n❌ dev_check failed")
            return code

    print("\n✅ dev_check passed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
