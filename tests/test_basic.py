from __future__ import annotations

import subprocess
import sys


def test_module_invocation_runs_cli() -> None:
    proc = subprocess.run(
        [sys.executable, "-m", "interview_kata", "uniq", "works"],
        check=False,
        text=True,
        capture_output=True,
    )
    assert proc.returncode == 0
    assert proc.stdout.strip() == "0"


def test_cli_version_flag() -> None:
    proc = subprocess.run(
        [sys.executable, "-m", "interview_kata", "--version"],
        check=False,
        text=True,
        capture_output=True,
    )
    assert proc.returncode == 0
    assert proc.stdout.startswith("interview-kata ")
