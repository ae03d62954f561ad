"""Run all quality checks and report results as JSON.

Usage:
    python scripts/quality_gate.py              # run all, JSON output
    python scripts/quality_gate.py --skip-tests # skip pytest (fast)
    python scripts/quality_gate.py --fix        # auto-fix ruff issues first
"""

from __future__ import annotations

import argparse
import json
import re
import subprocess
import sys
import time
from collections.abc import Callable
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent

MYPY_TARGETS = [
    "trello_cli/api.py",
    "trello_cli/cards.py",
    "trello_cli/client.py",
    "trello_cli/models.py",
    "trello_cli/validation.py",
    "trello_cli/payload.py",
    "trello_cli/fields.py",
    "trello_cli/exceptions.py",
    "trello_cli/_utils.py",
    "trello_cli/types.py",
]


def _run(cmd: list[str]) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "-m", *cmd],
        capture_output=True,
        text=True,
        cwd=str(ROOT),
        timeout=300,
    )


def _count(pattern: str, text: str) -> int:
    return sum(1 for line in text.splitlines() if re.search(pattern, line))


def _timed(fn: Callable[[], dict]) -> dict:
    t0 = time.monotonic()
    result = fn()
    result["duration_s"] = round(time.monotonic() - t0, 1)
    if result["status"] == "pass":
        result.pop("output", None)
    return result


def check_ruff_lint(fix: bool = False) -> dict:
    if fix:
        _run(["ruff", "check", "--fix", "."])
    r = _run(["ruff", "check", "."])
    return {
        "status": "pass" if r.returncode == 0 else "fail",
        "errors": _count(r"^\S+:\d+:\d+:", r.stdout),
        "output": r.stdout.strip(),
    }


def check_ruff_format() -> dict:
    r = _run(["ruff", "format", "--check", "."])
    combined = r.stdout + r.stderr
    return {
        "status": "pass" if r.returncode == 0 else "fail",
        "files_to_reformat": _count(r"^Would reformat", combined),
        "output": combined.strip(),
    }


def check_mypy() -> dict:
    r = _run(["mypy", *MYPY_TARGETS])
    return {
        "status": "pass" if r.returncode == 0 else "fail",
        "errors": _count(r": error:", r.stdout),
        "output": r.stdout.strip(),
    }


def check_pytest() -> dict:
    r = _run(["pytest", "tests/", "-q", "--no-header", "--tb=short"])
    summary = r.stdout.strip().splitlines()[-1:] or [""]
    passed = re.search(r"(\d+)\s+passed", summary[0])
    failed = re.search(r"(\d+)\s+failed", summary[0])
    return {
        "status": "pass" if r.returncode == 0 else "fail",
        "passed": int(passed.group(1)) if passed else 0,
        "failed": int(failed.group(1)) if failed else 0,
        "output": r.stdout.strip()[-2000:],
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Run all quality checks")
    parser.add_argument("--skip-tests", action="store_true", help="Skip pytest")
    parser.add_argument("--fix", action="store_true", help="Auto-fix ruff issues first")
    args = parser.parse_args()

    t0 = time.monotonic()
    steps: list[tuple[str, Callable[[], dict]]] = [
        ("ruff_lint", lambda: check_ruff_lint(fix=args.fix)),
        ("ruff_format", check_ruff_format),
        ("mypy", check_mypy),
    ]
    if not args.skip_tests:
        steps.append(("pytest", check_pytest))

    checks: dict[str, dict] = {}
    for name, fn in steps:
        print(f"Running {name}...", file=sys.stderr)
        checks[name] = _timed(fn)
    if args.skip_tests:
        checks["pytest"] = {"status": "skip", "reason": "--skip-tests"}

    overall = "pass" if all(c["status"] in ("pass", "skip") for c in checks.values()) else "fail"
    print(
        json.dumps(
            {
                "overall": overall,
                "checks": checks,
                "total_duration_s": round(time.monotonic() - t0, 1),
            },
            indent=2,
        )
    )
    sys.exit(0 if overall == "pass" else 1)


if __name__ == "__main__":
    main()
