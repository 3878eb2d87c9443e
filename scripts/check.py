#!/usr/bin/env python3
"""
Полная проверка loki-push-client перед коммитом.

Шаги: black, ruff, mypy (кроме --fast), pytest с coverage (кроме --skip-tests).

Usage:
    python scripts/check.py
    python scripts/check.py --fast  # Без mypy
    python scripts/check.py --fix   # black/ruff исправляют сами
"""

import sys
import subprocess
import argparse
from pathlib import Path
from typing import List, Tuple

GREEN = '\033[92m'
RED = '\033[91m'
YELLOW = '\033[93m'
BOLD = '\033[1m'
END = '\033[0m'


def run_step(command: List[str], description: str) -> bool:
    """Запустить инструмент; отсутствующий инструмент не валит проверку."""
    print(f"\n{BOLD}▶ {description}{END}")
    try:
        result = subprocess.run(command, capture_output=True, text=True, errors='ignore')
    except FileNotFoundError:
        print(f"{YELLOW}⚠ {command[0]} не установлен - SKIPPED{END}")
        return True

    if result.returncode == 0:
        print(f"{GREEN}✓ OK{END}")
        return True

    print(f"{RED}✗ FAILED{END}")
    print((result.stdout + result.stderr)[-2000:])
    return False


def main() -> int:
    parser = argparse.ArgumentParser(description="Проверка качества кода")
    parser.add_argument("--fast", action="store_true", help="Без mypy")
    parser.add_argument("--fix", action="store_true", help="Автоматические исправления")
    parser.add_argument("--skip-tests", action="store_true", help="Только линтеры")
    args = parser.parse_args()

    root_dir = Path(__file__).parent.parent
    targets = [str(root_dir / "src"), str(root_dir / "tests")]

    steps: List[Tuple[str, List[str]]] = [
        ("black", ["black", *targets] if args.fix else ["black", "--check", *targets]),
        ("ruff", ["ruff", "check", *targets] + (["--fix"] if args.fix else [])),
    ]
    if not args.fast:
        steps.append(("mypy", ["mypy", str(root_dir / "src" / "loki_client"), "--ignore-missing-imports"]))
    if not args.skip_tests:
        steps.append(("pytest", ["pytest", "--cov=loki_client", "--cov-report=term-missing", str(root_dir / "tests")]))

    results = [(name, run_step(command, name)) for name, command in steps]

    print(f"\n{BOLD}{'=' * 40}\n  ИТОГ\n{'=' * 40}{END}")
    for name, success in results:
        color, status = (GREEN, "✓ PASSED") if success else (RED, "✗ FAILED")
        print(f"{color}{status:12}{END} {name}")

    return 0 if all(success for _, success in results) else 1


if __name__ == "__main__":
    sys.exit(main())
