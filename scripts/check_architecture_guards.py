#!/usr/bin/env python3
from __future__ import annotations

import argparse
from pathlib import Path

from localetree.core.architecture_guard import check_rules


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Verify the locale tree core stays free of Qt and GUI imports."
    )
    parser.add_argument(
        "--root",
        default=None,
        help="Repository root to check (defaults to this script's repo root).",
    )
    return parser.parse_args()


def main() -> int:
    args = _parse_args()
    root = (
        Path(args.root).resolve() if args.root else Path(__file__).resolve().parents[1]
    )
    violations = check_rules(root)
    if not violations:
        print("Core import boundary passed.")
        return 0
    print("Core import boundary violations:")
    for item in violations:
        print(f"- {item}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
