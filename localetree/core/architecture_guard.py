"""Architecture guard keeping the projection core free of Qt and GUI imports."""

from __future__ import annotations

import ast
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class BoundaryRule:
    """Import prefixes forbidden for every module under one package directory."""

    forbidden_prefixes: tuple[str, ...]


DEFAULT_RULES: dict[str, BoundaryRule] = {
    "localetree/core": BoundaryRule(
        forbidden_prefixes=("PySide6", "localetree.gui"),
    )
}


def collect_imports(source: str) -> set[str]:
    """Collect absolute module names imported by *source*."""
    tree = ast.parse(source)
    modules: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            modules.update(alias.name for alias in node.names)
            continue
        if isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
            modules.add(node.module)
    return modules


def _forbidden(module: str, prefixes: tuple[str, ...]) -> bool:
    return any(
        module == prefix or module.startswith(f"{prefix}.") for prefix in prefixes
    )


def check_file(path: Path, rule: BoundaryRule) -> list[str]:
    source = path.read_text(encoding="utf-8")
    try:
        modules = collect_imports(source)
    except SyntaxError as exc:
        return [f"{path}: cannot parse imports ({exc.msg})."]
    disallowed = sorted(m for m in modules if _forbidden(m, rule.forbidden_prefixes))
    if disallowed:
        return [f"{path}: disallowed imports: {', '.join(disallowed)}"]
    return []


def check_rules(
    root: Path, rules: Mapping[str, BoundaryRule] | None = None
) -> list[str]:
    """Run every rule against the `*.py` files of its package directory."""
    active_rules = rules or DEFAULT_RULES
    violations: list[str] = []
    for rel_dir, rule in active_rules.items():
        package = root / rel_dir
        if not package.is_dir():
            violations.append(f"{package}: missing package for architecture guard.")
            continue
        for path in sorted(package.rglob("*.py")):
            violations.extend(check_file(path, rule))
    return violations
