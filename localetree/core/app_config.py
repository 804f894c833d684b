"""Tree view configuration loaded from repository-local `config/app.toml`."""

from __future__ import annotations

import importlib
from dataclasses import dataclass, replace
from functools import lru_cache
from pathlib import Path
from types import ModuleType
from typing import Any

from .presentation import EMPTY_PLACEHOLDER

tomllib: ModuleType | None
try:  # Python 3.11+
    tomllib = importlib.import_module("tomllib")
except ModuleNotFoundError:  # pragma: no cover
    tomllib = None


@dataclass(frozen=True, slots=True)
class TreeViewConfig:
    """Initial projection settings for the locales sidebar."""

    flatten: bool = False
    source_language: str = "en"
    scope: tuple[str, ...] | None = None
    empty_placeholder: str = EMPTY_PLACEHOLDER


def _candidate_roots(root: Path | None) -> list[Path]:
    roots = [Path.cwd()]
    if root is not None:
        roots.append(root)
    seen: set[Path] = set()
    out: list[Path] = []
    for entry in roots:
        entry = entry.resolve()
        if entry in seen:
            continue
        seen.add(entry)
        out.append(entry)
    return out


def _load_toml(path: Path) -> dict[str, Any]:
    if tomllib is None or not path.exists():
        return {}
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def _normalize_bool(value: Any, *, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    raw = str(value).strip().lower()
    if raw in {"1", "true", "yes", "on"}:
        return True
    if raw in {"0", "false", "no", "off"}:
        return False
    return default


def _normalize_scope(
    value: Any, *, default: tuple[str, ...] | None
) -> tuple[str, ...] | None:
    if isinstance(value, str):
        candidate = [value]
    elif isinstance(value, list):
        candidate = value
    else:
        return default
    out: list[str] = []
    seen: set[str] = set()
    for item in candidate:
        keypath = str(item).strip()
        if not keypath or keypath in seen:
            continue
        seen.add(keypath)
        out.append(keypath)
    return tuple(out) if out else None


def _normalize_text(value: Any, *, default: str) -> str:
    if not isinstance(value, str):
        return default
    text = value.strip()
    return text or default


@lru_cache(maxsize=8)
def load(root: Path | None = None) -> TreeViewConfig:
    """Merge the `[tree]` table of every `config/app.toml` candidate."""
    cfg = TreeViewConfig()
    for base in _candidate_roots(root):
        data = _load_toml(base / "config" / "app.toml")
        tree = data.get("tree", {})
        if not isinstance(tree, dict):
            continue
        cfg = replace(
            cfg,
            flatten=_normalize_bool(tree.get("flatten"), default=cfg.flatten),
            source_language=_normalize_text(
                tree.get("source_language"), default=cfg.source_language
            ),
            scope=_normalize_scope(tree.get("scope"), default=cfg.scope),
            empty_placeholder=(
                tree["empty_placeholder"]
                if isinstance(tree.get("empty_placeholder"), str)
                else cfg.empty_placeholder
            ),
        )
    return cfg
