"""Env-enabled timing of projection reads and model resets, summarized to stderr."""

from __future__ import annotations

import os
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager, suppress
from dataclasses import dataclass

_TRACE_ENV = "LOCALETREE_PERF_TRACE"
CATEGORIES = frozenset({"roots", "children", "refresh", "model_reset", "fetch"})


def parse_categories(value: str) -> frozenset[str]:
    """Read `roots,children` style lists; `all`/`1`/`on` enable every category."""
    parts = {part.strip() for part in value.lower().split(",") if part.strip()}
    if parts & {"1", "true", "yes", "on", "all"}:
        return CATEGORIES
    return frozenset(parts & CATEGORIES)


@dataclass
class _Totals:
    calls: int = 0
    nodes: int = 0
    elapsed_ms: float = 0.0

    def line(self, name: str) -> str:
        per_call = self.elapsed_ms / self.calls if self.calls else 0.0
        return (
            f"perf {name}: {self.calls} calls, {self.nodes} nodes, "
            f"{self.elapsed_ms:.1f}ms total, {per_call:.2f}ms/call"
        )


class PerfTrace:
    def __init__(
        self,
        categories: frozenset[str] | set[str],
        *,
        interval_s: float = 1.0,
        out=None,
    ) -> None:
        self.categories = frozenset(categories)
        self._interval_s = interval_s
        self._out = out or sys.stderr
        self._totals: dict[str, _Totals] = {}
        self._flushed_at = time.monotonic()

    @property
    def enabled(self) -> bool:
        return bool(self.categories)

    @classmethod
    def from_env(cls) -> PerfTrace:
        return cls(parse_categories(os.getenv(_TRACE_ENV, "")))

    def start(self, name: str) -> float | None:
        if name not in self.categories:
            return None
        return time.perf_counter()

    def stop(self, name: str, start: float | None, *, items: int = 1) -> None:
        if start is None:
            return
        totals = self._totals.setdefault(name, _Totals())
        totals.calls += 1
        totals.nodes += max(0, items)
        totals.elapsed_ms += (time.perf_counter() - start) * 1000.0
        now = time.monotonic()
        if now - self._flushed_at >= self._interval_s:
            self.flush(now)

    @contextmanager
    def span(self, name: str) -> Iterator[list[int]]:
        """Time a block; append to the yielded list to report node counts."""
        counts: list[int] = []
        start = self.start(name)
        try:
            yield counts
        finally:
            self.stop(name, start, items=sum(counts) if counts else 1)

    def flush(self, now: float | None = None) -> None:
        self._flushed_at = time.monotonic() if now is None else now
        if not self._totals:
            return
        lines = [self._totals[name].line(name) for name in sorted(self._totals)]
        self._totals.clear()
        self._out.write("\n".join(lines) + "\n")
        with suppress(Exception):
            self._out.flush()


PERF_TRACE = PerfTrace.from_env()
