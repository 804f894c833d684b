"""Interface the projection engine consumes from the locale loader."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Protocol, runtime_checkable

from .events import Subscription
from .nodes import LocaleNode, LocaleRecord, LocaleTree


class LoaderNotReadyError(RuntimeError):
    """Raised by a loader that has not produced a key tree yet."""


@runtime_checkable
class LocaleLoader(Protocol):
    """Owner of the key tree; the projection engine only reads from it.

    `root_group()` and `flattened_index()` return `None` (or raise
    `LoaderNotReadyError`) until the first load completes.
    """

    def root_group(self) -> LocaleTree | None: ...

    def flattened_index(self) -> Mapping[str, LocaleNode] | None: ...

    def shadow_records(
        self, node: LocaleNode
    ) -> Mapping[str, LocaleRecord | None]: ...

    def source_language(self) -> str: ...

    def subscribe(self, listener: Callable[[], None]) -> Subscription: ...
