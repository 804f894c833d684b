"""Tree projection engine: roots and lazy children in nested or flattened mode."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING

from .events import ChangeEmitter, Subscription
from .loader import LocaleLoader, LoaderNotReadyError
from .nodes import (
    LocaleNode,
    LocaleRecord,
    LocaleTree,
    Node,
    UnknownNodeError,
    node_type,
)
from .perf_trace import PERF_TRACE, PerfTrace
from .presentation import EMPTY_PLACEHOLDER, LocaleTreeItem

if TYPE_CHECKING:
    from .app_config import TreeViewConfig


def in_scope(keypath: str, scope: Iterable[str] | None) -> bool:
    """Keep *keypath* when the scope is unset or empty, or prefixes a scoped keypath.

    Plain string prefix: ancestors of a scoped key stay visible, siblings
    are pruned, and `"a"` also matches a scoped `"ab.c"`.
    """
    if not scope:
        return True
    return any(path.startswith(keypath) for path in scope)


def _normalize_scope(scope: Iterable[str] | None) -> frozenset[str] | None:
    if scope is None:
        return None
    if isinstance(scope, str):
        scope = [scope]
    normalized = frozenset(str(path) for path in scope)
    return normalized or None


class LocalesTreeProvider:
    """Project a `LocaleLoader`'s key tree into host-displayable items.

    Holds no copy of tree data: every `roots()`/`children()` call reads
    the loader again, so a "changed" event only has to tell the host to
    re-query from the roots down.
    """

    def __init__(
        self,
        loader: LocaleLoader,
        *,
        scope: Iterable[str] | None = None,
        flatten: bool = False,
        empty_placeholder: str = EMPTY_PLACEHOLDER,
        trace: PerfTrace | None = None,
    ) -> None:
        self._loader = loader
        self._scope = _normalize_scope(scope)
        self._flatten = bool(flatten)
        self._empty_placeholder = empty_placeholder
        self._trace = trace or PERF_TRACE
        self._changed = ChangeEmitter()
        self._loader_sub: Subscription | None = loader.subscribe(self.refresh)

    @classmethod
    def from_config(
        cls, loader: LocaleLoader, config: TreeViewConfig
    ) -> LocalesTreeProvider:
        return cls(
            loader,
            scope=config.scope,
            flatten=config.flatten,
            empty_placeholder=config.empty_placeholder,
        )

    # ------------------------------------------------------------ lifecycle
    def close(self) -> None:
        """Detach from the loader; later loader changes are ignored."""
        if self._loader_sub is not None:
            self._loader_sub.dispose()
            self._loader_sub = None

    def __enter__(self) -> LocalesTreeProvider:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    @property
    def loader(self) -> LocaleLoader:
        return self._loader

    # ------------------------------------------------------------- settings
    @property
    def flatten(self) -> bool:
        return self._flatten

    @flatten.setter
    def flatten(self, value: bool) -> None:
        value = bool(value)
        if value == self._flatten:
            return
        self._flatten = value
        self.refresh()

    @property
    def scope(self) -> frozenset[str] | None:
        return self._scope

    @scope.setter
    def scope(self, value: Iterable[str] | None) -> None:
        # applied on the next read; hosts refresh explicitly if they need to
        self._scope = _normalize_scope(value)

    # --------------------------------------------------------------- events
    def on_changed(self, listener: Callable[[], None]) -> Subscription:
        """Subscribe to "re-render everything" notifications."""
        return self._changed.subscribe(listener)

    def refresh(self) -> None:
        with self._trace.span("refresh") as counts:
            counts.append(len(self._changed))
            self._changed.fire()

    # ----------------------------------------------------------- projection
    def accepts(self, node: Node) -> bool:
        node_type(node)
        return in_scope(node.keypath, self._scope)

    def new_item(self, node: Node) -> LocaleTreeItem:
        return LocaleTreeItem(
            node,
            flatten=self._flatten,
            source_language=self._loader.source_language(),
            empty_placeholder=self._empty_placeholder,
        )

    def _items(self, nodes: Iterable[Node | None]) -> list[LocaleTreeItem]:
        return [
            self.new_item(node)
            for node in nodes
            if node is not None and self.accepts(node)
        ]

    def _root_nodes(self) -> Iterable[Node]:
        try:
            if self._flatten:
                index: Mapping[str, LocaleNode] | None = (
                    self._loader.flattened_index()
                )
                return list(index.values()) if index is not None else []
            root = self._loader.root_group()
            return list(root.children.values()) if root is not None else []
        except LoaderNotReadyError:
            return []

    def roots(self) -> list[LocaleTreeItem]:
        with self._trace.span("roots") as counts:
            items = self._items(self._root_nodes())
            counts.append(len(items))
        return items

    def children(
        self, item: LocaleTreeItem | Node | None = None
    ) -> list[LocaleTreeItem]:
        """Return the children of *item*, or the roots when *item* is `None`."""
        if item is None:
            return self.roots()
        node = item.node if isinstance(item, LocaleTreeItem) else item
        with self._trace.span("children") as counts:
            match node:
                case LocaleTree():
                    nodes: Iterable[Node | None] = list(node.children.values())
                case LocaleNode():
                    nodes = list(self._loader.shadow_records(node).values())
                case LocaleRecord():
                    nodes = []
                case _:
                    raise UnknownNodeError(node)
            items = self._items(nodes)
            counts.append(len(items))
        return items
