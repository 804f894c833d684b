"""Test module for the locale tree projection engine."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from localetree.core.app_config import TreeViewConfig
from localetree.core.events import ChangeEmitter, Subscription
from localetree.core.loader import LoaderNotReadyError
from localetree.core.locale_index import LocaleIndex
from localetree.core.nodes import (
    LocaleNode,
    LocaleRecord,
    LocaleTree,
    UnknownNodeError,
)
from localetree.core.projection import LocalesTreeProvider, in_scope


class _StubLoader:
    """Loader double with hand-built tree data and a raise switch."""

    def __init__(
        self,
        root: LocaleTree | None = None,
        flat: dict[str, LocaleNode] | None = None,
        records: dict[str, LocaleRecord | None] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.root = root
        self.flat = flat
        self.records = records or {}
        self.error = error
        self.changed = ChangeEmitter()

    def root_group(self) -> LocaleTree | None:
        if self.error is not None:
            raise self.error
        return self.root

    def flattened_index(self) -> dict[str, LocaleNode] | None:
        if self.error is not None:
            raise self.error
        return self.flat

    def shadow_records(self, node: LocaleNode) -> dict[str, LocaleRecord | None]:
        return self.records

    def source_language(self) -> str:
        return "en"

    def subscribe(self, listener: Callable[[], None]) -> Subscription:
        return self.changed.subscribe(listener)


def _labels(items) -> list[str]:
    return [item.label for item in items]


@pytest.mark.parametrize(
    ("keypath", "expected"),
    [
        ("", True),
        ("a", True),
        ("a.b", True),
        ("a.b.c", True),
        ("a.x", False),
        ("a.b.d", False),
        ("a.b.c.d", False),
    ],
)
def test_in_scope_keeps_ancestor_chain_of_scoped_key(
    keypath: str, expected: bool
) -> None:
    """Verify the scope predicate keeps ancestors-or-self of scoped keys."""
    assert in_scope(keypath, {"a.b.c"}) is expected


def test_in_scope_without_scope_or_with_empty_scope_keeps_everything() -> None:
    """Verify unset and empty scopes pass every node."""
    assert in_scope("anything", None) is True
    assert in_scope("anything", frozenset()) is True


def test_in_scope_uses_literal_string_prefix() -> None:
    """Verify prefix test is not segment-boundary aware."""
    assert in_scope("a", {"ab.c"}) is True
    assert in_scope("ab", {"a.b"}) is False


def test_uninitialized_loader_yields_empty_roots_in_both_modes(
    quiet_trace,
) -> None:
    """Verify a loader without data renders an empty tree."""
    provider = LocalesTreeProvider(LocaleIndex(), trace=quiet_trace)
    assert provider.roots() == []
    provider.flatten = True
    assert provider.roots() == []


def test_not_ready_error_is_normalized_to_empty_roots(quiet_trace) -> None:
    """Verify LoaderNotReadyError is treated as uninitialized."""
    loader = _StubLoader(error=LoaderNotReadyError("loading"))
    provider = LocalesTreeProvider(loader, trace=quiet_trace)
    assert provider.roots() == []
    assert provider.children() == []


def test_other_loader_errors_propagate(quiet_trace) -> None:
    """Verify loader failures other than not-ready reach the host."""
    loader = _StubLoader(error=KeyError("broken"))
    provider = LocalesTreeProvider(loader, trace=quiet_trace)
    with pytest.raises(KeyError):
        provider.roots()


def test_nested_roots_are_root_group_children(index, quiet_trace) -> None:
    """Verify nested mode lists the immediate children of the root group."""
    provider = LocalesTreeProvider(index, trace=quiet_trace)
    roots = provider.roots()
    assert _labels(roots) == ["greeting", "menu", "about"]
    assert [item.node.type for item in roots] == ["node", "tree", "tree"]
    assert provider.children() == roots


def test_flatten_roots_are_flattened_index_values(index, quiet_trace) -> None:
    """Verify flatten mode lists every key labeled by full keypath."""
    provider = LocalesTreeProvider(index, flatten=True, trace=quiet_trace)
    roots = provider.roots()
    flat = index.flattened_index()
    assert [item.node for item in roots] == list(flat.values())
    assert _labels(roots) == list(flat)
    assert all(item.flatten for item in roots)


def test_group_children_and_key_records(index, quiet_trace) -> None:
    """Verify groups expand to stored children and keys to locale records."""
    provider = LocalesTreeProvider(index, trace=quiet_trace)
    menu = next(item for item in provider.roots() if item.label == "menu")

    menu_children = provider.children(menu)
    assert sorted(_labels(menu_children)) == ["edit", "file"]

    edit = next(item for item in menu_children if item.label == "edit")
    records = provider.children(edit)
    assert _labels(records) == ["en", "fr"]
    assert [item.description for item in records] == ["Edit", "Modifier"]
    assert provider.children(records[0]) == []


def test_children_accepts_bare_nodes(index, quiet_trace) -> None:
    """Verify children can be requested with a node instead of an item."""
    provider = LocalesTreeProvider(index, trace=quiet_trace)
    root = index.root_group()
    about = root.children["about"]
    assert _labels(provider.children(about)) == ["title"]


def test_missing_shadow_entries_are_omitted(quiet_trace) -> None:
    """Verify `None` entries from shadow resolution are skipped."""
    key = LocaleNode("a", "a", "A")
    loader = _StubLoader(
        root=LocaleTree("", {"a": key}),
        records={"en": LocaleRecord("a", "en", "A", "en.json"), "fr": None},
    )
    provider = LocalesTreeProvider(loader, trace=quiet_trace)
    assert _labels(provider.children(key)) == ["en"]


def test_children_of_foreign_object_fails_loudly(index, quiet_trace) -> None:
    """Verify malformed nodes raise instead of rendering."""
    provider = LocalesTreeProvider(index, trace=quiet_trace)
    with pytest.raises(TypeError):
        provider.children(object())  # type: ignore[arg-type]


def test_scope_prunes_siblings_at_every_level(index, quiet_trace) -> None:
    """Verify scope keeps the ancestor chain and drops unrelated nodes."""
    provider = LocalesTreeProvider(
        index, scope=["menu.file.open"], trace=quiet_trace
    )
    roots = provider.roots()
    assert _labels(roots) == ["menu"]
    (file_group,) = provider.children(roots[0])
    assert file_group.label == "file"
    (open_key,) = provider.children(file_group)
    assert open_key.keypath == "menu.file.open"
    assert _labels(provider.children(open_key)) == ["en", "fr"]

    provider.flatten = True
    assert _labels(provider.roots()) == ["menu.file.open"]


def test_scope_setter_normalizes_and_does_not_refresh(index, quiet_trace) -> None:
    """Verify scope changes apply on read without firing a refresh."""
    provider = LocalesTreeProvider(index, trace=quiet_trace)
    calls: list[int] = []
    provider.on_changed(lambda: calls.append(1))

    provider.scope = "about.title"
    assert provider.scope == frozenset({"about.title"})
    assert _labels(provider.roots()) == ["about"]

    provider.scope = []
    assert provider.scope is None
    assert len(provider.roots()) == 3
    assert calls == []


def test_flatten_setter_refreshes_only_on_change(index, quiet_trace) -> None:
    """Verify toggling flatten fires exactly one change per real toggle."""
    provider = LocalesTreeProvider(index, trace=quiet_trace)
    calls: list[int] = []
    provider.on_changed(lambda: calls.append(1))

    provider.flatten = False
    provider.flatten = True
    provider.flatten = True
    provider.flatten = False

    assert calls == [1, 1]


def test_loader_change_propagates_until_closed(index, quiet_trace) -> None:
    """Verify loader events re-fire to the host until the provider closes."""
    provider = LocalesTreeProvider(index, trace=quiet_trace)
    calls: list[int] = []
    provider.on_changed(lambda: calls.append(1))

    index.set_locale("de", {"greeting": "Hallo"}, filepath="de.json")
    assert calls == [1]

    with provider:
        pass
    provider.close()
    index.remove_locale("de")
    assert calls == [1]


def test_noop_change_rerenders_equivalent_attributes(index, quiet_trace) -> None:
    """Verify a refresh without data changes reproduces the same rows."""
    provider = LocalesTreeProvider(index, trace=quiet_trace)

    def snapshot():
        rows = []
        for item in provider.roots():
            rows.append(item.presentation())
            rows.extend(child.presentation() for child in provider.children(item))
        return rows

    before = snapshot()
    provider.refresh()
    assert snapshot() == before


def test_provider_reads_latest_loader_state(index, quiet_trace) -> None:
    """Verify no derived shape is cached between reads."""
    provider = LocalesTreeProvider(index, trace=quiet_trace)
    greeting = next(item for item in provider.roots() if item.label == "greeting")
    assert _labels(provider.children(greeting)) == ["en", "fr"]

    index.set_locale("de", {"greeting": "Hallo"}, filepath="de.json")
    assert _labels(provider.children(greeting)) == ["de", "en", "fr"]


def test_from_config_applies_scope_flatten_and_placeholder(index) -> None:
    """Verify provider construction from tree view config."""
    cfg = TreeViewConfig(
        flatten=True, scope=("greeting",), empty_placeholder="<none>"
    )
    provider = LocalesTreeProvider.from_config(index, cfg)
    (greeting,) = provider.roots()
    assert greeting.label == "greeting"
    fr = provider.children(greeting)[1]
    assert fr.description == "<none>"


def test_foreign_object_in_loader_children_raises_unknown_node(quiet_trace) -> None:
    """Verify malformed loader output fails with the typed node error."""
    foreign = {"x": object()}
    loader = _StubLoader(root=LocaleTree("", foreign))  # type: ignore[arg-type]
    provider = LocalesTreeProvider(loader, scope=["x"], trace=quiet_trace)
    with pytest.raises(UnknownNodeError):
        provider.roots()
    provider.scope = None
    with pytest.raises(UnknownNodeError):
        provider.roots()
