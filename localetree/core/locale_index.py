"""In-memory locale loader that maintains the key tree from per-locale mappings."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .events import ChangeEmitter, Subscription
from .nodes import (
    LocaleNode,
    LocaleRecord,
    LocaleTree,
    join_keypath,
    keypath_segments,
)

if TYPE_CHECKING:
    from .app_config import TreeViewConfig


@dataclass(frozen=True, slots=True)
class _LocaleData:
    entries: dict[str, str]
    filepath: str | None


def flatten_entries(entries: Mapping[str, object], prefix: str = "") -> dict[str, str]:
    """Flatten nested message objects into `{dotted.keypath: text}`."""
    out: dict[str, str] = {}
    for key, value in entries.items():
        keypath = join_keypath(prefix, str(key))
        if isinstance(value, Mapping):
            out.update(flatten_entries(value, keypath))
            continue
        out[keypath] = "" if value is None else str(value)
    return out


class LocaleIndex:
    """Reference `LocaleLoader` fed with message mappings instead of files."""

    def __init__(self, source_language: str = "en") -> None:
        self._source_language = source_language
        self._locales: dict[str, _LocaleData] = {}
        self._root: LocaleTree | None = None
        self._flat: dict[str, LocaleNode] | None = None
        self._changed = ChangeEmitter()

    @classmethod
    def from_config(cls, config: TreeViewConfig) -> LocaleIndex:
        return cls(source_language=config.source_language)

    # ----------------------------------------------------------- loader API
    @property
    def loaded(self) -> bool:
        return self._root is not None

    def root_group(self) -> LocaleTree | None:
        return self._root

    def flattened_index(self) -> dict[str, LocaleNode] | None:
        return self._flat

    def source_language(self) -> str:
        return self._source_language

    def subscribe(self, listener: Callable[[], None]) -> Subscription:
        return self._changed.subscribe(listener)

    def shadow_records(self, node: LocaleNode) -> dict[str, LocaleRecord]:
        """Return one record per known locale, synthesizing the missing ones."""
        records: dict[str, LocaleRecord] = {}
        for locale in self.locales():
            data = self._locales[locale]
            if node.keypath in data.entries:
                records[locale] = LocaleRecord(
                    keypath=node.keypath,
                    locale=locale,
                    value=data.entries[node.keypath],
                    filepath=data.filepath,
                )
            else:
                records[locale] = LocaleRecord(keypath=node.keypath, locale=locale)
        return records

    # ------------------------------------------------------------ mutation
    def set_source_language(self, locale: str) -> None:
        if locale == self._source_language:
            return
        self._source_language = locale
        if self.loaded:
            self._rebuild()

    def set_locale(
        self,
        locale: str,
        entries: Mapping[str, object],
        *,
        filepath: str | None = None,
    ) -> None:
        self._locales[locale] = _LocaleData(flatten_entries(entries), filepath)
        self._rebuild()

    def remove_locale(self, locale: str) -> None:
        if self._locales.pop(locale, None) is None:
            return
        self._rebuild()

    def locales(self) -> list[str]:
        return sorted(self._locales)

    def value(self, keypath: str, locale: str) -> str | None:
        data = self._locales.get(locale)
        if data is None:
            return None
        return data.entries.get(keypath)

    # ------------------------------------------------------------- helpers
    def _all_keypaths(self) -> list[str]:
        seen: dict[str, None] = {}
        source = self._locales.get(self._source_language)
        if source is not None:
            seen.update(dict.fromkeys(source.entries))
        for locale in self.locales():
            seen.update(dict.fromkeys(self._locales[locale].entries))
        return list(seen)

    def _rebuild(self) -> None:
        source = self._locales.get(self._source_language)
        source_entries = source.entries if source is not None else {}
        root = LocaleTree()
        flat: dict[str, LocaleNode] = {}
        for keypath in self._all_keypaths():
            segments = keypath_segments(keypath)
            if not segments:
                continue
            node = LocaleNode(
                keypath=keypath,
                keyname=segments[-1],
                value=source_entries.get(keypath, ""),
                shadow=keypath not in source_entries,
            )
            flat[keypath] = node
            _insert(root, segments, node)
        self._root = root
        self._flat = flat
        self._changed.fire()


def _insert(root: LocaleTree, segments: list[str], node: LocaleNode) -> None:
    parent = root
    for segment in segments[:-1]:
        child = parent.children.get(segment)
        if not isinstance(child, LocaleTree):
            # a group displaces a key occupying the same segment
            child = LocaleTree(keypath=parent.child_keypath(segment))
            parent.children[segment] = child
        parent = child
    leaf = segments[-1]
    if isinstance(parent.children.get(leaf), LocaleTree):
        return
    parent.children[leaf] = node
