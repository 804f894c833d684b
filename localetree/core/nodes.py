"""Locale tree node variants: groups, keys and per-locale records."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Literal, TypeAlias

NodeType = Literal["tree", "node", "record"]

KEYPATH_SEPARATOR = "."


class UnknownNodeError(TypeError):
    """Raised when an object that is not a locale tree node reaches a consumer."""

    def __init__(self, node: object) -> None:
        super().__init__(f"not a locale tree node: {node!r}")
        self.node = node


def keypath_segments(keypath: str) -> list[str]:
    """Split a dotted keypath; the root keypath `""` has no segments."""
    if not keypath:
        return []
    return keypath.split(KEYPATH_SEPARATOR)


def join_keypath(prefix: str, segment: str) -> str:
    """Append *segment* to *prefix*; only the root prefix `""` is dropped."""
    return f"{prefix}{KEYPATH_SEPARATOR}{segment}" if prefix else segment


def _last_segment(keypath: str) -> str:
    return keypath.rsplit(KEYPATH_SEPARATOR, 1)[-1]


@dataclass(eq=False, slots=True)
class LocaleTree:
    """Grouping level of the key hierarchy (namespace or nested object)."""

    keypath: str = ""
    children: dict[str, LocaleTree | LocaleNode] = field(default_factory=dict)
    shadow: bool = False

    @property
    def type(self) -> Literal["tree"]:
        return "tree"

    @property
    def keyname(self) -> str:
        return _last_segment(self.keypath)

    def child_keypath(self, segment: str) -> str:
        return join_keypath(self.keypath, segment)


@dataclass(frozen=True, slots=True)
class LocaleNode:
    """One localization key, independent of any locale."""

    keypath: str
    keyname: str
    value: str = ""
    shadow: bool = False

    @property
    def type(self) -> Literal["node"]:
        return "node"


@dataclass(frozen=True, slots=True)
class LocaleRecord:
    """One locale's realization of a key; `filepath=None` marks a shadow record."""

    keypath: str
    locale: str
    value: str = ""
    filepath: str | None = None

    @property
    def type(self) -> Literal["record"]:
        return "record"

    @property
    def keyname(self) -> str:
        return _last_segment(self.keypath)

    @property
    def shadow(self) -> bool:
        return not self.filepath


Node: TypeAlias = LocaleTree | LocaleNode | LocaleRecord


def node_type(node: object) -> NodeType:
    """Return the discriminant of *node* or fail loudly for foreign objects."""
    match node:
        case LocaleTree():
            return "tree"
        case LocaleNode():
            return "node"
        case LocaleRecord():
            return "record"
        case _:
            raise UnknownNodeError(node)


def iter_keys(tree: LocaleTree) -> Iterable[LocaleNode]:
    """Yield every key reachable from *tree*, depth first."""
    for child in tree.children.values():
        match child:
            case LocaleTree():
                yield from iter_keys(child)
            case LocaleNode():
                yield child
            case _:
                raise UnknownNodeError(child)
