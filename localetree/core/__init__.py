"""Qt-free locale tree core – re-export runtime API."""

from __future__ import annotations

from .events import ChangeEmitter, Subscription
from .loader import LoaderNotReadyError, LocaleLoader
from .locale_index import LocaleIndex
from .nodes import (
    LocaleNode,
    LocaleRecord,
    LocaleTree,
    Node,
    UnknownNodeError,
    node_type,
)
from .presentation import ItemPresentation, LocaleTreeItem, present
from .projection import LocalesTreeProvider, in_scope

__all__ = [
    "ChangeEmitter",
    "Subscription",
    "LoaderNotReadyError",
    "LocaleLoader",
    "LocaleIndex",
    "LocaleNode",
    "LocaleRecord",
    "LocaleTree",
    "Node",
    "UnknownNodeError",
    "node_type",
    "ItemPresentation",
    "LocaleTreeItem",
    "present",
    "LocalesTreeProvider",
    "in_scope",
]
