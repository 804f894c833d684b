"""Lazy Qt item model exposing projected locale tree rows to a QTreeView."""

from __future__ import annotations

from PySide6.QtCore import QAbstractItemModel, QModelIndex, QPersistentModelIndex, Qt
from PySide6.QtGui import QIcon
from PySide6.QtWidgets import QApplication, QStyle

from localetree.core.perf_trace import PERF_TRACE
from localetree.core.presentation import ICON_MODULE, ICON_STRING, LocaleTreeItem
from localetree.core.projection import LocalesTreeProvider

DESCRIPTION_ROLE = int(Qt.UserRole) + 1
CONTEXT_VALUE_ROLE = int(Qt.UserRole) + 2
NODE_TYPE_ROLE = int(Qt.UserRole) + 3
KEYPATH_ROLE = int(Qt.UserRole) + 4

_THEME_ICONS = {
    ICON_MODULE: ("folder", QStyle.StandardPixmap.SP_DirIcon),
    ICON_STRING: ("text-x-generic", QStyle.StandardPixmap.SP_FileIcon),
}


class _TreeRow:
    """One materialized row; children are pulled from the provider on first use."""

    __slots__ = ("item", "parent", "row", "_children")

    def __init__(
        self, item: LocaleTreeItem | None, parent: _TreeRow | None, row: int
    ) -> None:
        self.item = item
        self.parent = parent
        self.row = row
        self._children: list[_TreeRow] | None = None

    @property
    def loaded(self) -> bool:
        return self._children is not None

    def children(self, provider: LocalesTreeProvider) -> list[_TreeRow]:
        if self._children is None:
            start = PERF_TRACE.start("fetch")
            items = provider.children(self.item)
            self._children = [
                _TreeRow(item, self, row) for row, item in enumerate(items)
            ]
            PERF_TRACE.stop("fetch", start, items=len(items))
        return self._children


class LocalesTreeModel(QAbstractItemModel):
    """Single-column Qt model over a `LocalesTreeProvider`, reset on every change."""

    def __init__(self, provider: LocalesTreeProvider, parent=None) -> None:
        super().__init__(parent)
        self._provider = provider
        self._root = _TreeRow(None, None, 0)
        self._icons: dict[str, QIcon] = {}
        self._subscription = provider.on_changed(self.reset)

    @property
    def provider(self) -> LocalesTreeProvider:
        return self._provider

    def close(self) -> None:
        self._subscription.dispose()

    def reset(self) -> None:
        """Drop every materialized row; the view re-queries from the roots."""
        start = PERF_TRACE.start("model_reset")
        self.beginResetModel()
        self._root = _TreeRow(None, None, 0)
        self.endResetModel()
        PERF_TRACE.stop("model_reset", start)

    # ---------------------------------------------------------------- helpers
    def _row_for(self, index: QModelIndex | QPersistentModelIndex) -> _TreeRow:
        if index.isValid():
            return index.internalPointer()
        return self._root

    def item_for_index(
        self, index: QModelIndex | QPersistentModelIndex
    ) -> LocaleTreeItem | None:
        if not index.isValid():
            return None
        return self._row_for(index).item

    def _icon(self, name: str | None) -> QIcon | None:
        if name is None:
            return None
        icon = self._icons.get(name)
        if icon is None:
            theme_name, pixmap = _THEME_ICONS[name]
            style = QApplication.style()
            fallback = style.standardIcon(pixmap) if style is not None else QIcon()
            icon = QIcon.fromTheme(theme_name, fallback)
            self._icons[name] = icon
        return icon

    # Qt mandatory overrides ----------------------------------------------------
    def index(
        self,
        row: int,
        column: int,
        parent: QModelIndex | QPersistentModelIndex = QModelIndex(),
    ) -> QModelIndex:
        if column != 0 or row < 0:
            return QModelIndex()
        children = self._row_for(parent).children(self._provider)
        if row >= len(children):
            return QModelIndex()
        return self.createIndex(row, column, children[row])

    def parent(self, index=QModelIndex()):  # type: ignore[override]
        if not index.isValid():
            return QModelIndex()
        parent_row = self._row_for(index).parent
        if parent_row is None or parent_row is self._root:
            return QModelIndex()
        return self.createIndex(parent_row.row, 0, parent_row)

    def rowCount(  # noqa: N802
        self,
        parent: QModelIndex | QPersistentModelIndex = QModelIndex(),
    ) -> int:
        if parent.isValid() and parent.column() > 0:
            return 0
        return len(self._row_for(parent).children(self._provider))

    def columnCount(  # noqa: N802
        self,
        parent: QModelIndex | QPersistentModelIndex = QModelIndex(),
    ) -> int:
        return 1

    def hasChildren(  # noqa: N802
        self,
        parent: QModelIndex | QPersistentModelIndex = QModelIndex(),
    ) -> bool:
        row = self._row_for(parent)
        if row.item is None:
            return bool(row.children(self._provider))
        # expander stays visible before the children are fetched
        return row.item.collapsible

    def data(self, index: QModelIndex, role: int = Qt.DisplayRole):  # noqa: N802
        item = self.item_for_index(index)
        if item is None:
            return None
        if role == Qt.DisplayRole:
            return item.label
        if role == Qt.ToolTipRole:
            return item.tooltip
        if role == Qt.DecorationRole:
            return self._icon(item.icon)
        if role == DESCRIPTION_ROLE:
            return item.description
        if role == CONTEXT_VALUE_ROLE:
            return item.context_value
        if role == NODE_TYPE_ROLE:
            return item.node.type
        if role == KEYPATH_ROLE:
            return item.keypath
        return None

    def flags(self, index: QModelIndex):  # noqa: N802
        if not index.isValid():
            return Qt.NoItemFlags
        flags = Qt.ItemIsEnabled | Qt.ItemIsSelectable
        item = self.item_for_index(index)
        if item is not None and not item.collapsible:
            flags |= Qt.ItemNeverHasChildren
        return flags
