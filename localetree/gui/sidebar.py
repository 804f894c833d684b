"""Locales sidebar: flatten toggle plus the lazily populated key tree."""

from __future__ import annotations

from PySide6.QtWidgets import QToolButton, QTreeView, QVBoxLayout, QWidget

from localetree.core.presentation import LocaleTreeItem
from localetree.core.projection import LocalesTreeProvider

from .tree_delegate import LocaleTreeDelegate
from .tree_model import LocalesTreeModel


class LocalesSidebar(QWidget):
    def __init__(self, provider: LocalesTreeProvider, parent=None) -> None:
        super().__init__(parent)
        self._provider = provider
        self.model = LocalesTreeModel(provider, self)

        self.flatten_btn = QToolButton(self)
        self.flatten_btn.setText("Flatten")
        self.flatten_btn.setCheckable(True)
        self.flatten_btn.setChecked(provider.flatten)
        self.flatten_btn.toggled.connect(self._on_flatten_toggled)
        self._sync_flatten_tooltip()

        self.tree = QTreeView(self)
        self.tree.setHeaderHidden(True)
        self.tree.setUniformRowHeights(True)
        self.tree.setItemDelegate(LocaleTreeDelegate(self.tree))
        self.tree.setModel(self.model)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.flatten_btn)
        layout.addWidget(self.tree)

    @property
    def provider(self) -> LocalesTreeProvider:
        return self._provider

    def current_item(self) -> LocaleTreeItem | None:
        return self.model.item_for_index(self.tree.currentIndex())

    def _sync_flatten_tooltip(self) -> None:
        self.flatten_btn.setToolTip(
            "Show keys nested by path segment."
            if self._provider.flatten
            else "Show every key by its full keypath."
        )

    def _on_flatten_toggled(self, checked: bool) -> None:
        # the provider fires a refresh, which resets the model
        self._provider.flatten = checked
        self._sync_flatten_tooltip()

    def closeEvent(self, event) -> None:  # noqa: N802
        self.model.close()
        super().closeEvent(event)
