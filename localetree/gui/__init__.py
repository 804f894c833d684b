from __future__ import annotations

import sys
from typing import cast

from PySide6.QtWidgets import QApplication

from localetree.core import app_config
from localetree.core.app_config import TreeViewConfig
from localetree.core.loader import LocaleLoader
from localetree.core.projection import LocalesTreeProvider

from .sidebar import LocalesSidebar
from .tree_model import LocalesTreeModel

_APP: QApplication | None = None


def get_app() -> QApplication:
    global _APP
    if _APP is None:
        _APP = cast(QApplication, QApplication.instance()) or QApplication(sys.argv)
    return _APP


def launch(loader: LocaleLoader, *, config: TreeViewConfig | None = None) -> int:
    """Show the locales sidebar over *loader* and run the Qt event loop."""
    app = get_app()
    cfg = config or app_config.load()
    with LocalesTreeProvider.from_config(loader, cfg) as provider:
        sidebar = LocalesSidebar(provider)
        sidebar.setWindowTitle("Locales")
        sidebar.show()
        return app.exec()


__all__ = ["LocalesSidebar", "LocalesTreeModel", "get_app", "launch"]
