"""LocaleTree – all public symbols are re-exported from .core."""

from importlib import metadata

from .core import (  # noqa: F401 – re-exports
    LocaleIndex,
    LocaleNode,
    LocaleRecord,
    LocalesTreeProvider,
    LocaleTree,
    LocaleTreeItem,
    present,
)

try:
    __version__ = metadata.version(__name__)
except metadata.PackageNotFoundError:  # editable install before first build
    __version__ = "0.0.0"
