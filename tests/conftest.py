import os

import pytest

from localetree.core.locale_index import LocaleIndex
from localetree.core.perf_trace import PerfTrace

# Ensure Qt runs headless in CI/CLI environments without a display server.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture()
def index() -> LocaleIndex:
    """Two-locale index: `fr` misses one key and has an empty value."""
    idx = LocaleIndex(source_language="en")
    idx.set_locale(
        "en",
        {
            "greeting": "Hi",
            "menu": {"file": {"open": "Open", "close": "Close"}, "edit": "Edit"},
            "about": {"title": "About"},
        },
        filepath="locales/en.json",
    )
    idx.set_locale(
        "fr",
        {
            "greeting": "",
            "menu": {"file": {"open": "Ouvrir"}, "edit": "Modifier"},
        },
        filepath="locales/fr.json",
    )
    return idx


@pytest.fixture()
def quiet_trace() -> PerfTrace:
    return PerfTrace(set())
