import asyncio
from contextlib import contextmanager

import pytest
from starlette.testclient import TestClient

from marketlocale.context import LocaleContext
from marketlocale.main import app
from marketlocale.session import registry
from marketlocale.store import LocaleStore, MemoryPreferenceStore
from marketlocale.translations import TranslationIndex

PREFERENCE_KEY = "preferred_language"

SAMPLE_TRANSLATIONS = {
    "ko": {
        "loading": "로딩 중...",
        "nav": {"home": "홈", "services": "서비스"},
        "features": {"aiAssembly": {"title": "AI 조립 비서"}},
        "footer": {"copyright": "© {year} 웹마켓"},
    },
    "en": {
        "loading": "Loading...",
        "nav": {"services": "Services"},
        "features": {"aiAssembly": {"title": "AI assembly assistant"}},
        "footer": {"copyright": "© {year} Webmarket"},
    },
    "jp": {
        "nav": {"home": "ホーム"},
    },
}

_test_client = TestClient(app)


class FakeBrowser:
    """Stands in for the router: a current path plus a log of navigate calls."""

    def __init__(self, path: str = "/") -> None:
        self.path = path
        self.calls: list[tuple[str, bool]] = []

    def current_path(self) -> str:
        return self.path

    def navigate(self, path: str, *, replace: bool) -> None:
        self.calls.append((path, replace))
        self.path = path


@pytest.fixture
def index():
    return TranslationIndex.from_mapping(SAMPLE_TRANSLATIONS)


@pytest.fixture
def browser():
    return FakeBrowser()


@pytest.fixture
def preferences():
    return MemoryPreferenceStore()


@pytest.fixture
def store(browser, preferences):
    return LocaleStore(
        preferences=preferences,
        current_path=browser.current_path,
        navigate=browser.navigate,
        preference_key=PREFERENCE_KEY,
    )


@pytest.fixture
def locale(index, store):
    return LocaleContext(index, store)


@contextmanager
def ws_connect(client=None):
    """Connect to /ws with a pre-created session token. Consumes the auth message."""
    c = client or _test_client
    loop = asyncio.new_event_loop()
    token = loop.run_until_complete(registry.create_session()).token
    loop.close()
    with c.websocket_connect(f"/ws?token={token}") as ws:
        ws.receive_json()  # consume auth message
        yield ws
