"""
NiceGUI sample app demonstrating the locale engine inside a server-rendered host.

Every page load gets its own ``LocaleStore``: the remembered language lives in
NiceGUI's per-browser storage, language switches rewrite the address bar with
``history.replaceState`` and the labels re-render through a store listener.

Run with:
    poetry run python samples/nicegui_host/main.py
    Open http://localhost:8071/ (or /en/resources, /jp/services, ...)
"""

import json
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from nicegui import app, ui

# -- Bootstrap marketlocale inside NiceGUI ------------------------------------

PROJ_ROOT = Path(__file__).resolve().parent.parent.parent
sys.path.insert(0, str(PROJ_ROOT))

load_dotenv(PROJ_ROOT / '.env')

from marketlocale.config import settings  # noqa: E402
from marketlocale.context import LocaleContext  # noqa: E402
from marketlocale.store import LocaleStore  # noqa: E402
from marketlocale.translations import TranslationIndex  # noqa: E402
from marketlocale.urls import strip_language_prefix  # noqa: E402

INDEX = TranslationIndex.load(settings.get('LOCALES_DIR'))

NAV_LINKS = [
    ('nav.home', '/'),
    ('nav.allResources', '/resources'),
    ('nav.services', '/services'),
]


class BrowserStoragePreferences:
    """``PreferenceStore`` backed by NiceGUI's per-browser storage."""

    def get(self, key: str) -> str | None:
        return app.storage.browser.get(key)

    def set(self, key: str, value: str) -> None:
        app.storage.browser[key] = value


# -- Page ----------------------------------------------------------------------

@ui.page('/{path:path}')
async def page(path: str = '') -> None:
    current = {'path': '/' + path if path else '/'}

    def navigate(target: str, *, replace: bool) -> None:
        current['path'] = target
        method = 'replaceState' if replace else 'pushState'
        ui.run_javascript(f'history.{method}(null, "", {json.dumps(target)})')

    store = LocaleStore(
        preferences=BrowserStoragePreferences(),
        current_path=lambda: current['path'],
        navigate=navigate,
    )
    store.initialize()
    t = LocaleContext(INDEX, store)

    with ui.header().classes('items-center justify-between'):
        title = ui.label().style('font-size: 20px; font-weight: 700;')
        switcher = ui.select(
            {info.code.value: info.name for info in t.available_languages},
            value=t.current_language.value,
            on_change=lambda e: t.set_language(e.value),
        ).props('dense outlined dark')

    with ui.column().style('padding: 24px;'):
        links = ui.row()
        body = ui.column()

    def render(_language=None) -> None:
        title.text = t('home.heroTitle')
        switcher.value = t.current_language.value
        links.clear()
        with links:
            for key, href in NAV_LINKS:
                link = ui.link(t(key), t.format_url(href))
                if strip_language_prefix(current['path']) == href:
                    link.style('font-weight: 700;')
        body.clear()
        with body:
            ui.label(t('home.heroSubtitle'))
            ui.label(t('footer.copyright', year=2025)).style('color: #777;')
            ui.label(f'{t.language_info.currency} ({t.language_info.symbol})').style('color: #777;')

    store.subscribe(render)
    render()


ui.run(port=8071, title='marketlocale', show=False, reload=False,
       storage_secret=os.getenv('STORAGE_SECRET', 'marketlocale-sample'))
