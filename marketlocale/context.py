"""What every screen is given: the active language plus ``translate``/``format_url``.

Usage::

    from marketlocale.context import LocaleContext

    t = LocaleContext(index, store)
    t.translate('nav.home')                 # "홈"
    t('footer.copyright', year=2025)        # "© 2025 ..."
    t.format_url('/resources')              # "/en/resources" when English is active
"""

from typing import Any

from marketlocale import urls
from marketlocale.languages import LANGUAGE_INFO, Language, LanguageInfo
from marketlocale.resolver import resolve
from marketlocale.store import LocaleStore
from marketlocale.translations import TranslationIndex


class LocaleContext:
    def __init__(self, index: TranslationIndex, store: LocaleStore) -> None:
        self._index = index
        self._store = store

    @property
    def index(self) -> TranslationIndex:
        return self._index

    @property
    def store(self) -> LocaleStore:
        return self._store

    @property
    def current_language(self) -> Language:
        return self._store.language

    @property
    def language_info(self) -> LanguageInfo:
        return LANGUAGE_INFO[self.current_language]

    @property
    def available_languages(self) -> list[LanguageInfo]:
        return list(LANGUAGE_INFO.values())

    def translate(self, path: str, **kwargs: Any) -> str:
        text = resolve(self._index, self.current_language, path)
        if not kwargs:
            return text
        try:
            return text.format(**kwargs)
        except (KeyError, IndexError, ValueError):
            return text

    __call__ = translate

    def format_url(self, path: str) -> str:
        return urls.format_url(path, self.current_language)

    def set_language(self, language: Language | str) -> None:
        self._store.set_language(language)
