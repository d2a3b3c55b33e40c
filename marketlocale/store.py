"""Per-session active-language state.

The store owns one value, the active ``Language``.  Everything it talks to is
handed in by the host:

    preferences   get/set key-value store for the remembered choice
    current_path  callable returning the path the visitor is on
    navigate      callable ``navigate(path, replace=True)``

Initialisation order: path prefix → remembered preference → default.
"""

import logging
from collections.abc import Callable
from typing import Protocol

from marketlocale.config import settings
from marketlocale.languages import DEFAULT_LANGUAGE, Language, parse_language, require_language
from marketlocale.urls import decode_language_from_path, encode

logger = logging.getLogger("marketlocale.store")


class PreferenceStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class Navigator(Protocol):
    def __call__(self, path: str, *, replace: bool) -> None: ...


class MemoryPreferenceStore:
    """Dict-backed ``PreferenceStore``."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


def language_for_path(path: str) -> Language:
    return decode_language_from_path(path) or DEFAULT_LANGUAGE


def initial_language(path: str, preference: str | None) -> Language:
    from_path = decode_language_from_path(path)
    if from_path is not None:
        return from_path
    remembered = parse_language(preference) if preference else None
    if remembered is not None and remembered != DEFAULT_LANGUAGE:
        return remembered
    return DEFAULT_LANGUAGE


def plan_language_change(current_path: str, current: Language, new: Language) -> str | None:
    """Return the path to navigate to, or None when the language does not change."""
    if new == current:
        return None
    return encode(current_path, new)


class LocaleStore:
    def __init__(
        self,
        preferences: PreferenceStore,
        current_path: Callable[[], str],
        navigate: Navigator,
        preference_key: str | None = None,
    ) -> None:
        self._preferences = preferences
        self._current_path = current_path
        self._navigate = navigate
        self._preference_key = preference_key or settings.get("PREFERENCE_KEY")
        self._language: Language = DEFAULT_LANGUAGE
        self._initialized = False
        self._listeners: list[Callable[[Language], None]] = []

    @property
    def language(self) -> Language:
        return self._language

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def preference_key(self) -> str:
        return self._preference_key

    def initialize(self) -> Language:
        if self._initialized:
            return self._language
        path = self._current_path()
        try:
            preference = self._preferences.get(self._preference_key)
        except Exception:
            logger.warning("Could not read language preference", exc_info=True)
            preference = None
        self._initialized = True
        self._adopt(initial_language(path, preference))
        logger.debug("Initialized language %s from path %r, preference %r", self._language, path, preference)
        return self._language

    def handle_navigation(self, path: str | None = None) -> Language:
        """Re-derive the language after navigation this store did not cause."""
        if path is None:
            path = self._current_path()
        self._initialized = True
        self._adopt(language_for_path(path))
        return self._language

    def set_language(self, language: Language | str) -> None:
        new = require_language(language)
        target = plan_language_change(self._current_path(), self._language, new)
        if target is None:
            return

        self._adopt(new)
        self._navigate(target, replace=True)
        try:
            self._preferences.set(self._preference_key, new.value)
        except Exception:
            logger.warning("Could not persist language preference %s", new, exc_info=True)

    def subscribe(self, listener: Callable[[Language], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _adopt(self, language: Language) -> None:
        if language == self._language:
            return
        previous, self._language = self._language, language
        logger.info("Language changed %s -> %s", previous, language)
        for listener in list(self._listeners):
            try:
                listener(language)
            except Exception:
                logger.exception("Language listener %r failed", listener)
