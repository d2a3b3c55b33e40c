"""Core handler functions, free of FastAPI request types. Used by both REST routes and WebSocket."""

from typing import Any

from marketlocale.languages import DEFAULT_LANGUAGE, LANGUAGE_INFO, Language, country_for, require_language
from marketlocale.messages import get_message, localized_error
from marketlocale.resolver import resolve
from marketlocale.session import Session
from marketlocale.translations import TranslationIndex
from marketlocale.urls import encode, format_url


def _language_or(code: Any, fallback: Language) -> Language:
    if code in (None, ""):
        return fallback
    return require_language(code)


async def handle_languages() -> dict[str, Any]:
    languages = []
    for language, info in LANGUAGE_INFO.items():
        languages.append({
            "code": language.value,
            "name": info.name,
            "country": country_for(language),
            "currency": info.currency,
            "symbol": info.symbol,
            "default": language == DEFAULT_LANGUAGE,
            "prefix": encode("/", language) if language != DEFAULT_LANGUAGE else "",
        })
    return {"default": DEFAULT_LANGUAGE.value, "languages": languages}


async def handle_translation_tree(index: TranslationIndex, code: str, reply_in: Language) -> dict[str, Any]:
    language = _language_or(code, reply_in)
    tree = index.export(language)
    if tree is None:
        raise localized_error(reply_in, "locale.translationsNotFound", 404)
    return {"language": language.value, "translations": tree}


async def handle_translate(
    index: TranslationIndex,
    key: str,
    lang: str | None,
    reply_in: Language,
) -> dict[str, Any]:
    if not key:
        raise localized_error(reply_in, "locale.keyRequired", 400)
    language = _language_or(lang, reply_in)
    return {"key": key, "language": language.value, "text": resolve(index, language, key)}


async def handle_format_url(path: str, lang: str | None, reply_in: Language) -> dict[str, Any]:
    language = _language_or(lang, reply_in)
    return {"path": path, "language": language.value, "url": format_url(path, language)}


async def handle_message(path: str, lang: str | None, reply_in: Language) -> dict[str, Any]:
    language = _language_or(lang, reply_in)
    message = get_message(language, path)
    if not message:
        raise localized_error(language, "error.notFound", 404)
    return {"path": path, "language": language.value, "message": message}


# --- Session-bound handlers ---

def _locale(session: Session):
    if session.locale is None:
        raise localized_error(DEFAULT_LANGUAGE, "locale.sessionNotInitialized", 409)
    return session.locale


def _state(session: Session, drain: bool = True) -> dict[str, Any]:
    locale = _locale(session)
    # Only replies that reach the browser may consume queued navigations.
    pending = session.take_navigation() if drain else list(session.pending_navigation)
    navigation = pending[-1] if pending else None
    return {
        "language": locale.current_language.value,
        "path": session.path,
        "preference": session.preferences.get(locale.store.preference_key),
        "navigate": {"path": navigation.path, "replace": navigation.replace} if navigation else None,
    }


async def handle_session_init(session: Session, path: str, preference: str | None = None) -> dict[str, Any]:
    locale = _locale(session)
    session.path = path or "/"
    if locale.store.initialized:
        # A reconnecting page: its path is all that can have changed.
        locale.store.handle_navigation(session.path)
        return _state(session)
    if preference:
        session.preferences.set(locale.store.preference_key, preference)
    locale.store.initialize()
    return _state(session)


async def handle_session_navigated(session: Session, path: str) -> dict[str, Any]:
    locale = _locale(session)
    session.path = path or "/"
    locale.store.handle_navigation(session.path)
    return _state(session)


async def handle_session_set_language(session: Session, language: str) -> dict[str, Any]:
    locale = _locale(session)
    if not locale.store.initialized:
        locale.store.initialize()
    locale.set_language(language)
    return _state(session)


async def handle_session_translate(session: Session, key: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
    locale = _locale(session)
    if not key:
        raise localized_error(locale.current_language, "locale.keyRequired", 400)
    text = locale.translate(key, **(params or {}))
    return {"key": key, "language": locale.current_language.value, "text": text}


async def handle_session_format_url(session: Session, path: str) -> dict[str, Any]:
    locale = _locale(session)
    return {"path": path, "language": locale.current_language.value, "url": locale.format_url(path)}


async def handle_session_state(session: Session, drain: bool = True) -> dict[str, Any]:
    return _state(session, drain)
