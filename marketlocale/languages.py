"""Supported languages and their display metadata."""

from dataclasses import dataclass
from enum import Enum


class Language(str, Enum):
    KO = "ko"
    EN = "en"
    JP = "jp"

    def __str__(self) -> str:
        return self.value


DEFAULT_LANGUAGE = Language.KO

# Every language except the default carries a path prefix.
PREFIXED_LANGUAGES: tuple[Language, ...] = tuple(lang for lang in Language if lang is not DEFAULT_LANGUAGE)


class UnsupportedLanguage(ValueError):
    def __init__(self, code: object):
        self.code = code
        super().__init__(f"Unsupported language: {code!r}")


@dataclass(frozen=True)
class LanguageInfo:
    code: Language
    name: str
    country: str
    currency: str
    symbol: str


LANGUAGE_INFO: dict[Language, LanguageInfo] = {
    Language.KO: LanguageInfo(Language.KO, "한국어", "KR", "KRW", "₩"),
    Language.EN: LanguageInfo(Language.EN, "English", "US", "USD", "$"),
    Language.JP: LanguageInfo(Language.JP, "日本語", "JP", "JPY", "¥"),
}

# Browser and header tags that name one of our languages under another code.
ALIASES: dict[str, Language] = {
    "ja": Language.JP,
}


def parse_language(code: object) -> Language | None:
    """Map ``code`` (``'en'``, ``'en-US'``, ``'ja_JP'``, a ``Language``) to a Language.

    Returns ``None`` for anything outside the supported set.
    """
    if isinstance(code, Language):
        return code
    if not isinstance(code, str):
        return None
    base = code.strip().lower().replace("_", "-").split("-")[0]
    if not base:
        return None
    if base in ALIASES:
        return ALIASES[base]
    try:
        return Language(base)
    except ValueError:
        return None


def require_language(code: object) -> Language:
    language = parse_language(code)
    if language is None:
        raise UnsupportedLanguage(code)
    return language


def country_for(language: Language) -> str:
    return LANGUAGE_INFO[language].country
