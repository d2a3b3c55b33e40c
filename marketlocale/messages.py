"""Localized server response messages.

Unlike the screen tables, every message keeps its translations side by side::

    MESSAGES['error']['notFound'] == {'ko': ..., 'en': ..., 'jp': ...}

A language without its own text gets the default language's text.
"""

import logging
from typing import Any

from fastapi import HTTPException

from marketlocale.languages import DEFAULT_LANGUAGE, Language

logger = logging.getLogger("marketlocale.messages")

MESSAGES: dict[str, dict[str, dict[str, str]]] = {
    "error": {
        "badRequest": {
            "ko": "잘못된 요청입니다.",
            "en": "Bad request.",
            "jp": "不正なリクエストです。",
        },
        "notFound": {
            "ko": "요청한 리소스를 찾을 수 없습니다.",
            "en": "The requested resource was not found.",
            "jp": "リクエストされたリソースが見つかりません。",
        },
        "unauthorized": {
            "ko": "인증이 필요합니다.",
            "en": "Authentication required.",
            "jp": "認証が必要です。",
        },
        "serverError": {
            "ko": "서버 오류가 발생했습니다.",
            "en": "A server error occurred.",
            "jp": "サーバーエラーが発生しました。",
        },
        "unknownAction": {
            "ko": "알 수 없는 요청입니다.",
            "en": "Unknown action.",
        },
    },
    "locale": {
        "unsupportedLanguage": {
            "ko": "지원하지 않는 언어입니다.",
            "en": "Unsupported language.",
            "jp": "サポートされていない言語です。",
        },
        "translationsNotFound": {
            "ko": "해당 언어의 번역을 찾을 수 없습니다.",
            "en": "No translations are available for this language.",
            "jp": "この言語の翻訳が見つかりません。",
        },
        "keyRequired": {
            "ko": "번역 키가 필요합니다.",
            "en": "A translation key is required.",
            "jp": "翻訳キーが必要です。",
        },
        "sessionNotInitialized": {
            "ko": "세션이 초기화되지 않았습니다.",
            "en": "The session has not been initialized.",
        },
    },
}


def get_message(language: Language | str | None, path: str) -> str:
    """Return the message at ``path`` (``"error.notFound"``) in ``language``.

    Missing paths give ``""``; missing translations give the default language's text.
    """
    lang = language or DEFAULT_LANGUAGE
    node: Any = MESSAGES
    for part in path.split("."):
        if isinstance(node, dict) and part in node:
            node = node[part]
        else:
            logger.warning("Message path not found: %s", path)
            return ""

    if isinstance(node, str):
        return node
    if isinstance(node, dict):
        text = node.get(lang) or node.get(DEFAULT_LANGUAGE)
        if isinstance(text, str):
            return text
    return ""


def localized_error(language: Language | str | None, path: str, status_code: int = 400) -> HTTPException:
    return HTTPException(status_code=status_code, detail=get_message(language, path) or path)
