"""Request language detection.

Priority: path prefix → preference cookie → ``Accept-Language`` → default.
The result lands on ``request.state.language`` and in the
``Content-Language`` response header.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from marketlocale.config import settings
from marketlocale.languages import DEFAULT_LANGUAGE, Language, parse_language
from marketlocale.urls import decode_language_from_path


def language_from_accept_header(value: str | None) -> Language | None:
    if not value:
        return None
    for part in value.lower().split(","):
        tag = part.strip().split(";")[0].strip()
        if tag.startswith("ko"):
            return Language.KO
        if tag.startswith("en"):
            return Language.EN
        if tag.startswith("ja") or tag.startswith("jp"):
            return Language.JP
    return None


def detect_request_language(
    path: str,
    cookie: str | None = None,
    accept_language: str | None = None,
) -> Language:
    return (
        decode_language_from_path(path)
        or parse_language(cookie)
        or language_from_accept_header(accept_language)
        or DEFAULT_LANGUAGE
    )


def request_language(request: Request) -> Language:
    """Language detected for ``request`` (detects on the spot if the middleware did not run)."""
    language = getattr(request.state, "language", None)
    if isinstance(language, Language):
        return language
    return detect_request_language(
        request.url.path,
        request.cookies.get(settings.get("LANGUAGE_COOKIE")),
        request.headers.get("accept-language"),
    )


class LanguageDetectionMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        language = detect_request_language(
            request.url.path,
            request.cookies.get(settings.get("LANGUAGE_COOKIE")),
            request.headers.get("accept-language"),
        )
        request.state.language = language
        response = await call_next(request)
        response.headers.setdefault("Content-Language", language.value)
        return response
