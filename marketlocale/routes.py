from fastapi import APIRouter, Query, Request

from marketlocale.handlers import (
    handle_format_url,
    handle_languages,
    handle_message,
    handle_session_state,
    handle_translate,
    handle_translation_tree,
)
from marketlocale.messages import localized_error
from marketlocale.middleware import request_language
from marketlocale.schemas import (
    FormatUrlResponse,
    LanguagesResponse,
    LocaleStateResponse,
    MessageResponse,
    SessionResponse,
    TranslateResponse,
    TranslationTreeResponse,
)
from marketlocale.session import registry

router = APIRouter()


@router.get("/api/languages", response_model=LanguagesResponse)
async def get_languages() -> LanguagesResponse:
    return LanguagesResponse(**await handle_languages())


@router.get("/api/translations/{code}", response_model=TranslationTreeResponse)
async def get_translation_tree(code: str, request: Request) -> TranslationTreeResponse:
    result = await handle_translation_tree(registry.index, code, request_language(request))
    return TranslationTreeResponse(**result)


@router.get("/api/translate", response_model=TranslateResponse)
async def translate(
    request: Request,
    key: str = Query(""),
    lang: str | None = Query(None),
) -> TranslateResponse:
    result = await handle_translate(registry.index, key.strip(), lang, request_language(request))
    return TranslateResponse(**result)


@router.get("/api/format-url", response_model=FormatUrlResponse)
async def format_url(
    request: Request,
    path: str = Query("/"),
    lang: str | None = Query(None),
) -> FormatUrlResponse:
    return FormatUrlResponse(**await handle_format_url(path, lang, request_language(request)))


@router.get("/api/messages/{path}", response_model=MessageResponse)
async def get_message(
    path: str,
    request: Request,
    lang: str | None = Query(None),
) -> MessageResponse:
    return MessageResponse(**await handle_message(path, lang, request_language(request)))


@router.post("/api/session", response_model=SessionResponse)
async def create_session() -> SessionResponse:
    session = await registry.create_session()
    return SessionResponse(token=session.token)


@router.get("/api/session/{token}", response_model=LocaleStateResponse)
async def get_session_state(token: str, request: Request) -> LocaleStateResponse:
    session = await registry.get_session(token)
    if not session:
        raise localized_error(request_language(request), "error.unauthorized", 401)
    return LocaleStateResponse(**await handle_session_state(session, drain=False))
