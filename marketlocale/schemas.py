from typing import Any

from pydantic import BaseModel


class LanguageEntry(BaseModel):
    code: str
    name: str
    country: str
    currency: str
    symbol: str
    default: bool = False
    prefix: str = ""


class LanguagesResponse(BaseModel):
    default: str
    languages: list[LanguageEntry]


class TranslationTreeResponse(BaseModel):
    language: str
    translations: dict[str, Any]


class TranslateResponse(BaseModel):
    key: str
    language: str
    text: str


class FormatUrlResponse(BaseModel):
    path: str
    language: str
    url: str


class MessageResponse(BaseModel):
    path: str
    language: str
    message: str


class SessionResponse(BaseModel):
    token: str


class NavigationEvent(BaseModel):
    path: str
    replace: bool = True


class LocaleStateResponse(BaseModel):
    language: str
    path: str
    preference: str | None = None
    navigate: NavigationEvent | None = None
