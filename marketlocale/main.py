import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from marketlocale.config import settings
from marketlocale.languages import UnsupportedLanguage
from marketlocale.messages import get_message
from marketlocale.middleware import LanguageDetectionMiddleware, request_language
from marketlocale.routes import router
from marketlocale.session import registry
from marketlocale.translations import TranslationIndex
from marketlocale.ws import ws_endpoint

logger = logging.getLogger("marketlocale")


@asynccontextmanager
async def lifespan(_: FastAPI):
    load_dotenv()
    logger.setLevel(settings.get("LOG_LEVEL").upper())
    registry.index = TranslationIndex.load(settings.get("LOCALES_DIR"))
    logger.info("Loaded translations for %s", ", ".join(lang.value for lang in registry.index.languages))
    registry.start_cleanup()
    yield
    registry.stop_cleanup()


app = FastAPI(title="marketlocale", lifespan=lifespan)


@app.exception_handler(UnsupportedLanguage)
async def unsupported_language_handler(request: Request, exc: UnsupportedLanguage) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "detail": get_message(request_language(request), "locale.unsupportedLanguage"),
            "language": str(exc.code),
        },
    )

app.add_middleware(LanguageDetectionMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)
app.add_api_websocket_route("/ws", ws_endpoint)
