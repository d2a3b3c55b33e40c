"""WebSocket endpoint with token-based session auth."""

import logging
import traceback

from fastapi import HTTPException
from starlette.websockets import WebSocket, WebSocketDisconnect

from marketlocale.handlers import (
    handle_languages,
    handle_session_format_url,
    handle_session_init,
    handle_session_navigated,
    handle_session_set_language,
    handle_session_state,
    handle_session_translate,
)
from marketlocale.languages import UnsupportedLanguage
from marketlocale.messages import get_message
from marketlocale.session import Session, registry

logger = logging.getLogger("marketlocale.ws")


async def ws_endpoint(websocket: WebSocket) -> None:
    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=4001, reason="Token required")
        return

    session = await registry.get_session(token)
    if not session:
        await websocket.close(code=4001, reason="Invalid token")
        return

    # Lifecycle: the on_connect hook can reject the connection
    if registry.on_connect:
        allowed = await registry.on_connect(session, websocket)
        if not allowed:
            await websocket.close(code=4003, reason="Connection rejected")
            return

    await websocket.accept()
    session.websocket = websocket

    # Send auth message with the session token
    await websocket.send_json({"type": "auth", "token": session.token})

    try:
        while True:
            msg = await websocket.receive_json()
            req_id = msg.get("id")
            action = msg.get("action")
            payload = msg.get("payload") or {}

            try:
                result = await _dispatch(session, action, payload)
                await websocket.send_json({"id": req_id, "ok": True, "result": result})
            except HTTPException as exc:
                await websocket.send_json({
                    "id": req_id, "ok": False,
                    "error": exc.detail, "code": exc.status_code,
                })
            except UnsupportedLanguage as exc:
                await websocket.send_json({
                    "id": req_id, "ok": False,
                    "error": get_message(_reply_language(session), "locale.unsupportedLanguage"),
                    "code": 400, "language": str(exc.code),
                })
            except Exception as exc:
                logger.error("WS dispatch error: %s\n%s", exc, traceback.format_exc())
                await websocket.send_json({
                    "id": req_id, "ok": False,
                    "error": str(exc) or get_message(_reply_language(session), "error.serverError"),
                    "code": 500,
                })
    except WebSocketDisconnect:
        pass
    finally:
        session.websocket = None
        if registry.on_disconnect:
            await registry.on_disconnect(session)


def _reply_language(session: Session):
    return session.locale.current_language if session.locale else None


async def _dispatch(session: Session, action: str, payload: dict) -> dict:
    if action == "languages":
        return await handle_languages()

    elif action == "init":
        return await handle_session_init(
            session,
            path=payload.get("path", "/"),
            preference=payload.get("preference"),
        )

    elif action == "navigated":
        return await handle_session_navigated(session, path=payload.get("path", "/"))

    elif action == "set-language":
        return await handle_session_set_language(session, language=payload.get("language", ""))

    elif action == "translate":
        return await handle_session_translate(
            session,
            key=payload.get("key", ""),
            params=payload.get("params"),
        )

    elif action == "format-url":
        return await handle_session_format_url(session, path=payload.get("path", "/"))

    elif action == "state":
        return await handle_session_state(session)

    else:
        raise HTTPException(
            status_code=400,
            detail=f"{get_message(_reply_language(session), 'error.unknownAction')} ({action})",
        )
