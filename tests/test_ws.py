import asyncio

import pytest
from starlette.testclient import TestClient

from marketlocale.main import app
from marketlocale.session import registry
from tests.conftest import ws_connect


client = TestClient(app)


def _send(ws, action, payload=None, req_id="r1"):
    ws.send_json({"id": req_id, "action": action, "payload": payload or {}})
    return ws.receive_json()


class TestWsConnection:
    def test_connect_no_token_rejected(self):
        with pytest.raises(Exception):
            with client.websocket_connect("/ws") as ws:
                ws.receive_json()

    def test_connect_with_valid_token(self):
        loop = asyncio.new_event_loop()
        token = loop.run_until_complete(registry.create_session()).token
        loop.close()
        with client.websocket_connect(f"/ws?token={token}") as ws:
            auth = ws.receive_json()
            assert auth["type"] == "auth"
            assert auth["token"] == token

    def test_connect_with_invalid_token(self):
        with pytest.raises(Exception):
            with client.websocket_connect("/ws?token=bad-token-123") as ws:
                ws.receive_json()


class TestWsInit:
    def test_path_wins_over_preference(self):
        with ws_connect(client) as ws:
            resp = _send(ws, "init", {"path": "/jp/resources", "preference": "en"})
        assert resp["ok"] is True
        assert resp["result"]["language"] == "jp"
        assert resp["result"]["navigate"] is None

    def test_preference_used_without_prefix(self):
        with ws_connect(client) as ws:
            resp = _send(ws, "init", {"path": "/services", "preference": "en"})
        assert resp["result"]["language"] == "en"

    def test_default(self):
        with ws_connect(client) as ws:
            resp = _send(ws, "init", {"path": "/services"})
        assert resp["result"]["language"] == "ko"

    def test_second_init_only_rereads_path(self):
        with ws_connect(client) as ws:
            _send(ws, "init", {"path": "/services", "preference": "en"})
            resp = _send(ws, "init", {"path": "/services", "preference": "jp"})
        assert resp["result"]["language"] == "ko"
        assert resp["result"]["preference"] == "en"


class TestWsSetLanguage:
    def test_switch_requests_replace_navigation(self):
        with ws_connect(client) as ws:
            _send(ws, "init", {"path": "/services"})
            resp = _send(ws, "set-language", {"language": "en"})
        result = resp["result"]
        assert result["language"] == "en"
        assert result["path"] == "/en/services"
        assert result["preference"] == "en"
        assert result["navigate"] == {"path": "/en/services", "replace": True}

    def test_same_language_no_navigation(self):
        with ws_connect(client) as ws:
            _send(ws, "init", {"path": "/en/services"})
            resp = _send(ws, "set-language", {"language": "en"})
        assert resp["result"]["navigate"] is None

    def test_unsupported_language(self):
        with ws_connect(client) as ws:
            _send(ws, "init", {"path": "/en/"})
            resp = _send(ws, "set-language", {"language": "fr"})
        assert resp["ok"] is False
        assert resp["code"] == 400
        assert resp["error"] == "Unsupported language."
        assert resp["language"] == "fr"


class TestWsNavigated:
    def test_external_navigation_changes_language(self):
        with ws_connect(client) as ws:
            _send(ws, "init", {"path": "/services", "preference": "en"})
            resp = _send(ws, "navigated", {"path": "/jp/resources"})
        assert resp["result"]["language"] == "jp"
        assert resp["result"]["navigate"] is None

    def test_unprefixed_path_returns_to_default(self):
        with ws_connect(client) as ws:
            _send(ws, "init", {"path": "/en/services"})
            resp = _send(ws, "navigated", {"path": "/services"})
        assert resp["result"]["language"] == "ko"


class TestWsTranslate:
    def test_translate_in_session_language(self):
        with ws_connect(client) as ws:
            _send(ws, "init", {"path": "/en/"})
            resp = _send(ws, "translate", {"key": "nav.home"})
        assert resp["result"] == {"key": "nav.home", "language": "en", "text": "Home"}

    def test_translate_with_params(self):
        with ws_connect(client) as ws:
            _send(ws, "init", {"path": "/"})
            resp = _send(ws, "translate", {"key": "footer.copyright", "params": {"year": 2025}})
        assert resp["result"]["text"] == "© 2025 웹마켓. 모든 권리 보유."

    def test_fallback(self):
        with ws_connect(client) as ws:
            _send(ws, "init", {"path": "/jp/"})
            resp = _send(ws, "translate", {"key": "footer.copyright"})
        assert resp["result"]["text"] == "copyright"

    def test_key_required(self):
        with ws_connect(client) as ws:
            _send(ws, "init", {"path": "/en/"})
            resp = _send(ws, "translate", {})
        assert resp["ok"] is False
        assert resp["error"] == "A translation key is required."


class TestWsFormatUrl:
    def test_format_url(self):
        with ws_connect(client) as ws:
            _send(ws, "init", {"path": "/jp/"})
            resp = _send(ws, "format-url", {"path": "/resources/7"})
        assert resp["result"]["url"] == "/jp/resources/7"


class TestWsMisc:
    def test_languages(self):
        with ws_connect(client) as ws:
            resp = _send(ws, "languages")
        assert resp["ok"] is True
        assert resp["result"]["default"] == "ko"

    def test_state(self):
        with ws_connect(client) as ws:
            resp = _send(ws, "state")
        assert resp["result"]["language"] == "ko"
        assert resp["result"]["path"] == "/"

    def test_unknown_action(self):
        with ws_connect(client) as ws:
            resp = _send(ws, "bogus", req_id="x9")
        assert resp["id"] == "x9"
        assert resp["ok"] is False
        assert resp["code"] == 400
        assert "bogus" in resp["error"]
