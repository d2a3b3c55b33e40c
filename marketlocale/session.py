"""Session registry with UUID token auth; each session owns its locale state."""

import asyncio
import time
import uuid
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from starlette.websockets import WebSocket

from marketlocale.config import settings
from marketlocale.context import LocaleContext
from marketlocale.store import LocaleStore, MemoryPreferenceStore
from marketlocale.translations import TranslationIndex


@dataclass
class Navigation:
    path: str
    replace: bool


@dataclass
class Session:
    token: str
    created_at: float
    last_active: float
    path: str = "/"
    preferences: MemoryPreferenceStore = field(default_factory=MemoryPreferenceStore)
    pending_navigation: list[Navigation] = field(default_factory=list)
    locale: LocaleContext | None = None
    websocket: WebSocket | None = None

    def navigate(self, path: str, *, replace: bool) -> None:
        # The browser performs the navigation; we track where it will land.
        self.path = path
        self.pending_navigation.append(Navigation(path=path, replace=replace))

    def take_navigation(self) -> list[Navigation]:
        pending, self.pending_navigation = self.pending_navigation, []
        return pending


class SessionRegistry:
    """Manages sessions and exposes lifecycle hooks for host integration.

    Lifecycle callbacks (all optional, all async):
        on_connect(session, websocket) -> bool
            Called after token validation, before the message loop.
            Return False to reject the connection.

        on_disconnect(session)
            Called when the WebSocket disconnects (clean or abrupt).
    """

    def __init__(self, index: TranslationIndex | None = None, idle_timeout: int | None = None) -> None:
        self._sessions: dict[str, Session] = {}
        self._index = index
        self._idle_timeout = idle_timeout if idle_timeout is not None else settings.get_int("SESSION_IDLE_TIMEOUT")
        self._cleanup_task: asyncio.Task | None = None

        # Lifecycle hooks, set by the host application
        self.on_connect: Callable[[Session, WebSocket], Awaitable[bool]] | None = None
        self.on_disconnect: Callable[[Session], Awaitable[Any]] | None = None

    @property
    def index(self) -> TranslationIndex:
        if self._index is None:
            self._index = TranslationIndex.load(settings.get("LOCALES_DIR"))
        return self._index

    @index.setter
    def index(self, value: TranslationIndex) -> None:
        self._index = value

    async def create_session(self) -> Session:
        token = str(uuid.uuid4())
        now = time.time()
        session = Session(token=token, created_at=now, last_active=now)
        store = LocaleStore(
            preferences=session.preferences,
            current_path=lambda: session.path,
            navigate=session.navigate,
        )
        session.locale = LocaleContext(self.index, store)
        self._sessions[token] = session
        return session

    async def get_session(self, token: str) -> Session | None:
        session = self._sessions.get(token)
        if session:
            session.last_active = time.time()
        return session

    async def remove_session(self, token: str) -> None:
        self._sessions.pop(token, None)

    async def cleanup_expired(self) -> None:
        now = time.time()
        expired = [
            token for token, session in self._sessions.items()
            if now - session.last_active > self._idle_timeout
        ]
        for token in expired:
            self._sessions.pop(token, None)

    async def _cleanup_loop(self) -> None:
        while True:
            await asyncio.sleep(60)
            await self.cleanup_expired()

    def start_cleanup(self) -> None:
        self._cleanup_task = asyncio.create_task(self._cleanup_loop())

    def stop_cleanup(self) -> None:
        if self._cleanup_task:
            self._cleanup_task.cancel()
            self._cleanup_task = None

    @property
    def session_count(self) -> int:
        return len(self._sessions)


# Module-level singleton
registry = SessionRegistry()
