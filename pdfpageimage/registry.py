"""Registry mapping locators to live document sessions."""

from __future__ import annotations

import threading
from typing import Callable, Dict, Iterable, Optional

from .session import DocumentSession
from .types import CloseReport

SessionFactory = Callable[[str], DocumentSession]


class SessionRegistry:
    """Keeps one :class:`DocumentSession` per locator until it is closed."""

    def __init__(self, factory: Optional[SessionFactory] = None) -> None:
        self._factory: SessionFactory = factory or DocumentSession.open
        self._sessions: Dict[str, DocumentSession] = {}
        self._opening: Dict[str, threading.Lock] = {}
        self._lock = threading.Lock()

    def open(self, locator: str) -> DocumentSession:
        """Return the live session for ``locator``, opening it if needed."""

        with self._lock:
            session = self._live(locator)
            if session is not None:
                return session
            opening = self._opening.setdefault(locator, threading.Lock())

        # Only openers of the same locator wait on a slow resolve or download.
        with opening:
            with self._lock:
                session = self._live(locator)
            if session is not None:
                return session
            session = self._factory(locator)
            with self._lock:
                self._sessions[locator] = session
            return session

    def _live(self, locator: str) -> Optional[DocumentSession]:
        session = self._sessions.get(locator)
        if session is not None and not session.closed:
            return session
        return None

    def get(self, locator: str) -> Optional[DocumentSession]:
        with self._lock:
            return self._sessions.get(locator)

    def close(self, locator: str) -> CloseReport:
        with self._lock:
            session = self._sessions.pop(locator, None)
            self._opening.pop(locator, None)
        if session is None:
            return CloseReport()
        return session.close()

    def close_all(self) -> None:
        with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
            self._opening.clear()
        for session in sessions:
            session.close()

    def locators(self) -> Iterable[str]:
        with self._lock:
            return sorted(self._sessions.keys())

    def __contains__(self, locator: object) -> bool:
        with self._lock:
            return locator in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


__all__ = ["SessionRegistry", "SessionFactory"]
