"""In-memory store of game sessions, one lock per session."""

from __future__ import annotations

import logging
import threading
import uuid
from contextlib import contextmanager
from typing import Iterator

from chessrules.game import Game
from chessrules.session import GameSession

_LOGGER = logging.getLogger(__name__)


class SessionLimitError(RuntimeError):
    """The store already holds its configured maximum number of sessions."""


class UnknownSessionError(LookupError):
    pass


class SessionStore:
    def __init__(self, max_sessions: int):
        self.max_sessions = max_sessions
        self._lock = threading.Lock()
        self._sessions: dict[str, tuple[GameSession, threading.Lock]] = {}

    def create(self, game: Game | None = None) -> str:
        with self._lock:
            if len(self._sessions) >= self.max_sessions:
                raise SessionLimitError(f"Session limit reached: {self.max_sessions}")
            session_id = uuid.uuid4().hex
            self._sessions[session_id] = (GameSession(game), threading.Lock())
        _LOGGER.info("created session %s", session_id)
        return session_id

    @contextmanager
    def checkout(self, session_id: str) -> Iterator[GameSession]:
        """Hold the session's lock for the duration of the block.

        Raises ``UnknownSessionError`` for ids that were never created or
        have been removed.
        """
        with self._lock:
            entry = self._sessions.get(session_id)
        if entry is None:
            raise UnknownSessionError(session_id)
        session, lock = entry
        with lock:
            yield session

    def remove(self, session_id: str) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise UnknownSessionError(session_id)
        _LOGGER.info("removed session %s", session_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions
