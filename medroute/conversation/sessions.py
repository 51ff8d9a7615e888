from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field

from medroute.context.store import reset_context
from medroute.conversation.history import DEFAULT_CAPACITY, HistoryLog
from medroute.models import UserContext

logger = logging.getLogger(__name__)

DEFAULT_SESSION_ID = "default"


@dataclass
class Session:
    """Per-conversation state: accumulated user context plus bounded history."""

    session_id: str
    context: UserContext = field(default_factory=UserContext)
    history: HistoryLog = field(default_factory=HistoryLog)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    """Serializes message processing so history order equals completion order."""

    last_seen: float = field(default_factory=time.monotonic)

    def clear(self) -> None:
        reset_context(self.context)
        self.history.clear()


class SessionStore:
    """In-memory map of session id -> Session.

    Sessions are created on first access, evicted after ``idle_timeout``
    seconds without activity, and the least recently used ones are dropped
    once more than ``max_sessions`` exist.
    """

    def __init__(
        self,
        history_capacity: int = DEFAULT_CAPACITY,
        idle_timeout: float = 1800,
        max_sessions: int | None = None,
    ):
        self._history_capacity = history_capacity
        self._idle_timeout = idle_timeout
        self._max_sessions = max_sessions
        self._sessions: dict[str, Session] = {}

    def get(self, session_id: str = DEFAULT_SESSION_ID) -> Session:
        """Return the session, creating it if needed. Touches ``last_seen``."""
        now = time.monotonic()
        self._evict_idle(now)

        session = self._sessions.get(session_id)
        if session is None:
            session = Session(
                session_id=session_id,
                history=HistoryLog(capacity=self._history_capacity),
            )
            self._sessions[session_id] = session
            logger.info("Session created: %s", session_id)
            self._prune(keep=session_id)
        session.last_seen = now
        return session

    def peek(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    async def clear(self, session_id: str = DEFAULT_SESSION_ID) -> None:
        """Reset context and history for a session (no-op if unknown).

        Waits for any in-flight message on the session to finish first.
        """
        session = self._sessions.get(session_id)
        if session is None:
            return
        async with session.lock:
            session.clear()
        logger.info("Session cleared: %s", session_id)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def _evict_idle(self, now: float) -> None:
        if not self._idle_timeout or self._idle_timeout <= 0:
            return
        expired = [
            sid for sid, s in self._sessions.items()
            if s.last_seen <= now - self._idle_timeout and not s.lock.locked()
        ]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("Evicted %d idle sessions", len(expired))

    def _prune(self, keep: str) -> None:
        if not self._max_sessions or self._max_sessions <= 0:
            return
        if len(self._sessions) <= self._max_sessions:
            return
        by_age = sorted(
            (
                s for s in self._sessions.values()
                if s.session_id != keep and not s.lock.locked()
            ),
            key=lambda s: s.last_seen,
        )
        for session in by_age[: len(self._sessions) - self._max_sessions]:
            del self._sessions[session.session_id]
