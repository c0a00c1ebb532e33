"""Holder for the single live session."""

from __future__ import annotations

import asyncio

from wordduel.engine import PhaseViolation, Session


class SessionRepository:
    """Owns zero or one live session and the lock that serializes its mutations."""

    def __init__(self) -> None:
        self._session: Session | None = None
        self.lock = asyncio.Lock()

    def get(self) -> Session | None:
        return self._session

    def require(self) -> Session:
        if self._session is None:
            raise PhaseViolation("There is no game in progress.")
        return self._session

    def save(self, session: Session) -> None:
        self._session = session

    def clear(self) -> None:
        self._session = None
