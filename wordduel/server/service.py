"""Session service: applies participant actions and publishes the results."""

from __future__ import annotations

import logging
import random
from typing import Any

from wordduel.dictionary import Verdict, WordValidator
from wordduel.engine import (
    GuessResult,
    IdentityViolation,
    Session,
    SessionError,
    Slot,
    TurnViolation,
    WordRejected,
    apply_letter_guess,
    apply_word_guess,
    commit_words,
    create_session,
    join_session,
    prepare_submission,
    snapshot,
)

from .broadcaster import Broadcaster
from .config import ServerConfig
from .repository import SessionRepository

logger = logging.getLogger(__name__)

STATE_EVENT = "session-state"


class SessionService:
    """
    Entry point for every participant action.

    Each action either commits a new session state and broadcasts the full snapshot, or
    is rejected: state stays untouched and only the caller is notified. Methods return
    True when the action was applied.
    """

    def __init__(
        self,
        config: ServerConfig,
        validator: WordValidator,
        broadcaster: Broadcaster,
        repository: SessionRepository | None = None,
        rng: random.Random | None = None,
    ):
        self.config = config
        self.validator = validator
        self.broadcaster = broadcaster
        self.repository = repository or SessionRepository()
        self.rng = rng or random.Random(config.seed)

    @property
    def session(self) -> Session | None:
        return self.repository.get()

    async def _publish(self) -> None:
        await self.broadcaster.broadcast(STATE_EVENT, {"session": snapshot(self.session)})

    async def _reject(self, identity: str, event: str, error: SessionError) -> bool:
        if isinstance(error, TurnViolation):
            event = "not-your-turn"
        logger.info("Rejected %s from %s: %s", event, identity, error)
        data: dict[str, Any] = {"kind": error.kind, "message": str(error)}
        if isinstance(error, WordRejected):
            data["words"] = error.words
        await self.broadcaster.send(identity, event, data)
        return False

    async def join(self, identity: str) -> bool:
        """Create the session on first join, or seat the second participant."""
        async with self.repository.lock:
            try:
                if identity not in self.config.identities:
                    raise IdentityViolation(
                        f"Only {' and '.join(self.config.identities)} can play this game!"
                    )
                current = self.repository.get()
                if current is None:
                    session = create_session(self.config.session_config(), identity)
                    slot = Slot.A
                else:
                    session, slot = join_session(current, identity)
            except SessionError as e:
                return await self._reject(identity, "join-rejected", e)

            self.repository.save(session)
            logger.info("%s joined %s as %s", identity, session.session_id, slot.value)
            await self.broadcaster.send(identity, "joined", {"identity": identity, "slot": slot.value})
            await self._publish()
            return True

    async def submit_words(self, identity: str, words: list[str]) -> bool:
        """
        Submit a participant's secret words.

        Local checks run under the lock; dictionary lookups are awaited without it, then
        the commit re-checks everything against the session as it is by then.
        """
        async with self.repository.lock:
            try:
                normalized = prepare_submission(self.repository.require(), identity, words)
            except SessionError as e:
                return await self._reject(identity, "setup-rejected", e)

        verdicts = await self.validator.validate_many(normalized)
        rejected = [w for w in normalized if verdicts[w] == Verdict.REJECTED]

        async with self.repository.lock:
            try:
                if rejected:
                    quoted = ", ".join(f'"{w}"' for w in rejected)
                    raise WordRejected(
                        f"Not in the dictionary: {quoted}. Please choose real English "
                        f"words ({self.config.session_config().min_word_length} or more letters).",
                        words=rejected,
                    )
                session = commit_words(self.repository.require(), identity, normalized, self.rng)
            except SessionError as e:
                return await self._reject(identity, "setup-rejected", e)

            self.repository.save(session)
            logger.info("%s submitted %d word(s)", identity, len(normalized))
            await self._publish()
            return True

    async def guess_letter(self, identity: str, letter: str) -> bool:
        async with self.repository.lock:
            try:
                session, result = apply_letter_guess(self.repository.require(), identity, letter, self.rng)
            except SessionError as e:
                return await self._reject(identity, "guess-rejected", e)
            await self._commit_guess(session, result)
            return True

    async def guess_word(self, identity: str, word: str) -> bool:
        """Apply an "I know it" whole-word guess and tell the guesser how it went."""
        async with self.repository.lock:
            try:
                session, result = apply_word_guess(self.repository.require(), identity, word, self.rng)
            except SessionError as e:
                return await self._reject(identity, "guess-rejected", e)

            if result.correct:
                await self.broadcaster.send(
                    identity, "correct-word-guess", {"word": result.resolved_word, "points": result.points}
                )
            else:
                await self.broadcaster.send(
                    identity,
                    "wrong-word-guess",
                    {"guessed": result.guess, "actual": result.resolved_word, "penalty": -result.points},
                )
            await self._commit_guess(session, result)
            return True

    async def _commit_guess(self, session: Session, result: GuessResult) -> None:
        self.repository.save(session)
        if result.finished:
            logger.info("Session %s finished: %s", session.session_id, session.result.value)
        await self._publish()

    async def reset(self, identity: str) -> bool:
        """Destroy the session at a participant's request."""
        async with self.repository.lock:
            session = self.repository.get()
            if session is None or session.slot_of(identity) is None:
                return await self._reject(
                    identity, "reset-rejected", IdentityViolation("You are not in this game.")
                )

            self.repository.clear()
            logger.info("Session %s reset by %s", session.session_id, identity)
            await self.broadcaster.broadcast("session-reset", {"by": identity})
            await self._publish()
            return True

    async def disconnect(self, identity: str) -> bool:
        """Destroy the session when a seated participant drops, and notify the survivor."""
        async with self.repository.lock:
            session = self.repository.get()
            if session is None:
                return False
            slot = session.slot_of(identity)
            if slot is None:
                return False

            self.repository.clear()
            logger.info("%s left; session %s destroyed", identity, session.session_id)
            survivor = session.opponent(slot).identity
            if survivor is not None:
                await self.broadcaster.send(
                    survivor,
                    "participant-left",
                    {"identity": identity, "message": "Your opponent has left. The game will reset."},
                )
            await self._publish()
            return True
