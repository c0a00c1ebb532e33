"""Rejection taxonomy for session actions.

Every error rejects a single action and leaves the session untouched.
"""

from __future__ import annotations


class SessionError(ValueError):
    """Base class for all recoverable session rejections."""

    kind = "session_error"


class PhaseViolation(SessionError):
    """Action attempted outside the phase in which it is valid."""

    kind = "phase_violation"


class IdentityViolation(SessionError):
    """Caller is not part of the session or may not join it."""

    kind = "identity_violation"


class TurnViolation(SessionError):
    """Action attempted out of turn."""

    kind = "turn_violation"


class InputValidation(SessionError):
    """Malformed letter, word or word batch."""

    kind = "input_validation"


class WordRejected(SessionError):
    """One or more words failed dictionary validation."""

    kind = "word_rejected"

    def __init__(self, message: str, words: list[str] | None = None):
        super().__init__(message)
        self.words = words or []
