"""Data models for the word duel session engine."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, model_validator

REFEREE = "Referee"


class Slot(str, Enum):
    """Participant slot. A always takes the first turn."""
    A = "A"
    B = "B"

    @property
    def other(self) -> "Slot":
        return Slot.B if self is Slot.A else Slot.A


class Phase(str, Enum):
    """Session phase. Transitions only move forward."""
    WAITING = "waiting"
    SETUP = "setup"
    PLAYING = "playing"
    FINISHED = "finished"


class Variant(str, Enum):
    """Rule variant."""
    SINGLE_WORD = "single_word"  # One word each, wrong-guess budget, tie-break window
    MULTI_WORD = "multi_word"    # N words each, shared turn limit, highest score wins


class Outcome(str, Enum):
    WON = "won"
    LOST = "lost"


class SessionResult(str, Enum):
    """Final verdict of a finished session."""
    A = "A"
    B = "B"
    TIE = "tie"
    NONE = "none"  # Single-word game where neither side revealed the other's word


class TerminationState(str, Enum):
    """Termination checker state.

    TIE_WINDOW is only reachable in the single-word variant: slot A has won and slot B
    is owed exactly one more turn to draw level.
    """
    UNRESOLVED = "unresolved"
    TIE_WINDOW = "tie_window"
    FINISHED = "finished"


class SessionConfig(BaseModel):
    """Rules for one session, fixed at creation."""
    variant: Variant = Variant.MULTI_WORD
    words_per_participant: int = 5
    turn_limit: int = 20  # Multi-word: guesses per participant
    guess_budget: int = 6  # Single-word: wrong letter guesses allowed
    min_word_length: int = 3
    seed: int | None = None

    @classmethod
    def for_variant(cls, variant: Variant, seed: int | None = None) -> "SessionConfig":
        """Create a SessionConfig with the canonical settings for a variant."""
        if variant == Variant.SINGLE_WORD:
            return cls(variant=variant, words_per_participant=1, guess_budget=6, seed=seed)
        return cls(variant=variant, words_per_participant=5, turn_limit=20, seed=seed)

    @model_validator(mode="after")
    def check_counts(self) -> "SessionConfig":
        if self.words_per_participant < 1:
            raise ValueError("words_per_participant must be at least 1")
        if self.variant == Variant.SINGLE_WORD and self.words_per_participant != 1:
            raise ValueError("The single-word variant takes exactly one word per participant")
        if self.turn_limit < 1 or self.guess_budget < 1:
            raise ValueError("turn_limit and guess_budget must be positive")
        return self


class NarrationEntry(BaseModel):
    """One line of the session's event log."""
    source: str
    text: str
    time: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Participant(BaseModel):
    """Per-player state.

    `words`, `remaining_words` and `active_word` are this participant's own secret words
    (guessed by the opponent). `guessed_letters`, `wrong_guess_count`, `score` and
    `turns_taken` describe this participant's guessing against the opponent's active word.
    """
    slot: Slot
    identity: str | None = None
    words: list[str] = Field(default_factory=list)
    remaining_words: list[str] = Field(default_factory=list)
    active_word: str | None = None
    score: int = 0
    turns_taken: int = 0
    guessed_letters: list[str] = Field(default_factory=list)
    wrong_guess_count: int = 0
    outcome: Outcome | None = None

    @property
    def is_ready(self) -> bool:
        return bool(self.words)


class GuessResult(BaseModel):
    """Result of one applied guess."""
    slot: Slot
    kind: Literal["letter", "word"]
    guess: str
    correct: bool  # Letter occurs in the word, or whole-word guess matched
    resolved_word: str | None = None  # Word removed from the opponent's remaining words
    points: int = 0  # Signed score change
    finished: bool = False


class Session(BaseModel):
    """The root aggregate: two participants, phase, turn pointer and event log."""
    session_id: str
    config: SessionConfig
    phase: Phase = Phase.WAITING
    participants: tuple[Participant, Participant] = Field(
        default_factory=lambda: (Participant(slot=Slot.A), Participant(slot=Slot.B))
    )
    current_turn: Slot | None = None
    event_log: list[NarrationEntry] = Field(default_factory=list)
    termination: TerminationState = TerminationState.UNRESOLVED
    result: SessionResult | None = None

    @property
    def turn_limit(self) -> int:
        return self.config.turn_limit

    def participant(self, slot: Slot) -> Participant:
        return self.participants[0] if slot == Slot.A else self.participants[1]

    def opponent(self, slot: Slot) -> Participant:
        return self.participant(slot.other)

    def slot_of(self, identity: str) -> Slot | None:
        """Map a caller identity to its slot, or None if it is not seated."""
        for participant in self.participants:
            if participant.identity is not None and participant.identity == identity:
                return participant.slot
        return None

    def display_name(self, slot: Slot) -> str:
        return self.participant(slot).identity or f"Player {slot.value}"
