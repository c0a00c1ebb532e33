from .models import (
    Slot, Phase, Variant, Outcome, SessionResult, TerminationState,
    SessionConfig, NarrationEntry, Participant, GuessResult, Session, REFEREE,
)
from .errors import (
    SessionError, PhaseViolation, IdentityViolation, TurnViolation,
    InputValidation, WordRejected,
)
from .scoring import LETTER_VALUES, word_value, resolution_points, wrong_word_penalty
from .game import (
    add_narration, create_session, join_session, normalize_word, check_candidate,
    prepare_submission, commit_words, apply_letter_guess, apply_word_guess,
    describe_result, snapshot,
)
from .termination import (
    check_terminal, resolve_termination, next_turn, letters_remaining, guesses_remaining,
)

__all__ = [
    "Slot", "Phase", "Variant", "Outcome", "SessionResult", "TerminationState",
    "SessionConfig", "NarrationEntry", "Participant", "GuessResult", "Session", "REFEREE",
    "SessionError", "PhaseViolation", "IdentityViolation", "TurnViolation",
    "InputValidation", "WordRejected",
    "LETTER_VALUES", "word_value", "resolution_points", "wrong_word_penalty",
    "add_narration", "create_session", "join_session", "normalize_word", "check_candidate",
    "prepare_submission", "commit_words", "apply_letter_guess", "apply_word_guess",
    "describe_result", "snapshot",
    "check_terminal", "resolve_termination", "next_turn", "letters_remaining",
    "guesses_remaining",
]
