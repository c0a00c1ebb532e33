"""Core session logic: joining, word setup and the turn engine."""

from __future__ import annotations

import random
import re
import uuid
from typing import Any

from .errors import IdentityViolation, InputValidation, PhaseViolation, TurnViolation
from .models import (
    REFEREE,
    GuessResult,
    NarrationEntry,
    Participant,
    Phase,
    Session,
    SessionConfig,
    SessionResult,
    Slot,
    TerminationState,
    Variant,
)
from .scoring import resolution_points, wrong_word_penalty
from .termination import guesses_remaining, letters_remaining, next_turn, resolve_termination

WORD_PATTERN = re.compile(r"^[a-z]+$")
LETTER_PATTERN = re.compile(r"^[a-z]$")


def add_narration(session: Session, text: str, source: str = REFEREE) -> NarrationEntry:
    """Append a narration entry to the session's event log (in place)."""
    entry = NarrationEntry(source=source, text=text)
    session.event_log.append(entry)
    return entry


def create_session(config: SessionConfig, identity: str) -> Session:
    """Create a new session with `identity` seated in slot A."""
    session = Session(session_id=f"session-{uuid.uuid4().hex[:12]}", config=config)
    session.participant(Slot.A).identity = identity
    add_narration(session, f"{identity} is here! Waiting for an opponent to join...")
    return session


def join_session(session: Session, identity: str) -> tuple[Session, Slot]:
    """Seat `identity` in slot B and move the session to setup."""
    if session.slot_of(identity) is not None:
        raise IdentityViolation(f"{identity} is already in the game")

    if session.participant(Slot.B).identity is not None:
        raise IdentityViolation("Game is full! Wait for the current game to finish.")

    if session.phase != Phase.WAITING:
        raise PhaseViolation(f"Cannot join in phase {session.phase.value}")

    new_session = session.model_copy(deep=True)
    new_session.participant(Slot.B).identity = identity
    new_session.phase = Phase.SETUP
    add_narration(new_session, f"{identity} joined! Time to pick your secret words!")
    return new_session, Slot.B


def normalize_word(word: str) -> str:
    """Lower-case and trim a word."""
    return word.lower().strip()


def check_candidate(word: str, min_length: int = 3) -> str:
    """
    Normalize a candidate secret word and check its shape.

    Raises:
        InputValidation: if the word is too short or not letters-only.
    """
    if not isinstance(word, str):
        raise InputValidation("Words must be strings")
    normalized = normalize_word(word)
    if len(normalized) < min_length:
        raise InputValidation(f'"{word}" is too short (minimum {min_length} letters)')
    if not WORD_PATTERN.match(normalized):
        raise InputValidation(f'"{word}" must contain only the letters a-z')
    return normalized


def _require_seated(session: Session, identity: str) -> Slot:
    slot = session.slot_of(identity)
    if slot is None:
        raise IdentityViolation("You are not in this game.")
    return slot


def prepare_submission(session: Session, identity: str, words: list[str]) -> list[str]:
    """
    Run the local checks for a word submission.

    Returns:
        The normalized words, in submission order.
    """
    if session.phase != Phase.SETUP:
        raise PhaseViolation("Cannot submit words at this time.")

    slot = _require_seated(session, identity)
    if session.participant(slot).is_ready:
        raise InputValidation("You have already submitted your words.")

    expected = session.config.words_per_participant
    if not isinstance(words, list) or len(words) != expected:
        raise InputValidation(f"Please submit exactly {expected} word(s).")

    normalized: list[str] = []
    for word in words:
        candidate = check_candidate(word, session.config.min_word_length)
        if candidate in normalized:
            raise InputValidation(f'"{candidate}" was submitted more than once.')
        normalized.append(candidate)

    return normalized


def _draw_word(participant: Participant, rng: random.Random | None) -> None:
    """Expose a new active word drawn uniformly from the remaining words."""
    if participant.remaining_words:
        participant.active_word = (rng or random).choice(participant.remaining_words)
    else:
        participant.active_word = None


def commit_words(
    session: Session,
    identity: str,
    words: list[str],
    rng: random.Random | None = None,
) -> Session:
    """
    Store a participant's validated words.

    When both participants are ready, the session moves to playing, both active words are
    drawn and slot A takes the first turn. Without an explicit `rng`, draws are seeded
    from `config.seed` when one is set.
    """
    normalized = prepare_submission(session, identity, words)
    slot = _require_seated(session, identity)
    if rng is None and session.config.seed is not None:
        rng = random.Random(session.config.seed)

    new_session = session.model_copy(deep=True)
    participant = new_session.participant(slot)
    participant.words = list(normalized)
    participant.remaining_words = list(normalized)
    add_narration(new_session, f"{identity} is ready!")

    a = new_session.participant(Slot.A)
    b = new_session.participant(Slot.B)
    if a.is_ready and b.is_ready:
        _draw_word(a, rng)
        _draw_word(b, rng)
        new_session.phase = Phase.PLAYING
        new_session.current_turn = Slot.A
        add_narration(
            new_session,
            f"Both players are ready! {a.identity} will guess {b.identity}'s words. "
            f"{b.identity} will guess {a.identity}'s words.",
        )
        add_narration(new_session, f"{a.identity}, it's your turn! Guess a letter.")

    return new_session


def _require_turn(session: Session, identity: str) -> Slot:
    """Run the shared guess preconditions in order: phase, identity, turn."""
    if session.phase != Phase.PLAYING:
        raise PhaseViolation("Cannot guess at this time.")

    slot = _require_seated(session, identity)

    if session.current_turn != slot:
        raise TurnViolation("It's not your turn!")

    if session.opponent(slot).active_word is None:
        raise InputValidation("There is no word left to guess.")

    return slot


def _resolve_word(guesser: Participant, owner: Participant, rng: random.Random | None) -> str:
    """
    Remove the owner's active word and rotate to a new one.

    The guesser's letters and wrong guesses reset only when another word follows, so a
    finished guesser keeps the record of their last word.
    """
    word = owner.active_word
    owner.remaining_words = [w for w in owner.remaining_words if w != word]
    if owner.remaining_words:
        guesser.guessed_letters = []
        guesser.wrong_guess_count = 0
    _draw_word(owner, rng)
    return word


def _finish_guess(session: Session, slot: Slot, result: GuessResult) -> GuessResult:
    """Run termination and hand over the turn."""
    if resolve_termination(session, slot, result):
        result.finished = True
        add_narration(session, describe_result(session))
        return result

    session.current_turn = next_turn(session, slot)
    if session.termination == TerminationState.TIE_WINDOW:
        add_narration(
            session,
            f"{session.display_name(slot)} got it! {session.display_name(slot.other)} "
            "is one letter away and gets one last turn to tie!",
        )
    elif session.current_turn != slot:
        add_narration(session, f"{session.display_name(session.current_turn)}, it's your turn!")
    return result


def apply_letter_guess(
    session: Session,
    identity: str,
    letter: str,
    rng: random.Random | None = None,
) -> tuple[Session, GuessResult]:
    """
    Apply a single-letter guess against the opponent's active word.

    Returns:
        (new_session, result)
    """
    slot = _require_turn(session, identity)

    normalized = letter.lower().strip() if isinstance(letter, str) else ""
    if not LETTER_PATTERN.match(normalized):
        raise InputValidation("Please enter a single letter (a-z).")

    if normalized in session.participant(slot).guessed_letters:
        raise InputValidation("You already guessed that letter!")

    new_session = session.model_copy(deep=True)
    guesser = new_session.participant(slot)
    owner = new_session.opponent(slot)
    word = owner.active_word

    guesser.guessed_letters.append(normalized)
    guesser.turns_taken += 1
    correct = normalized in word
    if not correct:
        guesser.wrong_guess_count += 1

    result = GuessResult(slot=slot, kind="letter", guess=normalized, correct=correct)

    if correct:
        text = f'{guesser.identity} guessed "{normalized.upper()}" - Correct!'
    elif new_session.config.variant == Variant.SINGLE_WORD:
        left = guesses_remaining(new_session, guesser)
        text = f'{guesser.identity} guessed "{normalized.upper()}" - Wrong! {left} guesses remaining.'
    else:
        text = f'{guesser.identity} guessed "{normalized.upper()}" - Wrong!'
    add_narration(new_session, text)

    if letters_remaining(word, guesser.guessed_letters) == 0:
        points = resolution_points(word, guesser.wrong_guess_count)
        guesser.score += points
        result.points = points
        result.resolved_word = _resolve_word(guesser, owner, rng)
        add_narration(new_session, f'{guesser.identity} revealed "{word}" for {points} points!')

    return new_session, _finish_guess(new_session, slot, result)


def apply_word_guess(
    session: Session,
    identity: str,
    word: str,
    rng: random.Random | None = None,
) -> tuple[Session, GuessResult]:
    """
    Apply a whole-word guess.

    A whole-word guess is one-shot: right or wrong, the opponent's active word is
    resolved and rotated. A wrong guess costs double the word's value.
    """
    slot = _require_turn(session, identity)

    normalized = normalize_word(word) if isinstance(word, str) else ""
    if not normalized:
        raise InputValidation("Please enter a word.")

    new_session = session.model_copy(deep=True)
    guesser = new_session.participant(slot)
    owner = new_session.opponent(slot)
    actual = owner.active_word

    guesser.turns_taken += 1
    correct = normalized == actual
    if correct:
        points = resolution_points(actual, guesser.wrong_guess_count)
        add_narration(new_session, f'{guesser.identity} knew it! "{actual}" for {points} points!')
    else:
        points = -wrong_word_penalty(actual)
        add_narration(
            new_session,
            f'{guesser.identity} guessed "{normalized}" but the word was "{actual}". '
            f"{-points} point penalty!",
        )
    guesser.score += points

    result = GuessResult(slot=slot, kind="word", guess=normalized, correct=correct, points=points)
    result.resolved_word = _resolve_word(guesser, owner, rng)

    return new_session, _finish_guess(new_session, slot, result)


def describe_result(session: Session) -> str:
    """Referee announcement for a finished session."""
    a = session.participant(Slot.A)
    b = session.participant(Slot.B)

    if session.config.variant == Variant.MULTI_WORD:
        scores = f"{a.identity} {a.score}, {b.identity} {b.score}"
        if session.result == SessionResult.TIE:
            return f"It's a tie! Final score: {scores}."
        winner = a if session.result == SessionResult.A else b
        return f"{winner.identity} wins! Final score: {scores}."

    if session.result == SessionResult.TIE:
        return f"It's a tie! Both {a.identity} and {b.identity} guessed their words!"
    if session.result == SessionResult.A:
        return f"{a.identity} wins! {b.identity}'s word was \"{', '.join(b.words)}\"."
    if session.result == SessionResult.B:
        return f"{b.identity} wins! {a.identity}'s word was \"{', '.join(a.words)}\"."
    return (
        f"Game over! Neither player guessed their word. {a.identity}'s word was "
        f"\"{', '.join(a.words)}\", {b.identity}'s word was \"{', '.join(b.words)}\"."
    )


def snapshot(session: Session | None) -> dict[str, Any] | None:
    """
    Full JSON-ready session state for broadcasting.

    Includes the raw secret words; masking is left to the client. Each participant also
    carries derived `letters_remaining` (against the opponent's active word) and, in the
    single-word variant, `guesses_remaining`.
    """
    if session is None:
        return None

    data = session.model_dump(mode="json")
    for entry, participant in zip(data["participants"], session.participants):
        target = session.opponent(participant.slot).active_word
        entry["letters_remaining"] = letters_remaining(target, participant.guessed_letters)
        if session.config.variant == Variant.SINGLE_WORD:
            entry["guesses_remaining"] = guesses_remaining(session, participant)
    return data
