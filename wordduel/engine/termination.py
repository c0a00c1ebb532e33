"""Termination checker for both rule variants.

Functions here operate on a session copy that the turn engine already owns; they update
outcomes, `termination` and `result` in place.
"""

from __future__ import annotations

from .models import (
    GuessResult,
    Outcome,
    Participant,
    Phase,
    Session,
    SessionResult,
    Slot,
    TerminationState,
    Variant,
)


def letters_remaining(word: str | None, guessed_letters: list[str]) -> int:
    """Count distinct letters of `word` not yet guessed."""
    if not word:
        return 0
    return len({letter for letter in word.lower() if letter not in guessed_letters})


def guesses_remaining(session: Session, guesser: Participant) -> int:
    """Single-word wrong-guess budget left for a guesser."""
    return max(0, session.config.guess_budget - guesser.wrong_guess_count)


def check_terminal(session: Session) -> tuple[bool, SessionResult | None]:
    """
    Multi-word termination check.

    Returns:
        (is_finished, result). The session ends when both participants have used the
        turn limit, or when one side's words are exhausted and both have taken the same
        number of turns.
    """
    a = session.participant(Slot.A)
    b = session.participant(Slot.B)
    limit = session.turn_limit

    both_at_limit = a.turns_taken >= limit and b.turns_taken >= limit
    exhausted = not a.remaining_words or not b.remaining_words
    parity = a.turns_taken == b.turns_taken

    if not (both_at_limit or (exhausted and parity)):
        return False, None

    if a.score > b.score:
        return True, SessionResult.A
    if b.score > a.score:
        return True, SessionResult.B
    return True, SessionResult.TIE


def _single_word_result(a: Participant, b: Participant) -> SessionResult:
    if a.outcome == Outcome.WON and b.outcome == Outcome.WON:
        return SessionResult.TIE
    if a.outcome == Outcome.WON:
        return SessionResult.A
    if b.outcome == Outcome.WON:
        return SessionResult.B
    return SessionResult.NONE


def _mark_mover(session: Session, mover: Participant, result: GuessResult) -> None:
    """Record the mover's outcome after their guess, if it is now decided."""
    if result.resolved_word is not None:
        mover.outcome = Outcome.WON if result.correct else Outcome.LOST
    elif guesses_remaining(session, mover) <= 0:
        mover.outcome = Outcome.LOST


def _advance_single_word(session: Session, mover_slot: Slot, result: GuessResult) -> TerminationState:
    """
    Single-word transition function.

    unresolved --A wins, B one letter short with budget--> tie_window
    unresolved --A wins otherwise / B wins / both decided--> finished
    tie_window --B's bonus turn, whatever happens--> finished

    The bonus turn is one-directional: B winning first never opens a window for A,
    since A has already had as many turns as B at that point.
    """
    mover = session.participant(mover_slot)
    other = session.opponent(mover_slot)
    _mark_mover(session, mover, result)

    if session.termination == TerminationState.TIE_WINDOW:
        if mover.outcome != Outcome.WON:
            mover.outcome = Outcome.LOST
        return TerminationState.FINISHED

    if mover.outcome == Outcome.WON:
        if mover_slot == Slot.A and other.outcome is None:
            # B is guessing A's word
            short_by = letters_remaining(mover.active_word, other.guessed_letters)
            if short_by == 1 and guesses_remaining(session, other) > 0:
                return TerminationState.TIE_WINDOW
        if other.outcome is None:
            other.outcome = Outcome.LOST
        return TerminationState.FINISHED

    if mover.outcome is not None and other.outcome is not None:
        return TerminationState.FINISHED

    return TerminationState.UNRESOLVED


def resolve_termination(session: Session, mover_slot: Slot, result: GuessResult) -> bool:
    """
    Run the termination checker after a guess by `mover_slot`.

    Returns:
        True if the session is now finished.
    """
    if session.config.variant == Variant.SINGLE_WORD:
        session.termination = _advance_single_word(session, mover_slot, result)
        if session.termination != TerminationState.FINISHED:
            return False
        session.result = _single_word_result(
            session.participant(Slot.A), session.participant(Slot.B)
        )
    else:
        finished, verdict = check_terminal(session)
        if not finished:
            return False
        session.termination = TerminationState.FINISHED
        session.result = verdict
        a = session.participant(Slot.A)
        b = session.participant(Slot.B)
        a.outcome = Outcome.LOST if verdict == SessionResult.B else Outcome.WON
        b.outcome = Outcome.LOST if verdict == SessionResult.A else Outcome.WON

    session.phase = Phase.FINISHED
    return True


def next_turn(session: Session, mover_slot: Slot) -> Slot:
    """Hand the turn to the opponent unless their outcome is already decided."""
    if session.opponent(mover_slot).outcome is not None:
        return mover_slot
    return mover_slot.other
