import random
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from wordduel.engine import (
    Session,
    SessionConfig,
    Slot,
    Variant,
    commit_words,
    create_session,
    join_session,
)


def start_game(
    words_a: list[str],
    words_b: list[str],
    variant: Variant = Variant.MULTI_WORD,
    **overrides,
) -> Session:
    """
    Build a session in the playing phase with alice in slot A and bob in slot B.

    The first word of each list is exposed as the active word so tests know what is
    being guessed: alice guesses words_b, bob guesses words_a.
    """
    config = SessionConfig(variant=variant, words_per_participant=len(words_a), **overrides)
    session = create_session(config, "alice")
    session, _ = join_session(session, "bob")
    session = commit_words(session, "alice", words_a, random.Random(0))
    session = commit_words(session, "bob", words_b, random.Random(0))
    session.participant(Slot.A).active_word = words_a[0]
    session.participant(Slot.B).active_word = words_b[0]
    return session


@pytest.fixture
def multi_word_game() -> Session:
    """alice guesses bob's cat/pen, bob guesses alice's dog/sun."""
    return start_game(["dog", "sun"], ["cat", "pen"], turn_limit=10)


@pytest.fixture
def single_word_game() -> Session:
    """alice guesses bob's "cat", bob guesses alice's "dog"."""
    return start_game(["dog"], ["cat"], variant=Variant.SINGLE_WORD)


@pytest.fixture
def new_game():
    """Factory fixture for games with custom words or rules."""
    return start_game
