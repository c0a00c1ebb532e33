"""Letter values and word scoring."""

from __future__ import annotations

# Standard tile values
LETTER_VALUES: dict[str, int] = {
    "a": 1, "b": 3, "c": 3, "d": 2, "e": 1, "f": 4, "g": 2, "h": 4, "i": 1,
    "j": 8, "k": 5, "l": 1, "m": 3, "n": 1, "o": 1, "p": 3, "q": 10, "r": 1,
    "s": 1, "t": 1, "u": 1, "v": 4, "w": 4, "x": 8, "y": 4, "z": 10,
}


def word_value(word: str) -> int:
    """Sum of letter values over every letter occurrence, case-insensitive."""
    return sum(LETTER_VALUES.get(letter, 0) for letter in word.lower())


def resolution_points(word: str, wrong_guess_count: int) -> int:
    """Points awarded for resolving a word: double its value minus wrong letter guesses."""
    return word_value(word) * 2 - wrong_guess_count


def wrong_word_penalty(word: str) -> int:
    """Points deducted for a wrong whole-word guess against `word`."""
    return word_value(word) * 2
