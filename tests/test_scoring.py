"""Tests for letter values and word scoring."""

from wordduel.engine import LETTER_VALUES, resolution_points, word_value, wrong_word_penalty


class TestLetterValues:
    def test_covers_alphabet(self):
        """Every letter a-z has a value."""
        assert sorted(LETTER_VALUES) == list("abcdefghijklmnopqrstuvwxyz")

    def test_rare_letters_weigh_most(self):
        """Rare letters are worth the most, vowels the least."""
        assert LETTER_VALUES["q"] == 10
        assert LETTER_VALUES["z"] == 10
        assert LETTER_VALUES["x"] == 8
        assert LETTER_VALUES["j"] == 8
        for vowel in "aeiou":
            assert LETTER_VALUES[vowel] == 1


class TestWordValue:
    def test_cat(self):
        """The word cat is worth c3 + a1 + t1."""
        assert word_value("cat") == 5

    def test_case_insensitive(self):
        """Values ignore case."""
        assert word_value("CaT") == word_value("cat")

    def test_every_occurrence_counts(self):
        """Repeated letters are counted each time they appear."""
        assert word_value("zzz") == 30
        assert word_value("quiz") == 22

    def test_resolution_points(self):
        """A reveal scores double the word value minus wrong guesses."""
        assert resolution_points("cat", 0) == 10
        assert resolution_points("cat", 3) == 7

    def test_resolution_can_be_negative(self):
        """Enough wrong guesses push a reveal below zero."""
        assert resolution_points("cat", 12) == -2

    def test_wrong_word_penalty(self):
        """A wrong word guess costs double the word value."""
        assert wrong_word_penalty("cat") == 10
        assert wrong_word_penalty("jazz") == 58
