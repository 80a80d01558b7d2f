"""Tests for tokenization and stop-word filtering."""

from __future__ import annotations

import pytest

from review_sentiment.preprocessing import CLITICS, StopWordFilter, iter_tokens, tokenize


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

class TestTokenize:
    """Tests for the clitic-aware alphanumeric tokenizer."""

    def test_review_sentence(self):
        assert tokenize("Wouldn't stop, this movie was GREAT!") == [
            "wouldn't", "stop", "this", "movie", "was", "great",
        ]

    @pytest.mark.parametrize("word", ["movie", "great", "1999", "r2d2"])
    def test_single_word_is_its_own_token(self, word):
        assert tokenize(word) == [word]

    def test_tokenizing_tokens_is_idempotent(self):
        tokens = tokenize("The Matrix (1999) isn't bad; it's GREAT.")
        assert tokenize(" ".join(tokens)) == tokens

    def test_lowercases_everything(self):
        assert tokenize("SHOUTING Mixed case") == ["shouting", "mixed", "case"]

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Luca's", ["luca's"]),
            ("I'd", ["i'd"]),
            ("don't", ["don't"]),
            ("we've", ["we've"]),
            ("c'mon", ["c'mon"]),
            ("they'll", ["they'll"]),
            ("I'm", ["i'm"]),
            ("you're", ["you're"]),
        ],
    )
    def test_every_clitic_stays_attached(self, text, expected):
        assert tokenize(text) == expected

    def test_clitic_set(self):
        assert set(CLITICS) == {"s", "d", "t", "ve", "mon", "ll", "m", "re"}

    def test_unknown_suffix_splits_on_apostrophe(self):
        assert tokenize("rock'n'roll") == ["rock", "n", "roll"]
        assert tokenize("o'clock") == ["o", "clock"]

    def test_only_one_clitic_attaches(self):
        assert tokenize("we'd've") == ["we'd", "ve"]

    def test_underscore_is_a_separator(self):
        assert tokenize("snake_case_name") == ["snake", "case", "name"]

    def test_digits_join_letters(self):
        assert tokenize("hello123 world") == ["hello123", "world"]

    def test_non_ascii_letters_are_separators(self):
        assert tokenize("café noir") == ["caf", "noir"]

    def test_duplicates_and_order_are_kept(self):
        assert tokenize("bad, bad, good... bad") == ["bad", "bad", "good", "bad"]

    @pytest.mark.parametrize("text", ["", "   ", "!!! ... ___ ---", "''"])
    def test_no_tokens(self, text):
        assert tokenize(text) == []

    def test_iter_tokens_is_lazy_and_restartable(self):
        text = "one two three"
        first = iter_tokens(text)
        assert next(first) == "one"
        assert list(iter_tokens(text)) == ["one", "two", "three"]
        assert list(first) == ["two", "three"]


# ---------------------------------------------------------------------------
# Stop-word Filter
# ---------------------------------------------------------------------------

class TestStopWordFilter:
    """Tests for StopWordFilter."""

    def test_membership(self):
        sw = StopWordFilter(["the", "a"])
        assert sw.is_stop_word("the")
        assert "a" in sw
        assert not sw.is_stop_word("movie")

    def test_case_sensitive(self):
        sw = StopWordFilter(["the"])
        assert not sw.is_stop_word("The")

    def test_trims_and_drops_blank_entries(self):
        sw = StopWordFilter(["  the  ", "", "   ", "a\n"])
        assert len(sw) == 2
        assert "the" in sw
        assert "a" in sw

    def test_duplicates_collapse(self):
        assert len(StopWordFilter(["the", "the", "a"])) == 2

    def test_iteration_is_sorted(self):
        assert list(StopWordFilter(["b", "c", "a"])) == ["a", "b", "c"]

    def test_empty_filter(self):
        sw = StopWordFilter()
        assert len(sw) == 0
        assert not sw.is_stop_word("")

    def test_repr(self):
        assert repr(StopWordFilter(["a", "b"])) == "StopWordFilter(2 words)"
