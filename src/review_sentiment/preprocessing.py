"""Tokenization and stop-word filtering for movie reviews.

Tokens are maximal runs of ASCII letters and digits, optionally followed
by one apostrophe clitic (``'s``, ``'d``, ``'t``, ``'ve``, ``'mon``,
``'ll``, ``'m``, ``'re``). The whole text is lower-cased first, so
``"Wouldn't"`` becomes the single token ``"wouldn't"``. Every other
character (punctuation, whitespace, underscores, non-ASCII letters) is a
separator and is never emitted.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

CLITICS: tuple[str, ...] = ("s", "d", "t", "ve", "mon", "ll", "m", "re")

_TOKEN_RE = re.compile(r"[a-zA-Z0-9]+('(s|d|t|ve|mon|ll|m|re))?")


def iter_tokens(text: str) -> Iterator[str]:
    """Yield normalized tokens from ``text`` in order, duplicates included.

    Calling again with the same text restarts the sequence.
    """
    for match in _TOKEN_RE.finditer(text.lower()):
        token = match.group()
        if token:
            yield token


def tokenize(text: str) -> list[str]:
    """Return the list of normalized tokens in ``text``.

    Example::

        >>> tokenize("Wouldn't stop, this movie was GREAT!")
        ["wouldn't", 'stop', 'this', 'movie', 'was', 'great']
    """
    return list(iter_tokens(text))


# ---------------------------------------------------------------------------
# Stop-word Filter
# ---------------------------------------------------------------------------


class StopWordFilter:
    """An immutable set of stop-words.

    Membership is an exact, case-sensitive match. Tokens are expected to
    be lower-cased already by :func:`tokenize`; no further normalization
    happens here.

    Example::

        stop_words = StopWordFilter(["the", "a", "of"])
        stop_words.is_stop_word("the")   # True
        "movie" in stop_words            # False

    Args:
        words: Stop-words. Surrounding whitespace is trimmed and blank
            entries are dropped.
    """

    def __init__(self, words: Iterable[str] = ()) -> None:
        self._words: frozenset[str] = frozenset(
            w.strip() for w in words if w and w.strip()
        )

    def is_stop_word(self, token: str) -> bool:
        return token in self._words

    def __contains__(self, token: object) -> bool:
        return token in self._words

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._words))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({len(self._words)} words)"
