"""Exception types raised by review-sentiment."""

from __future__ import annotations


class LoaderError(ValueError):
    """An input file (corpus, stop-words, fold indices) could not be read or parsed.

    Raised at start-up, before any fold is computed.
    """


class ConfigurationError(ValueError):
    """The run was configured in a way that makes a result undefined.

    Examples: a fold with no test documents, an empty training set, or
    fewer than two folds.
    """
