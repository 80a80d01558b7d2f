"""Run settings, read from the environment and an optional ``.env`` file.

Variables (all optional)::

    REVIEW_SENTIMENT_CORPUS_DIR=txt_sentoken
    REVIEW_SENTIMENT_STOP_WORDS=scikit_stopw.txt
    REVIEW_SENTIMENT_TRAIN_INDICES=train_indexes.txt
    REVIEW_SENTIMENT_TEST_INDICES=test_indexes.txt
    REVIEW_SENTIMENT_N_SPLITS=10
    REVIEW_SENTIMENT_SEED=42
    REVIEW_SENTIMENT_LOG_LEVEL=WARNING

Relative file names are resolved against the corpus directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .exceptions import ConfigurationError

ENV_PREFIX = "REVIEW_SENTIMENT_"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    """Locations of the input files and cross-validation parameters."""

    corpus_dir: Path = Path("txt_sentoken")
    stop_words_file: Optional[str] = "scikit_stopw.txt"
    train_indices_file: Optional[str] = "train_indexes.txt"
    test_indices_file: Optional[str] = "test_indexes.txt"
    n_splits: int = 10
    seed: int = 42
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        object.__setattr__(self, "corpus_dir", Path(self.corpus_dir))
        object.__setattr__(self, "log_level", self.log_level.upper())
        if self.n_splits < 2:
            raise ConfigurationError(f"n_splits must be at least 2, got {self.n_splits}")
        if self.log_level not in _LOG_LEVELS:
            raise ConfigurationError(
                f"Unknown log level {self.log_level!r}. Choose from {', '.join(_LOG_LEVELS)}"
            )

    @classmethod
    def from_env(cls, dotenv_path: str | Path | None = None) -> "Settings":
        """Build settings from ``REVIEW_SENTIMENT_*`` variables.

        A ``.env`` file is loaded first: ``dotenv_path``, or else the first
        one found in the working directory or its parents. Variables already
        set in the environment take precedence over it.
        """
        load_dotenv(dotenv_path or find_dotenv(usecwd=True))
        defaults = cls()
        return cls(
            corpus_dir=Path(os.getenv(ENV_PREFIX + "CORPUS_DIR", str(defaults.corpus_dir))),
            stop_words_file=os.getenv(ENV_PREFIX + "STOP_WORDS", defaults.stop_words_file),
            train_indices_file=os.getenv(
                ENV_PREFIX + "TRAIN_INDICES", defaults.train_indices_file
            ),
            test_indices_file=os.getenv(ENV_PREFIX + "TEST_INDICES", defaults.test_indices_file),
            n_splits=_env_int("N_SPLITS", defaults.n_splits),
            seed=_env_int("SEED", defaults.seed),
            log_level=os.getenv(ENV_PREFIX + "LOG_LEVEL", defaults.log_level),
        )

    def with_overrides(self, **overrides) -> "Settings":
        """Return a copy with every non-``None`` override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def resolve(self, name: str | Path | None) -> Path | None:
        """Resolve a file name against the corpus directory."""
        if name is None or str(name) == "":
            return None
        path = Path(name)
        return path if path.is_absolute() else self.corpus_dir / path

    @property
    def stop_words_path(self) -> Path | None:
        return self.resolve(self.stop_words_file)

    @property
    def train_indices_path(self) -> Path | None:
        return self.resolve(self.train_indices_file)

    @property
    def test_indices_path(self) -> Path | None:
        return self.resolve(self.test_indices_file)
