"""Shared test fixtures for review-sentiment tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from review_sentiment.config import ENV_PREFIX
from review_sentiment.preprocessing import StopWordFilter

POSITIVE_REVIEWS = [
    "A wonderful film. The acting was brilliant and the story was moving.",
    "Brilliant direction, wonderful score; I loved every minute of it!",
    "The cast is superb and the ending is moving. A wonderful surprise.",
    "Loved it. Superb performances and a brilliant, funny script.",
]

NEGATIVE_REVIEWS = [
    "A boring mess. The acting was awful and the plot was dull.",
    "Awful dialogue, dull characters; I hated every minute of it!",
    "The cast is wasted and the ending is boring. A terrible letdown.",
    "Hated it. Terrible performances and an awful, dull script.",
]

STOP_WORDS = [
    "a", "an", "the", "and", "is", "was", "it", "of", "i", "every", "this",
]

SETTINGS_ENV_KEYS = [
    "CORPUS_DIR", "STOP_WORDS", "TRAIN_INDICES", "TEST_INDICES",
    "N_SPLITS", "SEED", "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep REVIEW_SENTIMENT_* variables from leaking into or out of tests."""
    for key in SETTINGS_ENV_KEYS:
        # setenv first so teardown removes anything a .env file adds later
        monkeypatch.setenv(ENV_PREFIX + key, "")
        monkeypatch.delenv(ENV_PREFIX + key)


@pytest.fixture
def stop_words() -> StopWordFilter:
    return StopWordFilter(STOP_WORDS)


@pytest.fixture
def reviews() -> tuple[list[str], list[int]]:
    """Positives first, then negatives, with positional labels."""
    docs = POSITIVE_REVIEWS + NEGATIVE_REVIEWS
    labels = [1] * len(POSITIVE_REVIEWS) + [0] * len(NEGATIVE_REVIEWS)
    return docs, labels


def write_index_table(path: Path, columns: list[list[int]]) -> Path:
    """Write a header + ``row,fold0,fold1,...`` table like the fold generator does."""
    lines = ["," + ",".join(str(i) for i in range(len(columns)))]
    n_rows = max(len(c) for c in columns)
    for row in range(n_rows):
        cells = [str(c[row]) if row < len(c) else "" for c in columns]
        lines.append(f"{row}," + ",".join(cells))
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def write_class_dir(class_dir: Path, list_name: str, texts: list[str], prefix: str) -> None:
    class_dir.mkdir(parents=True)
    listing = []
    for i, text in enumerate(texts):
        name = f"cv{i:03d}_{prefix}.txt"
        # Split each review over two lines to mirror the wrapped corpus files
        half = len(text) // 2
        (class_dir / name).write_text(text[:half] + "\n" + text[half:] + "\n", encoding="utf-8")
        listing.append(f"-rw-r--r-- 1 critic {len(text)} {name}")
    (class_dir / list_name).write_text("\n".join(listing) + "\n", encoding="utf-8")


@pytest.fixture
def corpus_dir(tmp_path: Path) -> Path:
    """A miniature txt_sentoken tree with stop-words and two folds of indices.

    Documents 0-3 are positive, 4-7 negative. Fold 0 tests on {0, 1, 4, 5};
    fold 1 tests on {2, 3, 6, 7}.
    """
    root = tmp_path / "txt_sentoken"
    write_class_dir(root / "pos", "list_pos.txt", POSITIVE_REVIEWS, "pos")
    write_class_dir(root / "neg", "list_neg.txt", NEGATIVE_REVIEWS, "neg")
    (root / "scikit_stopw.txt").write_text("\n".join(STOP_WORDS) + "\n", encoding="utf-8")
    write_index_table(root / "train_indexes.txt", [[2, 3, 6, 7], [0, 1, 4, 5]])
    write_index_table(root / "test_indexes.txt", [[0, 1, 4, 5], [2, 3, 6, 7]])
    return root
