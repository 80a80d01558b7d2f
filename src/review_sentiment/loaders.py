"""Loaders for the review corpus, stop-word list and fold index files.

The corpus follows the polarity dataset layout::

    txt_sentoken/
        pos/list_pos.txt   pos/cv000_29590.txt ...
        neg/list_neg.txt   neg/cv000_29416.txt ...
        scikit_stopw.txt
        train_indexes.txt
        test_indexes.txt

Labels are assigned by position: every positive review is loaded before
any negative one, and the label list is built from the same two file
lists, so documents and labels cannot drift apart.

Every failure here raises :class:`~review_sentiment.exceptions.LoaderError`.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Mapping
from pathlib import Path

from .exceptions import LoaderError
from .models import Corpus, Fold, Label
from .preprocessing import StopWordFilter

logger = logging.getLogger(__name__)

# Field of a listing line holding the review file name
_LIST_FILENAME_FIELD = 4


def _require_file(path: Path) -> None:
    if not path.exists():
        raise LoaderError(f"File not found: {path}")
    if not path.is_file():
        raise LoaderError(f"Not a file: {path}")


def _read_text(path: Path) -> str:
    _require_file(path)
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise LoaderError(f"Cannot read {path}: {exc}") from exc


# ---------------------------------------------------------------------------
# Corpus
# ---------------------------------------------------------------------------

def load_document(path: str | Path) -> str:
    """Read a review, joining its lines with no separator.

    Line breaks are dropped rather than replaced with spaces, so a word
    split across lines is rejoined into one token.
    """
    return "".join(_read_text(Path(path)).splitlines())


def load_file_list(list_path: str | Path) -> list[Path]:
    """Read a listing file and return the review paths it names.

    Each non-empty line is whitespace-separated; the fifth field is the
    review's file name, relative to the listing's directory.
    """
    list_path = Path(list_path)
    paths: list[Path] = []
    for line_no, line in enumerate(_read_text(list_path).splitlines(), 1):
        fields = line.split()
        if not fields:
            continue
        if len(fields) <= _LIST_FILENAME_FIELD:
            raise LoaderError(
                f"{list_path}:{line_no}: expected at least {_LIST_FILENAME_FIELD + 1} "
                f"fields, got {len(fields)}"
            )
        paths.append(list_path.parent / fields[_LIST_FILENAME_FIELD])
    return paths


def _class_files(class_dir: Path, list_name: str) -> list[Path]:
    list_path = class_dir / list_name
    if list_path.exists():
        return load_file_list(list_path)
    if not class_dir.is_dir():
        raise LoaderError(f"Directory not found: {class_dir}")
    logger.info("%s not found; using *.txt files in %s", list_name, class_dir)
    return sorted(p for p in class_dir.glob("*.txt") if p.name != list_name)


def load_corpus(
    corpus_dir: str | Path,
    pos_dir: str = "pos",
    neg_dir: str = "neg",
    pos_list: str = "list_pos.txt",
    neg_list: str = "list_neg.txt",
) -> Corpus:
    """Load every positive review, then every negative review.

    Args:
        corpus_dir: Root of the corpus.
        pos_dir: Sub-directory holding positive reviews.
        neg_dir: Sub-directory holding negative reviews.
        pos_list: Listing file inside ``pos_dir``; when missing, the
            directory's ``*.txt`` files are used in sorted order.
        neg_list: Listing file inside ``neg_dir``.

    Returns:
        Corpus with labels ``1`` for the positive block and ``0`` for the
        negative block.

    Raises:
        LoaderError: If a directory, listing or review cannot be read.
    """
    root = Path(corpus_dir)
    if not root.is_dir():
        raise LoaderError(f"Corpus directory not found: {root}")

    pos_files = _class_files(root / pos_dir, pos_list)
    neg_files = _class_files(root / neg_dir, neg_list)

    documents = [load_document(p) for p in pos_files]
    documents.extend(load_document(p) for p in neg_files)
    labels = [int(Label.POSITIVE)] * len(pos_files) + [int(Label.NEGATIVE)] * len(neg_files)

    logger.info("Loaded %d positive and %d negative reviews", len(pos_files), len(neg_files))
    return Corpus(documents=documents, labels=labels, paths=pos_files + neg_files)


# ---------------------------------------------------------------------------
# Stop-words
# ---------------------------------------------------------------------------

def load_stop_words(path: str | Path) -> StopWordFilter:
    """Load a stop-word list with one word per line."""
    return StopWordFilter(_read_text(Path(path)).splitlines())


# ---------------------------------------------------------------------------
# Fold indices
# ---------------------------------------------------------------------------

def _load_index_columns(path: Path, n_splits: int) -> list[list[int]]:
    """Read a header + ``index,fold0,fold1,...`` table into per-fold columns."""
    columns: list[list[int]] = [[] for _ in range(n_splits)]
    rows = list(csv.reader(_read_text(path).splitlines()))

    # First row is the header written by the fold generator
    for row_no, row in enumerate(rows[1:], 2):
        if not any(cell.strip() for cell in row):
            continue
        if len(row) < n_splits + 1:
            raise LoaderError(
                f"{path}:{row_no}: expected {n_splits + 1} columns, got {len(row)}"
            )
        for fold_idx in range(n_splits):
            cell = row[fold_idx + 1].strip()
            if not cell:
                continue
            try:
                columns[fold_idx].append(int(cell))
            except ValueError as exc:
                raise LoaderError(
                    f"{path}:{row_no}: invalid index {cell!r} for fold {fold_idx}"
                ) from exc
    return columns


def load_fold_indices(
    train_path: str | Path,
    test_path: str | Path,
    n_splits: int,
) -> list[Fold]:
    """Load precomputed train/test index partitions.

    Both files are comma-separated with one header row. Column 0 is a row
    label; columns ``1..n_splits`` hold the indices of folds
    ``0..n_splits-1``. Empty cells are skipped, so columns may be ragged.

    Raises:
        LoaderError: If a file is missing or malformed.
    """
    if n_splits < 1:
        raise LoaderError(f"n_splits must be positive, got {n_splits}")
    train_columns = _load_index_columns(Path(train_path), n_splits)
    test_columns = _load_index_columns(Path(test_path), n_splits)
    return [Fold(tr, te) for tr, te in zip(train_columns, test_columns)]


# ---------------------------------------------------------------------------
# Vocabulary dump
# ---------------------------------------------------------------------------

def write_vocabulary(vocabulary: Mapping[str, int], path: str | Path) -> Path:
    """Write ``token,count`` lines for inspection. Returns the path written."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            for token, count in vocabulary.items():
                f.write(f"{token},{count}\n")
    except OSError as exc:
        raise LoaderError(f"Cannot write {path}: {exc}") from exc
    return path
