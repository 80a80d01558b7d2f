"""K-fold cross-validation driver.

Each fold is independent: the vocabulary, both class models and the
accuracy are computed from scratch and discarded after the fold. Folds
run sequentially and results come back in fold order.
"""

from __future__ import annotations

import logging
import random
from collections import defaultdict
from collections.abc import Callable, Collection, Iterator, Sequence

from .classifier import (
    build_vocabulary,
    compute_metrics,
    evaluate,
    predict_all,
    train,
)
from .exceptions import ConfigurationError
from .models import CrossValidationReport, Fold, FoldResult, Label

logger = logging.getLogger(__name__)


def select_fold(
    documents: Sequence[str],
    labels: Sequence[int],
    fold: Fold,
) -> tuple[list[str], list[str], list[int], list[int]]:
    """Pick train/test documents and labels by corpus index.

    Indices are positions in ``documents``. Negative values do not wrap
    around from the end.

    Returns:
        ``(train_docs, test_docs, train_labels, test_labels)``.

    Raises:
        IndexError: If any index is negative or past the end of the corpus.
    """
    _check_indices(fold.train_indices, len(documents))
    _check_indices(fold.test_indices, len(documents))
    train_docs = [documents[i] for i in fold.train_indices]
    test_docs = [documents[i] for i in fold.test_indices]
    train_labels = [labels[i] for i in fold.train_indices]
    test_labels = [labels[i] for i in fold.test_indices]
    return train_docs, test_docs, train_labels, test_labels


def _check_indices(indices: Sequence[int], size: int) -> None:
    for i in indices:
        if i < 0 or i >= size:
            raise IndexError(f"index {i} is outside 0..{size - 1}")


def run_fold(
    fold_number: int,
    documents: Sequence[str],
    labels: Sequence[int],
    stop_words: Collection[str],
    fold: Fold,
    with_metrics: bool = False,
    on_vocabulary: Callable[[int, dict[str, int]], None] | None = None,
) -> FoldResult:
    """Train on the fold's training set and evaluate on its test set.

    Args:
        fold_number: 0-based fold number used in the result.
        documents: Full corpus.
        labels: Labels parallel to ``documents``.
        stop_words: Tokens excluded everywhere.
        fold: Index partition for this fold.
        with_metrics: Also compute precision/recall/F1 and the confusion
            matrix into ``FoldResult.metrics``.
        on_vocabulary: Called with ``(fold_number, vocabulary)`` once the
            fold's vocabulary is built.
    """
    train_docs, test_docs, train_labels, test_labels = select_fold(documents, labels, fold)

    vocabulary = build_vocabulary(train_docs, stop_words)
    logger.debug("fold %d: %d train docs, |V|=%d", fold_number, len(train_docs), len(vocabulary))
    if on_vocabulary is not None:
        on_vocabulary(fold_number, vocabulary)

    positive = train(vocabulary, stop_words, train_docs, train_labels, Label.POSITIVE)
    negative = train(vocabulary, stop_words, train_docs, train_labels, Label.NEGATIVE)

    accuracy = evaluate(vocabulary, stop_words, test_docs, test_labels, positive, negative)

    metrics: dict = {}
    if with_metrics:
        predictions = predict_all(test_docs, vocabulary, stop_words, positive, negative)
        metrics = compute_metrics(test_labels, predictions).to_dict()

    logger.info("fold %d accuracy %.2f%%", fold_number, accuracy)

    return FoldResult(
        fold_number=fold_number,
        accuracy=accuracy,
        train_size=len(train_docs),
        test_size=len(test_docs),
        vocabulary_size=len(vocabulary),
        metrics=metrics,
    )


def iter_folds(
    documents: Sequence[str],
    labels: Sequence[int],
    stop_words: Collection[str],
    folds: Sequence[Fold],
    with_metrics: bool = False,
    on_vocabulary: Callable[[int, dict[str, int]], None] | None = None,
) -> Iterator[FoldResult]:
    """Yield a ``FoldResult`` per fold, in fold order, as each completes."""
    if len(documents) != len(labels):
        raise ValueError(
            f"documents ({len(documents)}) and labels ({len(labels)}) must have same length"
        )
    for fold_number, fold in enumerate(folds):
        yield run_fold(
            fold_number,
            documents,
            labels,
            stop_words,
            fold,
            with_metrics=with_metrics,
            on_vocabulary=on_vocabulary,
        )


def cross_validate(
    documents: Sequence[str],
    labels: Sequence[int],
    stop_words: Collection[str],
    folds: Sequence[Fold],
    with_metrics: bool = False,
    on_fold: Callable[[FoldResult], None] | None = None,
    on_vocabulary: Callable[[int, dict[str, int]], None] | None = None,
) -> CrossValidationReport:
    """Run every fold and collect the results.

    Args:
        documents: Full corpus.
        labels: Labels parallel to ``documents``.
        stop_words: Tokens excluded everywhere.
        folds: One ``Fold`` per cross-validation iteration.
        with_metrics: Attach precision/recall/F1 to each result.
        on_fold: Called with each ``FoldResult`` as soon as it is ready.
        on_vocabulary: Called with each fold's vocabulary.

    Returns:
        CrossValidationReport with results in fold order.
    """
    if not folds:
        raise ConfigurationError("At least one fold is required")

    report = CrossValidationReport()
    for result in iter_folds(
        documents, labels, stop_words, folds,
        with_metrics=with_metrics, on_vocabulary=on_vocabulary,
    ):
        report.folds.append(result)
        if on_fold is not None:
            on_fold(result)
    return report


def stratified_k_fold(
    labels: Sequence[int],
    k: int = 10,
    seed: int = 42,
) -> list[Fold]:
    """Generate stratified k-fold train/test index splits.

    Indices are shuffled within each class and dealt round-robin to folds,
    so each test set keeps roughly the corpus's class balance.

    Args:
        labels: Class labels of the full corpus.
        k: Number of folds.
        seed: Random seed for reproducibility.

    Raises:
        ConfigurationError: If ``k < 2`` or ``k`` exceeds the corpus size.
    """
    if k < 2:
        raise ConfigurationError(f"Need at least 2 folds, got {k}")
    if k > len(labels):
        raise ConfigurationError(f"Cannot make {k} folds from {len(labels)} documents")

    rng = random.Random(seed)

    class_indices: dict[int, list[int]] = defaultdict(list)
    for idx, label in enumerate(labels):
        class_indices[label].append(idx)

    for cls in sorted(class_indices):
        rng.shuffle(class_indices[cls])

    fold_assignments: list[int] = [0] * len(labels)
    offset = 0
    for cls in sorted(class_indices):
        for i, idx in enumerate(class_indices[cls]):
            fold_assignments[idx] = (i + offset) % k
        offset += len(class_indices[cls])

    folds: list[Fold] = []
    for fold_idx in range(k):
        test_indices = [i for i, f in enumerate(fold_assignments) if f == fold_idx]
        train_indices = [i for i, f in enumerate(fold_assignments) if f != fold_idx]
        folds.append(Fold(train_indices, test_indices))

    return folds
