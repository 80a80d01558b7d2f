"""Data models for sentiment classification and cross-validation."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path


class Label(IntEnum):
    """Sentiment class labels. Plain ``0``/``1`` ints compare equal."""

    NEGATIVE = 0
    POSITIVE = 1

    @property
    def display_name(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class Fold:
    """One train/test partition of the corpus.

    Indices are 0-based positions in the full corpus and label arrays,
    not positions within the fold.
    """

    train_indices: tuple[int, ...]
    test_indices: tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "train_indices", tuple(self.train_indices))
        object.__setattr__(self, "test_indices", tuple(self.test_indices))

    @property
    def is_disjoint(self) -> bool:
        return not set(self.train_indices) & set(self.test_indices)


@dataclass
class Corpus:
    """An ordered set of labelled documents: positives first, then negatives."""

    documents: list[str]
    labels: list[int]
    paths: list[Path] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if len(self.documents) != len(self.labels):
            raise ValueError(
                f"documents ({len(self.documents)}) and labels ({len(self.labels)}) "
                "must have same length"
            )

    def __len__(self) -> int:
        return len(self.documents)

    @property
    def positive_count(self) -> int:
        return sum(1 for label in self.labels if label == Label.POSITIVE)

    @property
    def negative_count(self) -> int:
        return sum(1 for label in self.labels if label == Label.NEGATIVE)


@dataclass
class ClassModel:
    """Trained parameters for a single class.

    Attributes:
        label: The class these parameters describe.
        log_likelihoods: Smoothed ``log P(token | class)`` for every
            vocabulary token.
        log_prior: ``log P(class)``; ``-inf`` if the class had no
            training documents.
        token_total: Sum of class counts over vocabulary tokens (the
            first term of the smoothing denominator).
        document_count: Number of training documents in the class.
    """

    label: int
    log_likelihoods: dict[str, float] = field(default_factory=dict, repr=False)
    log_prior: float = 0.0
    token_total: int = 0
    document_count: int = 0

    @property
    def is_empty(self) -> bool:
        return self.document_count == 0


@dataclass
class FoldResult:
    """Outcome of evaluating one cross-validation fold."""

    fold_number: int
    accuracy: float
    train_size: int = 0
    test_size: int = 0
    vocabulary_size: int = 0
    metrics: dict = field(default_factory=dict, repr=False)

    def to_dict(self) -> dict:
        return {
            "fold": self.fold_number,
            "accuracy": round(self.accuracy, 4),
            "train_size": self.train_size,
            "test_size": self.test_size,
            "vocabulary_size": self.vocabulary_size,
            "metrics": self.metrics,
        }


@dataclass
class CrossValidationReport:
    """Per-fold results in fold order, with summary statistics."""

    folds: list[FoldResult] = field(default_factory=list)

    @property
    def accuracies(self) -> list[float]:
        return [f.accuracy for f in self.folds]

    @property
    def mean_accuracy(self) -> float:
        if not self.folds:
            return 0.0
        return sum(self.accuracies) / len(self.folds)

    @property
    def std_accuracy(self) -> float:
        """Population standard deviation of fold accuracies."""
        if not self.folds:
            return 0.0
        mean = self.mean_accuracy
        return math.sqrt(sum((a - mean) ** 2 for a in self.accuracies) / len(self.folds))

    @property
    def min_accuracy(self) -> float:
        return min(self.accuracies) if self.folds else 0.0

    @property
    def max_accuracy(self) -> float:
        return max(self.accuracies) if self.folds else 0.0

    def to_dict(self) -> dict:
        return {
            "folds": [f.to_dict() for f in self.folds],
            "mean_accuracy": round(self.mean_accuracy, 4),
            "std_accuracy": round(self.std_accuracy, 4),
            "min_accuracy": round(self.min_accuracy, 4),
            "max_accuracy": round(self.max_accuracy, 4),
        }
