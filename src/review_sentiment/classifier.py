"""Multinomial Naive Bayes for binary sentiment classification.

Implements the algorithm described in Jurafsky & Martin, *Speech and
Language Processing*, over plain dict-based term counts:

- Vocabulary construction (term frequencies, stop-words removed)
- Per-class Laplace-smoothed log-likelihoods and log-priors
- Log-space scoring and arg-max prediction
- Accuracy, precision/recall/F1 and confusion-matrix evaluation
- Most informative features per class

All scoring stays in log space; probabilities are never exponentiated
back, so long reviews cannot underflow.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from collections.abc import Collection, Sequence
from dataclasses import dataclass, field

from .exceptions import ConfigurationError
from .models import ClassModel, Label
from .preprocessing import iter_tokens

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Vocabulary
# ---------------------------------------------------------------------------

def build_vocabulary(
    documents: Sequence[str],
    stop_words: Collection[str],
) -> dict[str, int]:
    """Count every non-stop-word token across ``documents``.

    No frequency pruning and no size cap: every surviving token appears,
    however rare. Iteration order is first-occurrence order.

    Args:
        documents: Raw document strings.
        stop_words: Tokens to discard (a ``StopWordFilter`` or any set).

    Returns:
        Mapping of ``{token: count}``.
    """
    vocabulary: dict[str, int] = {}
    for doc in documents:
        for token in iter_tokens(doc):
            if token in stop_words:
                continue
            key = token.strip()
            if not key:
                continue
            vocabulary[key] = vocabulary.get(key, 0) + 1
    return vocabulary


def select_class_documents(
    documents: Sequence[str],
    labels: Sequence[int],
    target_class: int,
) -> list[str]:
    """Return the documents whose label equals ``target_class``."""
    if len(documents) != len(labels):
        raise ValueError(
            f"documents ({len(documents)}) and labels ({len(labels)}) must have same length"
        )
    return [doc for doc, label in zip(documents, labels) if label == target_class]


# ---------------------------------------------------------------------------
# Training
# ---------------------------------------------------------------------------

def train(
    vocabulary: dict[str, int],
    stop_words: Collection[str],
    train_docs: Sequence[str],
    train_labels: Sequence[int],
    target_class: int,
) -> ClassModel:
    """Estimate log-likelihoods and the log-prior for one class.

    For every token ``w`` of the (global) vocabulary ``V``::

        log P(w | c) = log((count(w, c) + 1) / (sum_{v in V} count(v, c) + |V|))

    and ``log P(c) = log(N_c / N)``.

    Args:
        vocabulary: Vocabulary built from the training documents.
        stop_words: The same stop-words used to build ``vocabulary``.
        train_docs: Training documents.
        train_labels: Labels parallel to ``train_docs``.
        target_class: The class to estimate (``1`` positive, ``0`` negative).

    Returns:
        ClassModel with a likelihood entry for every vocabulary token.
        When the class has no training documents its ``log_prior`` is
        ``-inf`` and it can never be predicted.

    Raises:
        ValueError: If documents and labels have different lengths.
        ConfigurationError: If the training set is empty.
    """
    if not train_docs:
        raise ConfigurationError("Cannot train on an empty training set")

    class_docs = select_class_documents(train_docs, train_labels, target_class)
    class_counts = build_vocabulary(class_docs, stop_words)

    # Only tokens of the global vocabulary contribute to the denominator
    token_total = sum(class_counts.get(token, 0) for token in vocabulary)
    denominator = token_total + len(vocabulary)

    log_likelihoods: dict[str, float] = {}
    for token in vocabulary:
        log_likelihoods[token] = math.log((class_counts.get(token, 0) + 1) / denominator)

    if class_docs:
        log_prior = math.log(len(class_docs) / len(train_docs))
    else:
        logger.warning(
            "No training documents for class %s; it will never be predicted",
            target_class,
        )
        log_prior = -math.inf

    logger.debug(
        "class=%s docs=%d tokens=%d |V|=%d log_prior=%.4f",
        target_class, len(class_docs), token_total, len(vocabulary), log_prior,
    )

    return ClassModel(
        label=target_class,
        log_likelihoods=log_likelihoods,
        log_prior=log_prior,
        token_total=token_total,
        document_count=len(class_docs),
    )


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def score_document(
    document: str,
    vocabulary: dict[str, int],
    stop_words: Collection[str],
    positive: ClassModel,
    negative: ClassModel,
) -> tuple[float, float]:
    """Return unnormalized log posteriors ``(positive, negative)`` for a document.

    Tokens not in the training vocabulary contribute nothing.
    """
    pos_score = positive.log_prior
    neg_score = negative.log_prior

    for token, count in build_vocabulary([document], stop_words).items():
        if token in vocabulary:
            pos_score += count * positive.log_likelihoods[token]
            neg_score += count * negative.log_likelihoods[token]

    return pos_score, neg_score


def predict(
    document: str,
    vocabulary: dict[str, int],
    stop_words: Collection[str],
    positive: ClassModel,
    negative: ClassModel,
) -> int:
    """Predict ``1`` if the positive score is strictly greater, else ``0``."""
    pos_score, neg_score = score_document(document, vocabulary, stop_words, positive, negative)
    return int(Label.POSITIVE) if pos_score > neg_score else int(Label.NEGATIVE)


def predict_all(
    documents: Sequence[str],
    vocabulary: dict[str, int],
    stop_words: Collection[str],
    positive: ClassModel,
    negative: ClassModel,
) -> list[int]:
    return [predict(doc, vocabulary, stop_words, positive, negative) for doc in documents]


def accuracy_score(y_true: Sequence[int], y_pred: Sequence[int]) -> float:
    """Percentage of matching labels, in ``[0, 100]``.

    Raises:
        ValueError: If the sequences have different lengths.
        ConfigurationError: If there are no labels (accuracy is undefined).
    """
    if len(y_true) != len(y_pred):
        raise ValueError("y_true and y_pred must have the same length")
    if not y_true:
        raise ConfigurationError("Accuracy is undefined for an empty test set")
    matches = sum(1 for t, p in zip(y_true, y_pred) if t == p)
    return 100 * matches / len(y_true)


def evaluate(
    vocabulary: dict[str, int],
    stop_words: Collection[str],
    test_docs: Sequence[str],
    test_labels: Sequence[int],
    positive: ClassModel,
    negative: ClassModel,
) -> float:
    """Classify every test document and return accuracy as a percentage.

    Raises:
        ValueError: If documents and labels have different lengths.
        ConfigurationError: If there are no test documents.
    """
    if len(test_docs) != len(test_labels):
        raise ValueError(
            f"test_docs ({len(test_docs)}) and test_labels ({len(test_labels)}) "
            "must have same length"
        )
    if not test_docs:
        raise ConfigurationError("Cannot evaluate a fold with no test documents")

    predictions = predict_all(test_docs, vocabulary, stop_words, positive, negative)
    return accuracy_score(test_labels, predictions)


def most_informative_features(
    positive: ClassModel,
    negative: ClassModel,
    top_n: int = 20,
) -> dict[int, list[tuple[str, float]]]:
    """Return the tokens with the largest log-likelihood ratio for each class.

    Returns:
        ``{1: [(token, ratio), ...], 0: [...]}``, each list sorted by
        descending ratio.
    """
    ratios = [
        (token, positive.log_likelihoods[token] - negative.log_likelihoods[token])
        for token in positive.log_likelihoods
        if token in negative.log_likelihoods
    ]
    by_positive = sorted(ratios, key=lambda x: x[1], reverse=True)[:top_n]
    by_negative = sorted(ratios, key=lambda x: x[1])[:top_n]
    return {
        int(Label.POSITIVE): [(t, round(r, 4)) for t, r in by_positive],
        int(Label.NEGATIVE): [(t, round(-r, 4)) for t, r in by_negative],
    }


# ---------------------------------------------------------------------------
# Evaluation Metrics
# ---------------------------------------------------------------------------

@dataclass
class ClassificationMetrics:
    """Evaluation metrics for a binary classification result.

    Attributes:
        accuracy: Percentage of correct predictions.
        per_class: Precision, recall and F1 per label.
        confusion_matrix: ``{true_label: {predicted_label: count}}``.
        support: Per-label sample counts in the true labels.
    """

    accuracy: float = 0.0
    per_class: dict[int, dict[str, float]] = field(default_factory=dict)
    confusion_matrix: dict[int, dict[int, int]] = field(default_factory=dict)
    support: dict[int, int] = field(default_factory=dict)

    @property
    def macro_f1(self) -> float:
        if not self.per_class:
            return 0.0
        return sum(m["f1"] for m in self.per_class.values()) / len(self.per_class)

    def to_dict(self) -> dict:
        return {
            "accuracy": round(self.accuracy, 4),
            "macro_f1": round(self.macro_f1, 4),
            "per_class": {
                Label(cls).display_name: {k: round(v, 4) for k, v in m.items()}
                for cls, m in self.per_class.items()
            },
            "confusion_matrix": {
                Label(t).display_name: {Label(p).display_name: n for p, n in row.items()}
                for t, row in self.confusion_matrix.items()
            },
        }


def compute_metrics(y_true: Sequence[int], y_pred: Sequence[int]) -> ClassificationMetrics:
    """Compute accuracy, per-class scores and the confusion matrix.

    Both labels always appear in the result, even if absent from the data.
    """
    accuracy = accuracy_score(y_true, y_pred)
    classes = [int(Label.NEGATIVE), int(Label.POSITIVE)]

    cm: dict[int, dict[int, int]] = {c: {c2: 0 for c2 in classes} for c in classes}
    for true, pred in zip(y_true, y_pred):
        cm[int(true)][int(pred)] += 1

    per_class: dict[int, dict[str, float]] = {}
    for cls in classes:
        tp = cm[cls][cls]
        fp = sum(cm[other][cls] for other in classes if other != cls)
        fn = sum(cm[cls][other] for other in classes if other != cls)

        precision = tp / (tp + fp) if (tp + fp) > 0 else 0.0
        recall = tp / (tp + fn) if (tp + fn) > 0 else 0.0
        f1 = (
            2 * precision * recall / (precision + recall)
            if (precision + recall) > 0
            else 0.0
        )
        per_class[cls] = {"precision": precision, "recall": recall, "f1": f1}

    support = Counter(int(t) for t in y_true)

    return ClassificationMetrics(
        accuracy=accuracy,
        per_class=per_class,
        confusion_matrix=cm,
        support={c: support.get(c, 0) for c in classes},
    )
