"""Review Sentiment -- Multinomial Naive Bayes for movie review polarity."""

__version__ = "0.1.0"

from .classifier import (
    ClassificationMetrics,
    accuracy_score,
    build_vocabulary,
    compute_metrics,
    evaluate,
    most_informative_features,
    predict,
    score_document,
    select_class_documents,
    train,
)
from .config import Settings
from .crossval import cross_validate, run_fold, select_fold, stratified_k_fold
from .exceptions import ConfigurationError, LoaderError
from .loaders import (
    load_corpus,
    load_document,
    load_fold_indices,
    load_stop_words,
    write_vocabulary,
)
from .models import ClassModel, Corpus, CrossValidationReport, Fold, FoldResult, Label
from .preprocessing import StopWordFilter, iter_tokens, tokenize

__all__ = [
    # Models
    "Label",
    "Fold",
    "Corpus",
    "ClassModel",
    "FoldResult",
    "CrossValidationReport",
    # Errors
    "LoaderError",
    "ConfigurationError",
    # Preprocessing
    "tokenize",
    "iter_tokens",
    "StopWordFilter",
    # Naive Bayes
    "build_vocabulary",
    "select_class_documents",
    "train",
    "score_document",
    "predict",
    "evaluate",
    "accuracy_score",
    "most_informative_features",
    "ClassificationMetrics",
    "compute_metrics",
    # Cross-validation
    "cross_validate",
    "run_fold",
    "select_fold",
    "stratified_k_fold",
    # I/O
    "load_corpus",
    "load_document",
    "load_stop_words",
    "load_fold_indices",
    "write_vocabulary",
    # Config
    "Settings",
]
