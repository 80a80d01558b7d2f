"""Command-line interface for review-sentiment.

Provides ``crossval``, ``classify`` and ``tokenize`` commands with rich
terminal output using the ``click`` and ``rich`` libraries.

Usage::

    review-sentiment crossval txt_sentoken
    review-sentiment crossval txt_sentoken --folds 5 --output json
    review-sentiment classify txt_sentoken "A wonderful, moving film."
    review-sentiment tokenize "Wouldn't stop, this movie was GREAT!"

Exit codes: 0 on success, 1 for configuration or computation errors,
2 when an input file cannot be loaded.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .classifier import build_vocabulary, most_informative_features, score_document, train
from .config import Settings
from .crossval import cross_validate, stratified_k_fold
from .exceptions import ConfigurationError, LoaderError
from .loaders import load_corpus, load_fold_indices, load_stop_words, write_vocabulary
from .models import Corpus, CrossValidationReport, FoldResult, Label
from .preprocessing import StopWordFilter, tokenize

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger("review_sentiment")

EXIT_ERROR = 1
EXIT_LOAD_ERROR = 2


def _configure_logging(level: str) -> None:
    """Route package logs to stderr through rich."""
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=err_console, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))


def _fail(message: str, code: int) -> None:
    err_console.print(f"[bold red]Error:[/] {message}")
    sys.exit(code)


def _accuracy_style(accuracy: float) -> str:
    if accuracy >= 80:
        return "bold green"
    if accuracy >= 65:
        return "bold yellow"
    return "bold red"


@click.group()
@click.version_option(package_name="review-sentiment-nb")
@click.option("--log-level", default=None,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              help="Logging verbosity (default: REVIEW_SENTIMENT_LOG_LEVEL or WARNING).")
@click.option("--env-file", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Read settings from this .env file.")
@click.pass_context
def main(ctx: click.Context, log_level: str | None, env_file: Path | None) -> None:
    """🎬 Multinomial Naive Bayes sentiment classifier for movie reviews.

    Trains on positive/negative reviews and reports k-fold
    cross-validation accuracy.
    """
    try:
        settings = Settings.from_env(env_file).with_overrides(log_level=log_level)
    except ConfigurationError as e:
        _fail(str(e), EXIT_ERROR)
    _configure_logging(settings.log_level)
    ctx.obj = settings


# ------------------------------------------------------------------
# Loading helpers
# ------------------------------------------------------------------

def _load_inputs(settings: Settings, explicit_stop_words: bool) -> tuple[Corpus, StopWordFilter]:
    corpus = load_corpus(settings.corpus_dir)
    if not len(corpus):
        raise LoaderError(f"No reviews found under {settings.corpus_dir}")

    stop_path = settings.stop_words_path
    if stop_path is not None and (explicit_stop_words or stop_path.exists()):
        stop_words = load_stop_words(stop_path)
    else:
        logger.warning("No stop-word list found; all tokens are kept")
        stop_words = StopWordFilter()
    return corpus, stop_words


def _load_folds(settings: Settings, corpus: Corpus, explicit_indices: bool):
    train_path = settings.train_indices_path
    test_path = settings.test_indices_path
    if train_path is not None and test_path is not None and (
        explicit_indices or (train_path.exists() and test_path.exists())
    ):
        return load_fold_indices(train_path, test_path, settings.n_splits)
    logger.info("No fold index files; generating %d stratified folds", settings.n_splits)
    return stratified_k_fold(corpus.labels, k=settings.n_splits, seed=settings.seed)


# ------------------------------------------------------------------
# Commands
# ------------------------------------------------------------------

@main.command()
@click.argument("corpus_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--stop-words", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=None, help="Stop-word list (default: scikit_stopw.txt in CORPUS_DIR).")
@click.option("--train-indices", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=None, help="Train index table (default: train_indexes.txt).")
@click.option("--test-indices", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=None, help="Test index table (default: test_indexes.txt).")
@click.option("--folds", "-k", type=int, default=None, help="Number of folds.")
@click.option("--seed", type=int, default=None,
              help="Seed for generated folds (ignored with index files).")
@click.option("--metrics", is_flag=True, help="Also report precision, recall and F1.")
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
@click.option("--dump-vocab", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Write each fold's vocabulary to DIR/vocab_fold{i}.txt.")
@click.pass_obj
def crossval(
    settings: Settings,
    corpus_dir: Path,
    stop_words: Path | None,
    train_indices: Path | None,
    test_indices: Path | None,
    folds: int | None,
    seed: int | None,
    metrics: bool,
    output: str,
    dump_vocab: Path | None,
) -> None:
    """Run k-fold cross-validation and print the accuracy of each fold.

    Example: review-sentiment crossval txt_sentoken --folds 10
    """
    if (train_indices is None) != (test_indices is None):
        _fail("--train-indices and --test-indices must be given together", EXIT_ERROR)

    try:
        settings = settings.with_overrides(
            corpus_dir=corpus_dir,
            stop_words_file=str(stop_words.resolve()) if stop_words else None,
            train_indices_file=str(train_indices.resolve()) if train_indices else None,
            test_indices_file=str(test_indices.resolve()) if test_indices else None,
            n_splits=folds,
            seed=seed,
        )
    except ConfigurationError as e:
        _fail(str(e), EXIT_ERROR)

    try:
        corpus, stop_filter = _load_inputs(settings, explicit_stop_words=stop_words is not None)
        fold_list = _load_folds(settings, corpus, explicit_indices=train_indices is not None)
    except LoaderError as e:
        _fail(f"Cannot load input: {e}", EXIT_LOAD_ERROR)
    except ConfigurationError as e:
        _fail(str(e), EXIT_ERROR)

    def on_fold(result: FoldResult) -> None:
        if output == "rich":
            console.print(
                f"Accuracy for fold {result.fold_number} is: "
                f"[{_accuracy_style(result.accuracy)}]{result.accuracy}%[/]"
            )

    def on_vocabulary(fold_number: int, vocabulary: dict[str, int]) -> None:
        write_vocabulary(vocabulary, dump_vocab / f"vocab_fold{fold_number}.txt")

    if output == "rich":
        console.print(Panel(
            f"[bold]{settings.corpus_dir}[/]\n"
            f"Reviews: {len(corpus)} ({corpus.positive_count} positive, "
            f"{corpus.negative_count} negative) | "
            f"Stop-words: {len(stop_filter)} | Folds: {len(fold_list)}",
            title="🎬 Multinomial Naive Bayes",
            border_style="blue",
        ))

    try:
        report = cross_validate(
            corpus.documents,
            corpus.labels,
            stop_filter,
            fold_list,
            with_metrics=metrics,
            on_fold=on_fold,
            on_vocabulary=on_vocabulary if dump_vocab else None,
        )
    except LoaderError as e:
        _fail(str(e), EXIT_LOAD_ERROR)
    except IndexError as e:
        _fail(f"Fold index out of range for a corpus of {len(corpus)} reviews ({e})", EXIT_ERROR)
    except ValueError as e:
        _fail(str(e), EXIT_ERROR)

    if output == "json":
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        _render_report(report, metrics)


@main.command()
@click.argument("corpus_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument("texts", nargs=-1, required=True)
@click.option("--stop-words", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=None, help="Stop-word list (default: scikit_stopw.txt in CORPUS_DIR).")
@click.option("--top", type=int, default=0, help="Also show the N most informative tokens.")
@click.pass_obj
def classify(
    settings: Settings,
    corpus_dir: Path,
    texts: tuple[str, ...],
    stop_words: Path | None,
    top: int,
) -> None:
    """Train on the whole corpus and classify each TEXT.

    Nothing is saved; the model lives only for this command.

    Example: review-sentiment classify txt_sentoken "A wonderful film."
    """
    settings = settings.with_overrides(
        corpus_dir=corpus_dir,
        stop_words_file=str(stop_words.resolve()) if stop_words else None,
    )
    try:
        corpus, stop_filter = _load_inputs(settings, explicit_stop_words=stop_words is not None)
    except LoaderError as e:
        _fail(f"Cannot load input: {e}", EXIT_LOAD_ERROR)

    with console.status("[bold blue]Training...", spinner="dots"):
        vocabulary = build_vocabulary(corpus.documents, stop_filter)
        positive = train(vocabulary, stop_filter, corpus.documents, corpus.labels, Label.POSITIVE)
        negative = train(vocabulary, stop_filter, corpus.documents, corpus.labels, Label.NEGATIVE)

    table = Table(title="Predictions", show_lines=True)
    table.add_column("#", justify="right", width=4)
    table.add_column("Text", style="white", max_width=60)
    table.add_column("Label", justify="center", width=10)
    table.add_column("Positive", justify="right")
    table.add_column("Negative", justify="right")

    for i, text in enumerate(texts, 1):
        pos_score, neg_score = score_document(text, vocabulary, stop_filter, positive, negative)
        label = Label.POSITIVE if pos_score > neg_score else Label.NEGATIVE
        style = "bold green" if label == Label.POSITIVE else "bold red"
        excerpt = escape(text[:120]) + ("..." if len(text) > 120 else "")
        table.add_row(
            str(i), excerpt, f"[{style}]{label.display_name}[/]",
            f"{pos_score:.2f}", f"{neg_score:.2f}",
        )

    console.print(table)

    if top > 0:
        features = most_informative_features(positive, negative, top_n=top)
        for label in (Label.POSITIVE, Label.NEGATIVE):
            tokens = ", ".join(t for t, _ in features[int(label)])
            console.print(f"[bold]{label.display_name}[/]: {tokens}")


@main.command(name="tokenize")
@click.argument("text")
def tokenize_command(text: str) -> None:
    """Print the tokens extracted from TEXT, one per line."""
    for token in tokenize(text):
        click.echo(token)


# ------------------------------------------------------------------
# Rich rendering helpers
# ------------------------------------------------------------------

def _render_report(report: CrossValidationReport, show_metrics: bool) -> None:
    """Render the per-fold summary table."""
    console.print()
    table = Table(title="Cross-Validation Summary")
    table.add_column("Fold", justify="right", width=6)
    table.add_column("Train", justify="right")
    table.add_column("Test", justify="right")
    table.add_column("|V|", justify="right")
    table.add_column("Accuracy", justify="right")
    if show_metrics:
        table.add_column("Macro F1", justify="right")

    for fold in report.folds:
        row = [
            str(fold.fold_number),
            str(fold.train_size),
            str(fold.test_size),
            str(fold.vocabulary_size),
            f"[{_accuracy_style(fold.accuracy)}]{fold.accuracy:.2f}%[/]",
        ]
        if show_metrics:
            row.append(f"{fold.metrics.get('macro_f1', 0.0):.4f}")
        table.add_row(*row)

    console.print(table)
    console.print(
        f"Mean accuracy: [{_accuracy_style(report.mean_accuracy)}]"
        f"{report.mean_accuracy:.2f}%[/] "
        f"(std {report.std_accuracy:.2f}, min {report.min_accuracy:.2f}, "
        f"max {report.max_accuracy:.2f})"
    )
    console.print()


if __name__ == "__main__":
    main()
