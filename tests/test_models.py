"""Tests for data models."""

from __future__ import annotations

import math

import pytest

from review_sentiment.models import (
    ClassModel,
    Corpus,
    CrossValidationReport,
    Fold,
    FoldResult,
    Label,
)


class TestLabel:
    def test_values(self):
        assert Label.POSITIVE == 1
        assert Label.NEGATIVE == 0

    def test_display_name(self):
        assert Label.POSITIVE.display_name == "positive"
        assert Label(0).display_name == "negative"


class TestFold:
    def test_indices_become_tuples(self):
        fold = Fold([1, 2], [0])
        assert fold.train_indices == (1, 2)
        assert fold.test_indices == (0,)

    def test_is_hashable_and_comparable(self):
        assert Fold([1], [0]) == Fold((1,), (0,))
        assert len({Fold([1], [0]), Fold([1], [0])}) == 1

    def test_is_disjoint(self):
        assert Fold([1, 2], [0]).is_disjoint
        assert not Fold([0, 1], [1]).is_disjoint


class TestCorpus:
    def test_counts(self):
        corpus = Corpus(["a", "b", "c"], [1, 0, 0])
        assert len(corpus) == 3
        assert corpus.positive_count == 1
        assert corpus.negative_count == 2

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match="same length"):
            Corpus(["a"], [1, 0])


class TestClassModel:
    def test_is_empty(self):
        assert ClassModel(label=0, log_prior=-math.inf).is_empty
        assert not ClassModel(label=1, document_count=3).is_empty


class TestCrossValidationReport:
    @pytest.fixture
    def report(self) -> CrossValidationReport:
        return CrossValidationReport(folds=[
            FoldResult(0, 80.0, train_size=9, test_size=1),
            FoldResult(1, 90.0),
            FoldResult(2, 100.0),
        ])

    def test_statistics(self, report):
        assert report.accuracies == [80.0, 90.0, 100.0]
        assert report.mean_accuracy == pytest.approx(90.0)
        assert report.std_accuracy == pytest.approx(math.sqrt(200 / 3))
        assert report.min_accuracy == 80.0
        assert report.max_accuracy == 100.0

    def test_empty_report(self):
        report = CrossValidationReport()
        assert report.mean_accuracy == 0.0
        assert report.std_accuracy == 0.0
        assert report.min_accuracy == 0.0
        assert report.max_accuracy == 0.0

    def test_to_dict(self, report):
        data = report.to_dict()
        assert data["mean_accuracy"] == 90.0
        assert data["folds"][0] == {
            "fold": 0,
            "accuracy": 80.0,
            "train_size": 9,
            "test_size": 1,
            "vocabulary_size": 0,
            "metrics": {},
        }
