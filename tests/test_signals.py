"""
Tests for the signal deriver and the metrics aggregator.
"""

import pytest

from calibrator.services.calibration_engine import MetricsAggregator, SignalDeriver


@pytest.fixture
def deriver():
    return SignalDeriver()


@pytest.fixture
def aggregator():
    return MetricsAggregator()


class TestSignalDeriver:
    """Test derive() feature extraction."""

    def test_hello_world(self, deriver):
        """Reference example: length includes the period."""
        derived = deriver.derive("Hello world.")
        assert derived.as_vector() == [12, 2, 1, 0]

    def test_word_count_collapses_whitespace_runs(self, deriver):
        derived = deriver.derive("  one \t two\n\nthree   ")
        assert derived.word_count == 3
        assert derived.text_length == len("  one \t two\n\nthree   ")

    def test_sentence_count_splits_on_terminator_runs(self, deriver):
        derived = deriver.derive("Really?! Yes. No... Maybe!")
        assert derived.sentence_count == 4

    def test_text_without_terminator_is_one_sentence(self, deriver):
        assert deriver.derive("no punctuation here").sentence_count == 1

    def test_only_terminators_gives_zero_sentences(self, deriver):
        derived = deriver.derive("... !!! ??")
        assert derived.sentence_count == 0
        assert derived.word_count == 3

    def test_empty_text(self, deriver):
        assert deriver.derive("").as_vector() == [0, 0, 0, 0]

    def test_sentiment_lexicons(self, deriver):
        """Positive and negative words cancel; matching is case-insensitive."""
        assert deriver.derive("GOOD clear Success").sentiment_score == 3
        assert deriver.derive("bad confused fail error blocked").sentiment_score == -5
        assert deriver.derive("good but blocked").sentiment_score == 0

    def test_sentiment_requires_exact_match(self, deriver):
        """Punctuation and inflections prevent a lexicon match."""
        assert deriver.derive("good. readiness failing errors").sentiment_score == 0

    def test_deterministic(self, deriver):
        text = "We are ready. Nothing is blocked!"
        assert deriver.derive(text) == deriver.derive(text)


class TestMetricsAggregator:
    """Test aggregate() summary statistics."""

    def test_reference_vector(self, aggregator):
        metrics = aggregator.aggregate([10, 20, 30, 12, 2, 1, 0])
        assert metrics.min == 0
        assert metrics.max == 30
        assert metrics.mean == 10.71
        assert metrics.count == 7

    def test_negative_values_flow_into_min(self, aggregator):
        metrics = aggregator.aggregate([10, 20, 30, 5, 1, 1, -3])
        assert metrics.min == -3
        assert metrics.max == 30

    def test_all_negative(self, aggregator):
        metrics = aggregator.aggregate([-5, -2, -9])
        assert metrics.min == -9
        assert metrics.max == -2
        assert metrics.mean == pytest.approx(-5.33)

    def test_mean_between_min_and_max(self, aggregator):
        for signals in ([1], [3, 3, 3], [0.5, 100, -7, 2.25], [1, 2]):
            metrics = aggregator.aggregate(signals)
            assert metrics.count == len(signals)
            assert metrics.min <= metrics.mean <= metrics.max

    def test_single_value(self, aggregator):
        metrics = aggregator.aggregate([42])
        assert (metrics.min, metrics.max, metrics.mean, metrics.count) == (42, 42, 42, 1)

    def test_empty_is_rejected(self, aggregator):
        with pytest.raises(ValueError):
            aggregator.aggregate([])

    def test_values_near_float_limit_keep_mean_finite(self, aggregator):
        """Summing first would overflow to inf; the mean must stay within bounds."""
        metrics = aggregator.aggregate([1e308, 1e308])
        assert metrics.mean == 1e308
        assert metrics.min <= metrics.mean <= metrics.max

        metrics = aggregator.aggregate([1e308, 1e308, -1e308, 0])
        assert metrics.mean == pytest.approx(2.5e307)
        assert metrics.min <= metrics.mean <= metrics.max
