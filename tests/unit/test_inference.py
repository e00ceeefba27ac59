"""
Unit Tests for Inference Module

Tests for normalization, the distance classifier and ensemble voting.
"""
import pytest
import numpy as np

from medrisk.core.inference import (
    FeatureRange, normalize, normalize_vector, normalize_matrix,
    DistanceClassifier, DistanceMetric, ClassifierVerdict,
    EnsembleVoter, ModelVote,
)
from medrisk.core.inference.knn import EMPTY_VERDICT, compute_distances
from medrisk.exceptions import MalformedInputError


# Fixtures
@pytest.fixture
def five_of_seven():
    """Seven 1-D neighbors, five labeled positive."""
    features = np.array([[0.0], [0.1], [0.2], [0.3], [0.4], [0.5], [0.6]])
    labels = np.array([1, 1, 1, 1, 1, 0, 0])
    return features, labels


@pytest.fixture
def voter() -> EnsembleVoter:
    return EnsembleVoter()


class TestNormalization:
    """Tests for min-max normalization."""

    def test_normalize_midpoint(self):
        """Test value halfway through the range."""
        assert normalize(5, 0, 10) == 0.5

    def test_degenerate_range_is_zero(self):
        """Test max == min yields exactly 0."""
        assert normalize(42, 3, 3) == 0.0

    def test_out_of_range_not_clamped(self):
        """Test values outside the range map outside [0, 1]."""
        assert normalize(15, 0, 10) == pytest.approx(1.5)
        assert normalize(-5, 0, 10) == pytest.approx(-0.5)

    def test_normalize_vector(self):
        """Test elementwise vector normalization."""
        ranges = [FeatureRange(0, 10), FeatureRange(100, 200), FeatureRange(1, 1)]
        result = normalize_vector([5, 150, 7], ranges)
        np.testing.assert_allclose(result, [0.5, 0.5, 0.0])

    def test_vector_length_mismatch(self):
        """Test mismatched vector and range table is rejected."""
        with pytest.raises(MalformedInputError):
            normalize_vector([1, 2], [FeatureRange(0, 1)])

    def test_empty_matrix_keeps_width(self):
        """Test empty training matrix normalizes to (0, n_features)."""
        ranges = [FeatureRange(0, 1)] * 3
        assert normalize_matrix(np.empty((0, 3)), ranges).shape == (0, 3)

    def test_matrix_rows(self):
        """Test each matrix row is normalized with the same ranges."""
        ranges = [FeatureRange(0, 10), FeatureRange(0, 100)]
        result = normalize_matrix(np.array([[0, 0], [10, 50]]), ranges)
        np.testing.assert_allclose(result, [[0.0, 0.0], [1.0, 0.5]])


class TestDistanceClassifier:
    """Tests for the KNN classifier."""

    def test_five_of_seven_neighbors(self, five_of_seven):
        """Test 5 positive of 7 neighbors gives prediction 1 at 71%."""
        features, labels = five_of_seven
        verdict = DistanceClassifier(k=7).predict(features, labels, np.array([0.0]))

        assert verdict.prediction == 1
        assert verdict.confidence == 71
        assert verdict.neighbors == 7

    def test_empty_training_set(self):
        """Test empty training set returns the neutral verdict."""
        verdict = DistanceClassifier(k=7).predict(np.empty((0, 2)), np.empty(0, dtype=int), np.array([0.1, 0.2]))
        assert verdict == EMPTY_VERDICT
        assert verdict.to_dict() == {"prediction": 0, "confidence": 50, "neighbors": 0}

    def test_k_clamped_to_training_size(self, five_of_seven):
        """Test k larger than the training set uses every row."""
        features, labels = five_of_seven
        verdict = DistanceClassifier(k=50).predict(features[:3], labels[:3], np.array([0.0]))
        assert verdict.neighbors == 3
        assert verdict.confidence == 100

    def test_vote_tie_goes_to_lowest_label(self):
        """Test a 1-1 vote resolves to label 0."""
        features = np.array([[0.0], [1.0]])
        labels = np.array([1, 0])
        verdict = DistanceClassifier(k=2).predict(features, labels, np.array([0.5]))
        assert verdict.prediction == 0
        assert verdict.confidence == 50

    def test_equidistant_neighbors_keep_training_order(self):
        """Test stable ordering among equal distances."""
        features = np.array([[1.0], [-1.0], [2.0]])
        labels = np.array([0, 1, 1])
        verdict = DistanceClassifier(k=1).predict(features, labels, np.array([0.0]))
        assert verdict.prediction == 0

    def test_manhattan_changes_nearest(self):
        """Test metrics can disagree on the nearest neighbor."""
        features = np.array([[0.6, 0.0], [0.4, 0.4]])
        labels = np.array([0, 1])
        query = np.array([0.0, 0.0])

        euclidean = DistanceClassifier(k=1, metric=DistanceMetric.EUCLIDEAN)
        manhattan = DistanceClassifier(k=1, metric=DistanceMetric.MANHATTAN)

        assert euclidean.predict(features, labels, query).prediction == 1
        assert manhattan.predict(features, labels, query).prediction == 0

    def test_compute_distances(self):
        """Test Euclidean and Manhattan distance values."""
        training = np.array([[3.0, 4.0]])
        query = np.array([0.0, 0.0])
        assert compute_distances(training, query)[0] == pytest.approx(5.0)
        assert compute_distances(training, query, DistanceMetric.MANHATTAN)[0] == pytest.approx(7.0)

    def test_query_shape_mismatch(self, five_of_seven):
        """Test query with the wrong width is rejected."""
        features, labels = five_of_seven
        with pytest.raises(MalformedInputError):
            DistanceClassifier().predict(features, labels, np.array([0.0, 1.0]))

    def test_invalid_k(self):
        """Test k below 1 is rejected at construction."""
        with pytest.raises(ValueError):
            DistanceClassifier(k=0)

    def test_default_name(self):
        """Test generated classifier name."""
        assert DistanceClassifier(k=7).name == "knn_euclidean_k7"
        assert DistanceClassifier(k=9, metric="manhattan").name == "knn_manhattan_k9"

    def test_predict_is_pure(self, five_of_seven):
        """Test repeated calls give identical verdicts."""
        features, labels = five_of_seven
        classifier = DistanceClassifier(k=3)
        first = classifier.predict(features, labels, np.array([0.55]))
        second = classifier.predict(features, labels, np.array([0.55]))
        assert isinstance(first, ClassifierVerdict)
        assert first == second


class TestEnsembleVoter:
    """Tests for ensemble combination."""

    def test_strict_majority_averages_confidence(self, voter):
        """Test majority side wins with mean confidence."""
        verdict = voter.combine([
            ModelVote("a", 1, 80),
            ModelVote("b", 1, 60),
            ModelVote("c", 0, 90),
        ])
        assert verdict.prediction == 1
        assert verdict.confidence == 70
        assert verdict.agreement == 2
        assert not verdict.unanimous

    def test_majority_mean_rounds_half_up(self, voter):
        """Test 71.5 rounds to 72."""
        verdict = voter.combine([
            ModelVote("a", 1, 71),
            ModelVote("b", 1, 72),
            ModelVote("c", 0, 99),
        ])
        assert verdict.confidence == 72

    def test_unanimous(self, voter):
        """Test unanimous negative vote."""
        verdict = voter.combine([
            ModelVote("a", 0, 70),
            ModelVote("b", 0, 75),
            ModelVote("c", 0, 80),
        ])
        assert verdict.prediction == 0
        assert verdict.confidence == 75
        assert verdict.unanimous

    def test_split_vote_uses_most_confident(self, voter):
        """Test split vote follows the single most confident voter."""
        verdict = voter.combine([ModelVote("a", 1, 90), ModelVote("b", 0, 85)])
        assert verdict.prediction == 1
        assert verdict.confidence == 90

        verdict = voter.combine([ModelVote("a", 1, 60), ModelVote("b", 0, 85)])
        assert verdict.prediction == 0
        assert verdict.confidence == 85

    def test_split_vote_equal_confidence_is_negative(self, voter):
        """Test fully tied split resolves to label 0."""
        verdict = voter.combine([ModelVote("a", 1, 70), ModelVote("b", 0, 70)])
        assert verdict.prediction == 0
        assert verdict.confidence == 70

    def test_requires_two_votes(self, voter):
        """Test a single vote is rejected."""
        with pytest.raises(ValueError):
            voter.combine([ModelVote("a", 1, 70)])

    def test_votes_preserved(self, voter):
        """Test raw votes are kept in the verdict."""
        votes = [ModelVote("a", 1, 70), ModelVote("b", 1, 80)]
        data = voter.combine(votes).to_dict()
        assert data["votes"] == [v.to_dict() for v in votes]
        assert data["unanimous"] is True
