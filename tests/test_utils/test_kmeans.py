"""Tests for scalar k-means."""

import logging

import numpy as np
import pytest
from sklearn.cluster import KMeans

from graylab.utils.kmeans import Feature, cluster


def _features(values):
    return [Feature(v) for v in values]


def test_two_groups():
    features = _features([1, 2, 3, 100, 101, 102])
    centres = cluster(features, 2)
    assert centres == [2, 101]
    assert [f.cluster for f in features] == [0, 0, 0, 1, 1, 1]


def test_iteration_cap(caplog):
    features = _features([1, 2, 3, 100, 101, 102])
    with caplog.at_level(logging.WARNING):
        centres = cluster(features, 2, max_iterations=1)
    assert centres == [1, 61]
    assert "without converging" in caplog.text


def test_single_cluster_is_the_truncated_mean():
    features = _features([3, 8, 10, 20])
    assert cluster(features, 1) == [10]
    assert {f.cluster for f in features} == {0}


def test_negative_mean_truncates_toward_zero():
    features = _features([-7, -6, 10])
    assert cluster(features, 2) == [-6, 10]
    assert [f.cluster for f in features] == [0, 0, 1]


def test_stale_assignments_are_reset():
    features = [Feature(4, cluster=3), Feature(5, cluster=7)]
    assert cluster(features, 1) == [4]
    assert [f.cluster for f in features] == [0, 0]


def test_empty_cluster_raises():
    with pytest.raises(ValueError, match="no members"):
        cluster(_features([5, 5, 7]), 2)


@pytest.mark.parametrize("k", [0, 4])
def test_cluster_count_out_of_range(k):
    with pytest.raises(ValueError, match="cluster count"):
        cluster(_features([1, 2, 3]), k)


def test_assignments_match_sklearn():
    values = [1, 100, 500, 2, 3, 101, 102, 501]
    features = _features(values)
    cluster(features, 3)

    km = KMeans(n_clusters=3, init=np.array([[1.0], [100.0], [500.0]]), n_init=1)
    labels = km.fit_predict(np.array(values, dtype=float).reshape(-1, 1))
    assert [f.cluster for f in features] == labels.tolist()


def test_k_equal_to_n_gives_singletons():
    features = _features([9, 4, 30])
    assert cluster(features, 3) == [9, 4, 30]
    assert [f.cluster for f in features] == [0, 1, 2]
