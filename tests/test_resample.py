import numpy as np
import pandas as pd
import pytest

from volcano_classification.resample import bootstraps


@pytest.fixture
def table():
    return pd.DataFrame({'x': np.arange(200)})


def test_bootstraps_shape(table):
    resamples = bootstraps(table, times=25, random_state=1)
    assert len(resamples) == 25
    assert len({r.id for r in resamples}) == 25
    assert resamples[0].id == 'Bootstrap01'
    for r in resamples:
        assert len(r.analysis) == len(table)
        assert np.intersect1d(r.analysis, r.assessment).size == 0
        assert np.union1d(r.analysis, r.assessment).tolist() == list(range(len(table)))


def test_bootstraps_seeded(table):
    first = bootstraps(table, times=3, random_state=7)
    second = bootstraps(table, times=3, random_state=7)
    for a, b in zip(first, second):
        np.testing.assert_array_equal(a.analysis, b.analysis)
        np.testing.assert_array_equal(a.assessment, b.assessment)


def test_bootstraps_hold_out_about_a_third():
    table = pd.DataFrame({'x': np.arange(1000)})
    resamples = bootstraps(table, times=50, random_state=3)
    held_out = np.mean([len(r.assessment) / len(table) for r in resamples])
    assert 0.34 < held_out < 0.40


def test_split_returns_frames(table):
    resample = bootstraps(table, times=1, random_state=0)[0]
    analysis, assessment = resample.split(table)
    assert len(analysis) == len(table)
    assert assessment['x'].tolist() == resample.assessment.tolist()


def test_bootstraps_needs_positive_times(table):
    with pytest.raises(ValueError):
        bootstraps(table, times=0)
