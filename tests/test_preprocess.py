"""Tests for gaitscore.preprocess."""

import numpy as np
import pytest

from conftest import make_samples, make_session

from gaitscore.errors import InvalidInput
from gaitscore.preprocess import (
    acceleration_array,
    axis_series,
    magnitude,
    normalize_axis,
    round_half_even,
    std,
    zscore,
)


class TestAccelerationArray:

    def test_from_sensor_samples(self):
        samples = make_samples([[1, 2, 3], [4, 5, 6]])
        acc = acceleration_array(samples)
        assert acc.shape == (2, 3)
        assert acc[1].tolist() == [4.0, 5.0, 6.0]

    def test_from_session(self):
        session = make_session([[0, 0, 9.81]] * 4)
        assert acceleration_array(session).shape == (4, 3)

    def test_from_tuples_and_array(self):
        assert acceleration_array([(0, 1, 2)]).shape == (1, 3)
        assert acceleration_array(np.ones((5, 3))).shape == (5, 3)

    def test_empty_raises(self):
        with pytest.raises(InvalidInput, match="empty"):
            acceleration_array([])
        with pytest.raises(InvalidInput, match="empty"):
            acceleration_array(np.zeros((0, 3)))

    def test_wrong_shape_raises(self):
        with pytest.raises(InvalidInput, match=r"\(n, 3\)"):
            acceleration_array([(1, 2), (3, 4)])

    def test_non_numeric_raises(self):
        with pytest.raises(InvalidInput, match="not numeric"):
            acceleration_array([("a", "b", "c")])


class TestSeries:

    def test_magnitude(self):
        mag = magnitude(np.array([[3.0, 4.0, 0.0], [0.0, 0.0, 2.0]]))
        assert mag.tolist() == [5.0, 2.0]

    def test_axis_series_by_name_and_index(self):
        acc = np.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
        assert axis_series(acc, "y").tolist() == [2.0, 5.0]
        assert axis_series(acc, "Z").tolist() == [3.0, 6.0]
        assert axis_series(acc, 0).tolist() == [1.0, 4.0]

    def test_axis_series_returns_copy(self):
        acc = np.zeros((3, 3))
        series = axis_series(acc, "x")
        series[0] = 99.0
        assert acc[0, 0] == 0.0

    def test_unknown_axis_raises(self):
        with pytest.raises(ValueError, match="axis"):
            axis_series(np.zeros((2, 3)), "w")
        with pytest.raises(ValueError, match="axis index"):
            axis_series(np.zeros((2, 3)), 3)


class TestZscore:

    def test_zero_mean_unit_sd(self):
        z = zscore([1.0, 2.0, 3.0, 4.0])
        assert np.mean(z) == pytest.approx(0.0, abs=1e-12)
        assert std(z) == pytest.approx(1.0)

    def test_flat_signal_raises(self):
        with pytest.raises(InvalidInput, match="flat"):
            zscore([9.81] * 10)

    def test_empty_signal_raises(self):
        with pytest.raises(InvalidInput, match="empty"):
            zscore([])

    def test_nan_raises(self):
        with pytest.raises(InvalidInput, match="NaN"):
            zscore([1.0, np.nan, 2.0])

    def test_normalize_axis_uses_selected_axis(self):
        acc = np.column_stack([np.zeros(4), np.zeros(4), [1.0, 2.0, 3.0, 4.0]])
        assert normalize_axis(acc, "z") == pytest.approx(zscore([1.0, 2.0, 3.0, 4.0]))
        with pytest.raises(InvalidInput):
            normalize_axis(acc, "x")


class TestHelpers:

    def test_std_is_population(self):
        assert std([1.0, 3.0]) == pytest.approx(1.0)
        assert std([]) == 0.0
        values = np.random.RandomState(0).normal(size=50)
        assert std(values) == pytest.approx(np.std(values, ddof=0))

    def test_round_half_even(self):
        assert round_half_even(2.5, 0) == 2.0
        assert round_half_even(3.5, 0) == 4.0
        assert round_half_even(1.23456, 3) == 1.235
