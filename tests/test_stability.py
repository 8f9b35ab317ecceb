"""Tests for gaitscore.stability."""

import numpy as np
import pytest

from conftest import make_samples, walking_acc

from gaitscore.errors import InvalidInput
from gaitscore.models import StabilityMetrics
from gaitscore.stability import calculate_stability, evaluate_stability


class TestKnownValues:

    def test_constant_vector_scores_100(self, still_session):
        m = calculate_stability(still_session)
        assert m.stability_score == pytest.approx(100.0)
        assert m.movement_variability == 0.0
        assert m.lateral_stability == 0.0
        assert m.smoothness == 0.0
        assert m.symmetry == 0.0

    def test_hand_computed_lateral_swing(self):
        # |a| = 1 throughout; y alternates +-1.
        acc = [(0.0, 1.0, 0.0), (0.0, -1.0, 0.0)] * 5
        m = calculate_stability(acc)
        assert m.movement_variability == 0.0
        assert m.lateral_stability == pytest.approx(1.0)
        assert m.vertical_stability == 0.0
        assert m.smoothness == 0.0
        assert m.symmetry == pytest.approx(1.0)
        # norms: 0, 0.5, 0, 1 -> 100 * (1 - 0.375)
        assert m.stability_score == pytest.approx(62.5)

    def test_vertical_stability_is_reported_only(self):
        # Vertical SD changes but the score inputs do not.
        a = calculate_stability([(3.0, 0.0, 4.0), (4.0, 0.0, 3.0)] * 4)
        b = calculate_stability([(4.0, 0.0, 3.0), (3.0, 0.0, 4.0)] * 4)
        assert a.vertical_stability == pytest.approx(0.5)
        assert a.stability_score == b.stability_score

    def test_caps_saturate_at_one(self):
        acc = [(0.0, 50.0, 0.0), (0.0, -50.0, 0.0)] * 5
        m = calculate_stability(acc)
        # variability and smoothness are 0, lateral and symmetry saturate.
        assert m.stability_score == pytest.approx(50.0)

    def test_details_rounded_to_four_decimals(self):
        m = calculate_stability(walking_acc(noise=0.3, seed=4))
        for value in (m.movement_variability, m.lateral_stability,
                      m.vertical_stability, m.smoothness, m.symmetry):
            assert round(value, 4) == value
        assert round(m.stability_score, 2) == m.stability_score


class TestCaps:

    def test_custom_cap_changes_score(self):
        acc = [(0.0, 1.0, 0.0), (0.0, -1.0, 0.0)] * 5
        default = calculate_stability(acc)
        relaxed = calculate_stability(acc, caps={"symmetry": 4.0})
        assert relaxed.stability_score > default.stability_score

    def test_non_positive_cap_raises(self):
        with pytest.raises(ValueError, match="positive"):
            calculate_stability([(0, 0, 9.81)] * 3, caps={"smoothness": 0})


class TestDegenerateInput:

    @pytest.mark.parametrize("acc", [
        [],
        [(0.0, 0.0, 9.81)],
        [(0.0, 0.0, 0.0)] * 10,
        [(0.0, np.nan, 9.81)] * 10,
        [(0.0, 0.0, np.inf)] * 10,
    ])
    def test_returns_zero_metrics(self, acc):
        m = calculate_stability(acc)
        assert m == StabilityMetrics.zero()
        assert m.is_zero()

    def test_magnitude_overflow_is_invalid(self):
        outcome = evaluate_stability([(1e200, 0.0, 0.0), (2e200, 0.0, 0.0), (1e200, 0.0, 0.0)])
        assert outcome.error_code == "invalid_input"
        assert outcome.value_or_zero() == StabilityMetrics.zero()
        assert all(np.isfinite(v) for v in outcome.value_or_zero().to_dict().values())

    def test_outcome_carries_invalid_input(self):
        outcome = evaluate_stability([])
        assert not outcome.ok
        assert isinstance(outcome.error, InvalidInput)
        assert outcome.error_code == "invalid_input"
        assert outcome.value_or_zero() == StabilityMetrics.zero()
        with pytest.raises(InvalidInput):
            outcome.unwrap()

    def test_outcome_success(self, walking_session):
        outcome = evaluate_stability(walking_session)
        assert outcome.ok
        assert outcome.unwrap() == outcome.value_or_zero()


class TestProperties:

    @pytest.mark.parametrize("seed", range(5))
    def test_score_in_range_for_noisy_input(self, seed):
        rng = np.random.RandomState(seed)
        acc = rng.normal(0.0, 5.0 * (seed + 1), size=(300, 3))
        m = calculate_stability(make_samples(acc))
        assert 0.0 <= m.stability_score <= 100.0
        assert all(v >= 0.0 for v in m.to_dict().values())

    def test_noise_lowers_score(self):
        clean = calculate_stability(walking_acc())
        noisy = calculate_stability(walking_acc(noise=1.0, seed=1))
        assert noisy.stability_score < clean.stability_score

    def test_deterministic(self, walking_session):
        assert calculate_stability(walking_session) == calculate_stability(walking_session)
