"""Tests for the Bayesian update and Martingale accumulation primitives."""

import pytest

from swan_engine.core.primitives import bayesian_update, clamp, martingale_risk


class TestMartingaleRisk:
    def test_shock_compounds_older_values(self) -> None:
        # 60 is the most recent value and processed first
        assert martingale_risk([10, 60], decay=0.95) == pytest.approx(71.4)

    def test_order_matters(self) -> None:
        # 10 first: multiplier only decays, then 60 at 0.95
        assert martingale_risk([60, 10], decay=0.95) == pytest.approx(10 + 60 * 0.95)

    def test_empty_series_scores_zero(self) -> None:
        assert martingale_risk([]) == 0.0

    def test_clamped_to_hundred(self) -> None:
        assert martingale_risk([90, 90, 90]) == 100.0

    def test_decay_without_shocks(self) -> None:
        assert martingale_risk([20, 20], decay=0.5) == pytest.approx(30.0)

    def test_value_at_threshold_is_not_a_shock(self) -> None:
        assert martingale_risk([10, 50], decay=1.0) == pytest.approx(60.0)


class TestBayesianUpdate:
    def test_single_step_ratio(self) -> None:
        assert bayesian_update(0.1, 0.9, 0.2) == pytest.approx(0.45)
        assert bayesian_update(0.1, 0.4, 0.2) == pytest.approx(0.2)

    def test_zero_evidence_is_floored(self) -> None:
        assert bayesian_update(0.1, 0.5, 0.0) == pytest.approx(0.05 / 0.001)


class TestClamp:
    def test_bounds(self) -> None:
        assert clamp(-1.0, 0.0, 1.0) == 0.0
        assert clamp(2.0, 0.0, 1.0) == 1.0
        assert clamp(0.3, 0.0, 1.0) == 0.3
