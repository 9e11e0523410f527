"""
Unit Tests for efficient frontier construction.

These tests run the real scipy solver on synthetic daily returns.

Run with: pytest tests/test_optimizer.py -v
"""

import numpy as np
import pandas as pd
import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from config import WEIGHT_SUM_LOWER, WEIGHT_SUM_UPPER
from tangency.frontier import FrontierTable
from tangency.optimizer import FrontierBuilder
from tangency.selector import select_tangent_portfolio


@pytest.fixture
def sample_returns():
    np.random.seed(42)
    n_days = 750
    names = ["SPY", "TLT", "GLD"]
    mu = np.array([0.0006, 0.0002, 0.0004])
    vols = np.array([0.012, 0.006, 0.010])
    data = np.random.multivariate_normal(mu, np.diag(vols ** 2), size=n_days)
    return pd.DataFrame(data, columns=names)


class TestFrontierBuilder:
    """Tests for frontier sampling."""

    def test_statistics_precomputed(self, sample_returns):
        builder = FrontierBuilder(sample_returns)

        assert builder.tickers == ["SPY", "TLT", "GLD"]
        assert builder.n_assets == 3
        assert np.allclose(builder.mean_returns, sample_returns.mean().values)
        assert builder.cov_matrix.shape == (3, 3)

    def test_min_variance_below_each_asset(self, sample_returns):
        """Diversification puts the minimum variance under every single asset."""
        builder = FrontierBuilder(sample_returns)

        row = builder.min_variance()

        assert row is not None
        asset_stds = sample_returns.std().values
        assert row.std_dev <= asset_stds.min() + 1e-9

    def test_build_frontier(self, sample_returns):
        builder = FrontierBuilder(sample_returns)

        frontier = builder.build_frontier(10)

        assert isinstance(frontier, FrontierTable)
        assert 0 < len(frontier) <= 10
        assert frontier.assets == ("SPY", "TLT", "GLD")

    def test_frontier_respects_constraints(self, sample_returns):
        builder = FrontierBuilder(sample_returns)

        frontier = builder.build_frontier(10)

        for row in frontier:
            weights = np.array(row.weights)
            assert np.all(weights >= -1e-8)
            assert WEIGHT_SUM_LOWER - 1e-6 <= weights.sum() <= WEIGHT_SUM_UPPER + 1e-6
            assert row.std_dev > 0

    def test_frontier_spans_return_range(self, sample_returns):
        builder = FrontierBuilder(sample_returns)

        frontier = builder.build_frontier(10)
        returns = [row.mean_return for row in frontier]

        assert max(returns) <= builder.mean_returns.max() * WEIGHT_SUM_UPPER + 1e-8
        assert min(returns) >= builder.min_variance().mean_return - 1e-6

    def test_tangent_selected_from_frontier(self, sample_returns):
        """End to end: sample the frontier then pick its best Sharpe row."""
        builder = FrontierBuilder(sample_returns)
        frontier = builder.build_frontier(15)

        tangent = select_tangent_portfolio(frontier, risk_free_rate=0.00012)

        assert tangent.row in frontier.rows
        for row in frontier:
            assert tangent.sharpe_ratio >= (row.mean_return - 0.00012) / row.std_dev
        assert list(tangent.weights) == ["SPY", "TLT", "GLD"]

    def test_max_weight_bound(self, sample_returns):
        builder = FrontierBuilder(sample_returns, max_weight=0.5)

        frontier = builder.build_frontier(5)

        for row in frontier:
            assert max(row.weights) <= 0.5 + 1e-8

    def test_invalid_point_count_raises(self, sample_returns):
        builder = FrontierBuilder(sample_returns)
        with pytest.raises(ValueError):
            builder.build_frontier(0)

    def test_unreachable_weight_sum_raises(self, sample_returns):
        with pytest.raises(ValueError, match="max_weight"):
            FrontierBuilder(sample_returns, max_weight=0.2)

    def test_too_few_observations_raises(self):
        returns = pd.DataFrame({"A": [0.01], "B": [0.02]})
        with pytest.raises(ValueError, match="observations"):
            FrontierBuilder(returns)

    def test_no_assets_raises(self):
        with pytest.raises(ValueError, match="asset"):
            FrontierBuilder(pd.DataFrame(index=range(5)))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
