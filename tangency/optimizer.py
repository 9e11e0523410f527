"""
Efficient Frontier Construction Module.

This module samples the efficient frontier for a set of asset returns by
delegating each solve to scipy's optimization routines. It produces the
FrontierTable that the tangent portfolio selector consumes.

Optimization Approach:
    Each frontier point is the minimum variance portfolio for a target
    return, solved with Sequential Least Squares Programming (SLSQP):
    - Constraint: WEIGHT_SUM_LOWER <= Sum of weights <= WEIGHT_SUM_UPPER
    - Constraint: Portfolio return = target return
    - Bounds: 0 <= weight <= max_weight for each asset (long-only)

    Target returns are spread evenly between the minimum variance return
    and the best single-asset mean return.
"""

import logging
from typing import Callable, List, Optional

import numpy as np
import pandas as pd
from scipy.optimize import minimize, OptimizeResult

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from config import (
    NUM_FRONTIER_POINTS,
    WEIGHT_SUM_LOWER,
    WEIGHT_SUM_UPPER,
    OPTIMIZATION_METHOD,
    MAX_ITERATIONS,
    OPTIMIZATION_TOLERANCE,
)
from tangency.exceptions import EmptyInputError
from tangency.frontier import FrontierRow, FrontierTable
from tangency.mathematics import QuantMetrics

logger = logging.getLogger(__name__)


class FrontierBuilder:
    """
    Samples the efficient frontier of a set of assets.

    Attributes:
        returns: DataFrame of asset returns.
        tickers: List of ticker symbols.
        n_assets: Number of assets in the portfolio.
        mean_returns: Mean period returns for each asset.
        cov_matrix: Covariance matrix of returns.
        max_weight: Upper bound on any single weight.

    Example:
        >>> builder = FrontierBuilder(returns_df)
        >>> frontier = builder.build_frontier(25)
        >>> len(frontier)
        25
    """

    def __init__(
        self,
        returns: pd.DataFrame,
        max_weight: float = 1.0
    ) -> None:
        """
        Initialize the FrontierBuilder.

        Args:
            returns: DataFrame of period returns (rows=dates, columns=assets).
            max_weight: Maximum weight allowed per asset (0.0 to 1.0).

        Raises:
            ValueError: If there are no assets, fewer than two observations,
                or max_weight cannot reach the required weight sum.
        """
        if returns.shape[1] == 0:
            raise ValueError("Need at least one asset to build a frontier.")
        if len(returns) < 2:
            raise ValueError("Need at least two return observations.")

        self.returns = returns
        self.tickers: List[str] = [str(c) for c in returns.columns]
        self.n_assets: int = len(self.tickers)
        self.max_weight: float = max_weight

        if self.max_weight * self.n_assets < WEIGHT_SUM_LOWER:
            raise ValueError(
                f"max_weight={max_weight} cannot reach a weight sum of "
                f"{WEIGHT_SUM_LOWER} with {self.n_assets} assets."
            )

        # Pre-compute statistics for optimization
        self.mean_returns: np.ndarray = returns.mean().to_numpy()
        self.cov_matrix: np.ndarray = QuantMetrics.calculate_covariance_matrix(returns)

        self._constraints = [
            {"type": "ineq", "fun": lambda w: np.sum(w) - WEIGHT_SUM_LOWER},
            {"type": "ineq", "fun": lambda w: WEIGHT_SUM_UPPER - np.sum(w)},
        ]
        self._bounds = tuple((0.0, self.max_weight) for _ in range(self.n_assets))

        # Initial guess: equal weights
        self._initial_weights = np.full(self.n_assets, 1.0 / self.n_assets)

    def _portfolio_volatility(self, weights: np.ndarray) -> float:
        return QuantMetrics.portfolio_volatility(weights, self.cov_matrix)

    def _solve(
        self,
        objective: Callable[[np.ndarray], float],
        constraints: List[dict],
        label: str
    ) -> Optional[np.ndarray]:
        """
        Run one SLSQP minimization.

        Args:
            objective: Function of the weight vector to minimize.
            constraints: scipy constraint dictionaries.
            label: Description used in log messages.

        Returns:
            Optimal weights, or None if the solver did not converge.
        """
        try:
            result: OptimizeResult = minimize(
                objective,
                self._initial_weights,
                method=OPTIMIZATION_METHOD,
                bounds=self._bounds,
                constraints=constraints,
                options={
                    "maxiter": MAX_ITERATIONS,
                    "ftol": OPTIMIZATION_TOLERANCE
                }
            )
        except (ValueError, np.linalg.LinAlgError) as e:
            logger.warning(f"Optimization for {label} raised: {e}")
            return None

        if not result.success:
            logger.warning(f"Optimization for {label} did not converge: {result.message}")
            return None

        return result.x

    def _create_row(self, weights: np.ndarray) -> FrontierRow:
        return FrontierRow(
            mean_return=QuantMetrics.portfolio_return(weights, self.mean_returns),
            std_dev=QuantMetrics.portfolio_volatility(weights, self.cov_matrix),
            weights=tuple(weights),
        )

    def min_variance(self) -> Optional[FrontierRow]:
        """
        Find the portfolio with the lowest possible variance.

        This is the leftmost point of the efficient frontier.

        Returns:
            FrontierRow of the minimum variance portfolio, or None on failure.
        """
        weights = self._solve(
            self._portfolio_volatility,
            self._constraints,
            "minimum variance"
        )
        return self._create_row(weights) if weights is not None else None

    def optimize_target_return(self, target_return: float) -> Optional[FrontierRow]:
        """
        Find the minimum volatility portfolio for a target return.

        Args:
            target_return: Target expected return per period.

        Returns:
            FrontierRow for the target return, or None on failure.
        """
        constraints = self._constraints.copy()
        constraints.append({
            "type": "eq",
            "fun": lambda w: QuantMetrics.portfolio_return(w, self.mean_returns) - target_return
        })

        weights = self._solve(
            self._portfolio_volatility,
            constraints,
            f"target return {target_return:.6f}"
        )
        return self._create_row(weights) if weights is not None else None

    def build_frontier(
        self,
        n_points: int = NUM_FRONTIER_POINTS
    ) -> FrontierTable:
        """
        Generate points along the efficient frontier.

        Args:
            n_points: Number of target returns to sample.

        Returns:
            FrontierTable of the points that converged, in target order.

        Raises:
            ValueError: If n_points is not positive.
            EmptyInputError: If no frontier point could be solved.
        """
        if n_points < 1:
            raise ValueError(f"n_points must be positive, got {n_points}.")

        min_var = self.min_variance()
        if min_var is None:
            raise EmptyInputError("Minimum variance portfolio could not be solved.")

        min_return = min_var.mean_return
        max_return = max(min_return, float(self.mean_returns.max()))

        target_returns = np.linspace(min_return, max_return, n_points)

        rows: List[FrontierRow] = []
        for target in target_returns:
            row = self.optimize_target_return(float(target))
            if row is not None:
                rows.append(row)

        if not rows:
            raise EmptyInputError("No efficient frontier point converged.")

        logger.info(
            f"Efficient frontier: {len(rows)} of {n_points} points converged "
            f"for {self.n_assets} assets"
        )

        return FrontierTable(self.tickers, rows)
