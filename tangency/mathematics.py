"""
Quantitative Metrics Module for the Tangent Portfolio Selector.

This module provides the calculations used on both sides of the efficient
frontier: preparing asset data (price normalization, period returns,
covariance) and scoring portfolios (return, volatility, Sharpe ratio).

All figures are per trading period (daily for daily prices). Nothing is
annualized, so the risk-free rate passed in must be a per-period rate too.

Key Formulas:
    - Normalized Price: P_t / P_0
    - Simple Return: r_t = P_t / P_{t-1} - 1
    - Log Return: r_t = ln(P_t / P_{t-1})
    - Portfolio Return: R_p = Σ(w_i * r_i)
    - Portfolio Volatility: σ_p = √(w^T * Σ * w)
    - Sharpe Ratio: SR = (R_p - R_f) / σ_p
"""

import math

import numpy as np
import pandas as pd

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from config import RISK_FREE_RATE, RETURN_METHOD
from tangency.exceptions import DegenerateRiskError

RETURN_METHODS = ("simple", "log")


class QuantMetrics:
    """
    A collection of static methods for calculating quantitative financial metrics.

    All methods are static to allow for easy testing and standalone usage.
    """

    @staticmethod
    def portfolio_return(
        weights: np.ndarray,
        mean_returns: np.ndarray
    ) -> float:
        """
        Calculate the expected portfolio return per period.

        Formula: R_p = Σ(w_i * r_i)

        Args:
            weights: Array of portfolio weights.
            mean_returns: Array of mean period returns for each asset.

        Returns:
            Expected portfolio return as a decimal.
        """
        return float(np.dot(weights, mean_returns))

    @staticmethod
    def portfolio_volatility(
        weights: np.ndarray,
        cov_matrix: np.ndarray
    ) -> float:
        """
        Calculate the portfolio volatility (standard deviation) per period.

        Formula: σ_p = √(w^T * Σ * w)

        Args:
            weights: Array of portfolio weights.
            cov_matrix: Covariance matrix of period returns (n x n).

        Returns:
            Portfolio standard deviation as a decimal.
        """
        portfolio_variance = np.dot(weights.T, np.dot(cov_matrix, weights))
        # Rounding noise can push a near-zero variance slightly negative
        return float(np.sqrt(max(portfolio_variance, 0.0)))

    @staticmethod
    def sharpe_ratio(
        portfolio_return: float,
        portfolio_volatility: float,
        risk_free_rate: float = RISK_FREE_RATE
    ) -> float:
        """
        Calculate the Sharpe Ratio of a portfolio.

        Formula: SR = (R_p - R_f) / σ_p

        Args:
            portfolio_return: Expected portfolio return (decimal).
            portfolio_volatility: Portfolio standard deviation (decimal).
            risk_free_rate: Risk-free rate for the same period (decimal).

        Returns:
            Sharpe Ratio (dimensionless).

        Raises:
            DegenerateRiskError: If volatility is zero, negative or not finite.
            ValueError: If the return or the risk-free rate is not finite.
        """
        if not math.isfinite(portfolio_return):
            raise ValueError(f"Portfolio return must be finite, got {portfolio_return}.")
        if not math.isfinite(risk_free_rate):
            raise ValueError(f"Risk-free rate must be finite, got {risk_free_rate}.")
        if not math.isfinite(portfolio_volatility) or portfolio_volatility <= 0:
            raise DegenerateRiskError(
                f"Sharpe ratio is undefined for volatility {portfolio_volatility}."
            )
        return (portfolio_return - risk_free_rate) / portfolio_volatility

    @staticmethod
    def normalize_prices(prices: pd.DataFrame) -> pd.DataFrame:
        """
        Rebase every price series to start at 1.0.

        Each column is divided by its first valid price, so series with
        very different price levels can be compared side by side.

        Args:
            prices: DataFrame of prices (rows=dates, columns=assets).

        Returns:
            DataFrame of normalized prices.

        Raises:
            ValueError: If the frame is empty or a column has no usable
                starting price.
        """
        if prices.empty:
            raise ValueError("Cannot normalize an empty price table.")

        first_prices = prices.bfill().iloc[0]
        invalid = first_prices[first_prices.isna() | (first_prices == 0)]
        if not invalid.empty:
            raise ValueError(
                f"No usable starting price for: {list(invalid.index)}"
            )

        return prices / first_prices

    @staticmethod
    def calculate_returns(
        prices: pd.DataFrame,
        method: str = RETURN_METHOD
    ) -> pd.DataFrame:
        """
        Calculate period returns from price data.

        Args:
            prices: DataFrame of price data.
            method: "simple" for P_t / P_{t-1} - 1, "log" for ln(P_t / P_{t-1}).

        Returns:
            DataFrame of returns (first row is NaN and dropped).

        Raises:
            ValueError: If the method is not recognized.
        """
        if method not in RETURN_METHODS:
            raise ValueError(
                f"Unknown return method '{method}'. Use one of {RETURN_METHODS}."
            )

        ratios = prices / prices.shift(1)
        if method == "log":
            returns = np.log(ratios)
        else:
            returns = ratios - 1
        return returns.dropna()

    @staticmethod
    def calculate_covariance_matrix(
        returns: pd.DataFrame,
        regularization: float = 1e-10
    ) -> np.ndarray:
        """
        Calculate the covariance matrix of returns with optional regularization.

        Adds a small value to the diagonal so the matrix stays positive
        definite even for perfectly correlated assets or short histories.

        Args:
            returns: DataFrame of period returns (rows=dates, columns=assets).
            regularization: Small value added to diagonal for numerical stability.

        Returns:
            Regularized covariance matrix as numpy array.
        """
        cov_matrix = returns.cov().to_numpy(copy=True)

        cov_matrix +=np.eye(cov_matrix.shape[0]) * regularization

        return cov_matrix
