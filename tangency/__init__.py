"""
Tangent Portfolio Selector - Source Package

This package loads historical prices, samples the efficient frontier and
selects the maximum Sharpe Ratio (tangent) portfolio from it.

Modules:
    - data_loader: Price acquisition, normalization and returns
    - mathematics: Quantitative metrics and calculations
    - optimizer: Efficient frontier sampling
    - frontier: Typed frontier rows and tables
    - selector: Maximum Sharpe Ratio selection
"""

from tangency.data_loader import FinancialDataLoader
from tangency.exceptions import DegenerateRiskError, EmptyInputError, FrontierError
from tangency.frontier import FrontierRow, FrontierTable
from tangency.mathematics import QuantMetrics
from tangency.optimizer import FrontierBuilder
from tangency.selector import TangentPortfolio, select_tangent_portfolio

__all__ = [
    "FinancialDataLoader",
    "QuantMetrics",
    "FrontierBuilder",
    "FrontierRow",
    "FrontierTable",
    "TangentPortfolio",
    "select_tangent_portfolio",
    "FrontierError",
    "EmptyInputError",
    "DegenerateRiskError",
]

__version__ = "1.0.0"
