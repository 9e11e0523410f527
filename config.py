"""
Central configuration for the Tangent Portfolio Selector.

This module contains all configurable parameters including the default asset
universe, date ranges, the risk-free rate and the frontier sampling settings
used throughout the analysis.

All return and risk figures in this project are daily (per trading period),
so the risk-free rate below is a daily rate as well.
"""

from datetime import datetime, timedelta
from typing import List

# =============================================================================
# Default Asset Universe
# =============================================================================
DEFAULT_TICKERS: List[str] = [
    "AAPL", "MSFT", "AMZN", "JPM", "XOM", "JNJ", "PG", "KO",
]

# Instrument used to derive the risk-free rate (13-week T-bill yield, in %)
RISK_FREE_TICKER: str = "^IRX"

# =============================================================================
# Date Configuration
# =============================================================================
# Default to 5 years of historical data
DEFAULT_END_DATE: datetime = datetime.now()
DEFAULT_START_DATE: datetime = DEFAULT_END_DATE - timedelta(days=5 * 365)

# Column holding the dates when prices are loaded from CSV
CSV_DATE_COLUMN: str = "Date"

# =============================================================================
# Financial Constants
# =============================================================================
# Daily risk-free rate. Single source for every Sharpe Ratio computation.
RISK_FREE_RATE: float = 0.00012

# Trading days per year (US market standard)
TRADING_DAYS_PER_YEAR: int = 252

# Return calculation method: "simple" (P_t / P_{t-1} - 1) or "log"
RETURN_METHOD: str = "simple"

# =============================================================================
# Frontier Parameters
# =============================================================================
# Number of points sampled on the efficient frontier
NUM_FRONTIER_POINTS: int = 25

# Band the sum of weights must fall in for every frontier portfolio
WEIGHT_SUM_LOWER: float = 0.99
WEIGHT_SUM_UPPER: float = 1.01

# Optimization method for scipy.optimize.minimize
OPTIMIZATION_METHOD: str = "SLSQP"

# Maximum iterations for optimizer
MAX_ITERATIONS: int = 1000

# Convergence tolerance
OPTIMIZATION_TOLERANCE: float = 1e-10

# =============================================================================
# Data Cleaning Parameters
# =============================================================================
# Minimum percentage of valid data required for a ticker to be included
MIN_DATA_COMPLETENESS: float = 0.95

# Maximum allowed consecutive NaN values before dropping a ticker
MAX_CONSECUTIVE_NANS: int = 5
