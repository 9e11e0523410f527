"""
Financial Data Loader Module.

This module handles the acquisition, cleaning, and preprocessing of price
data for the tangent portfolio analysis. Prices come either from Yahoo
Finance (via yfinance) or from a CSV file with one column per ticker.

Features:
    - Download adjusted close prices from Yahoo Finance
    - Load price tables from CSV
    - Normalize prices to a common starting value
    - Calculate period returns
    - Derive a daily risk-free rate from a Treasury bill yield
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional, Union, IO

import numpy as np
import pandas as pd
import yfinance as yf

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from config import (
    DEFAULT_TICKERS,
    DEFAULT_START_DATE,
    DEFAULT_END_DATE,
    CSV_DATE_COLUMN,
    RISK_FREE_RATE,
    RISK_FREE_TICKER,
    RETURN_METHOD,
    TRADING_DAYS_PER_YEAR,
    MIN_DATA_COMPLETENESS,
    MAX_CONSECUTIVE_NANS,
)
from tangency.exceptions import DegenerateRiskError
from tangency.mathematics import QuantMetrics

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class FinancialDataLoader:
    """
    Handles loading and preprocessing of historical price data.

    Attributes:
        tickers: List of stock ticker symbols.
        start_date: Start date for historical data.
        end_date: End date for historical data.
        return_method: "simple" or "log" returns.
        prices: DataFrame of close prices.
        normalized_prices: Prices rebased to 1.0 on the first date.
        returns: DataFrame of period returns.
        failed_tickers: List of tickers that failed to load.

    Example:
        >>> loader = FinancialDataLoader(["AAPL", "MSFT", "KO"])
        >>> loader.download_data()
        >>> loader.returns.tail()
    """

    def __init__(
        self,
        tickers: Optional[List[str]] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        return_method: str = RETURN_METHOD
    ) -> None:
        """
        Initialize the FinancialDataLoader.

        Args:
            tickers: List of ticker symbols. Defaults to config DEFAULT_TICKERS.
            start_date: Start date for data. Defaults to config DEFAULT_START_DATE.
            end_date: End date for data. Defaults to config DEFAULT_END_DATE.
            return_method: How returns are computed ("simple" or "log").
        """
        self.tickers: List[str] = tickers if tickers else DEFAULT_TICKERS.copy()
        self.start_date: datetime = start_date if start_date else DEFAULT_START_DATE
        self.end_date: datetime = end_date if end_date else DEFAULT_END_DATE
        self.return_method: str = return_method

        self.prices: Optional[pd.DataFrame] = None
        self.normalized_prices: Optional[pd.DataFrame] = None
        self.returns: Optional[pd.DataFrame] = None
        self.failed_tickers: List[str] = []
        self.valid_tickers: List[str] = []

    def download_data(self) -> pd.DataFrame:
        """
        Download adjusted close prices for all tickers.

        Failed tickers are logged and excluded from the dataset.

        Returns:
            DataFrame of adjusted close prices (rows=dates, columns=tickers).

        Raises:
            ValueError: If no valid data could be downloaded.
        """
        logger.info(f"Downloading data for {len(self.tickers)} tickers...")

        all_data: Dict[str, pd.Series] = {}
        self.failed_tickers = []

        for ticker in self.tickers:
            try:
                data = self._download_single_ticker(ticker)
                if data is not None and len(data) > 0:
                    all_data[ticker] = data
                    logger.info(f"Successfully downloaded {ticker}")
                else:
                    self.failed_tickers.append(ticker)
                    logger.warning(f"No data available for {ticker}")
            except Exception as e:
                self.failed_tickers.append(ticker)
                logger.warning(f"Failed to download {ticker}: {str(e)}")

        if not all_data:
            raise ValueError("Failed to download data for any tickers.")

        return self._prepare(pd.DataFrame(all_data))

    def load_csv(
        self,
        source: Union[str, os.PathLike, IO],
        date_column: str = CSV_DATE_COLUMN
    ) -> pd.DataFrame:
        """
        Load a price table from CSV.

        The file needs a date column plus one numeric price column per
        ticker. Non-numeric columns are dropped with a warning.

        Args:
            source: Path or file-like object holding the CSV.
            date_column: Name of the date column.

        Returns:
            DataFrame of cleaned prices (rows=dates, columns=tickers).

        Raises:
            ValueError: If the date column is missing or no price columns remain.
        """
        raw = pd.read_csv(source)
        if date_column not in raw.columns:
            raise ValueError(f"CSV has no '{date_column}' column.")

        raw[date_column] = pd.to_datetime(raw[date_column])
        raw = raw.set_index(date_column).sort_index()

        numeric = raw.select_dtypes(include=[np.number])
        dropped = [c for c in raw.columns if c not in numeric.columns]
        if dropped:
            logger.warning(f"Ignoring non-numeric CSV columns: {dropped}")
        if numeric.empty:
            raise ValueError("CSV contains no numeric price columns.")

        self.tickers = [str(c) for c in numeric.columns]
        self.failed_tickers = []
        logger.info(f"Loaded {len(self.tickers)} tickers from CSV")

        return self._prepare(numeric)

    def _prepare(self, prices: pd.DataFrame) -> pd.DataFrame:
        """Clean prices and derive normalized prices and returns."""
        self.prices = prices
        self.valid_tickers = list(self.prices.columns)

        self._clean_data()

        self.normalized_prices = QuantMetrics.normalize_prices(self.prices)
        self.returns = QuantMetrics.calculate_returns(self.prices, self.return_method)

        logger.info(
            f"Successfully loaded {len(self.valid_tickers)} tickers. "
            f"Failed: {self.failed_tickers}"
        )

        return self.prices

    def _download_single_ticker(self, ticker: str) -> Optional[pd.Series]:
        """
        Download data for a single ticker.

        Args:
            ticker: Stock ticker symbol.

        Returns:
            Series of adjusted close prices, or None if download failed.
        """
        stock = yf.Ticker(ticker)
        hist = stock.history(
            start=self.start_date.strftime("%Y-%m-%d"),
            end=self.end_date.strftime("%Y-%m-%d"),
            auto_adjust=True  # Use adjusted prices
        )

        if hist.empty:
            return None

        return hist["Close"]

    def download_risk_free_rate(self, ticker: str = RISK_FREE_TICKER) -> float:
        """
        Derive a daily risk-free rate from a Treasury bill yield.

        The instrument quotes an annual yield in percent, so the latest
        close is converted as yield / 100 / TRADING_DAYS_PER_YEAR.

        Args:
            ticker: Yield instrument symbol.

        Returns:
            Daily risk-free rate, or config RISK_FREE_RATE if the yield
            could not be downloaded.
        """
        try:
            history = yf.Ticker(ticker).history(period="5d")
        except Exception as e:
            logger.warning(f"Error downloading {ticker}: {str(e)}. Using default rate.")
            return RISK_FREE_RATE

        if history.empty or history["Close"].dropna().empty:
            logger.warning(f"No yield data for {ticker}. Using default rate.")
            return RISK_FREE_RATE

        annual_yield = float(history["Close"].dropna().iloc[-1])
        daily_rate = annual_yield / 100 / TRADING_DAYS_PER_YEAR
        logger.info(f"Risk-free rate from {ticker}: {annual_yield:.3f}% -> {daily_rate:.6f} daily")
        return daily_rate

    def _clean_data(self) -> None:
        """
        Clean the price data by handling missing values.

        Applies the following cleaning steps:
        1. Remove timezone info (for consistent date comparisons globally)
        2. Forward fill small gaps (up to MAX_CONSECUTIVE_NANS)
        3. Remove tickers with too many missing values
        4. Drop any remaining rows with NaN values
        """
        if self.prices is None:
            return

        if isinstance(self.prices.index, pd.DatetimeIndex) and self.prices.index.tz is not None:
            self.prices.index = self.prices.index.tz_localize(None)

        self.prices = self.prices.ffill(limit=MAX_CONSECUTIVE_NANS)

        tickers_to_remove = []
        for ticker in self.prices.columns:
            completeness = self.prices[ticker].notna().mean()
            if completeness < MIN_DATA_COMPLETENESS:
                tickers_to_remove.append(ticker)
                logger.warning(
                    f"Removing {ticker}: only {completeness:.1%} complete data"
                )

        if tickers_to_remove:
            self.prices = self.prices.drop(columns=tickers_to_remove)
            self.failed_tickers.extend(tickers_to_remove)
            self.valid_tickers = [
                t for t in self.valid_tickers if t not in tickers_to_remove
            ]

        self.prices = self.prices.dropna()

        if self.prices.empty:
            raise ValueError("No valid data remaining after cleaning.")

    def get_summary_statistics(
        self,
        risk_free_rate: float = RISK_FREE_RATE
    ) -> pd.DataFrame:
        """
        Calculate summary statistics for each asset.

        Args:
            risk_free_rate: Per-period risk-free rate for the Sharpe column.

        Returns:
            DataFrame with mean return, standard deviation, and Sharpe ratio
            for each ticker. Sharpe is NaN for assets with no variance.
        """
        if self.returns is None:
            raise ValueError("Must load data before computing statistics.")

        stats = []
        for ticker in self.returns.columns:
            ticker_returns = self.returns[ticker]
            mean_return = float(ticker_returns.mean())
            std_dev = float(ticker_returns.std())
            try:
                sharpe = QuantMetrics.sharpe_ratio(mean_return, std_dev, risk_free_rate)
            except DegenerateRiskError:
                logger.warning(f"{ticker} has no return variance; Sharpe ratio undefined")
                sharpe = float("nan")

            stats.append({
                "Ticker": ticker,
                "Mean Return": mean_return,
                "Std Dev": std_dev,
                "Sharpe Ratio": sharpe
            })

        return pd.DataFrame(stats).set_index("Ticker")
