"""
Tangent Portfolio Selection Module.

Given a precomputed efficient frontier, this module picks the portfolio with
the highest Sharpe Ratio: the tangent portfolio, where the Capital Market
Line touches the frontier.

Selection is a single ordered pass over the frontier rows. When two rows
share the maximal Sharpe Ratio the earlier one is kept.

Error policy:
    - An empty frontier raises EmptyInputError.
    - A row with zero, negative or non-finite risk raises DegenerateRiskError
      instead of being ranked with an infinite ratio.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import pandas as pd

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from config import RISK_FREE_RATE
from tangency.exceptions import DegenerateRiskError, EmptyInputError
from tangency.frontier import FrontierRow, FrontierTable
from tangency.mathematics import QuantMetrics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TangentPortfolio:
    """
    The maximum Sharpe Ratio portfolio selected from a frontier.

    Attributes:
        row: The selected frontier row, unchanged.
        sharpe_ratio: Sharpe Ratio of the selected row.
        index: Position of the row in the frontier table.
        assets: Asset identifiers in weight order.
        risk_free_rate: Rate the Sharpe Ratio was computed against.
    """
    row: FrontierRow
    sharpe_ratio: float
    index: int
    assets: Tuple[str, ...]
    risk_free_rate: float

    @property
    def mean_return(self) -> float:
        return self.row.mean_return

    @property
    def std_dev(self) -> float:
        return self.row.std_dev

    @property
    def weights(self) -> Dict[str, float]:
        """Asset-to-weight mapping in asset order."""
        return dict(zip(self.assets, self.row.weights))

    def summary(self) -> Dict[str, float]:
        """Key figures of the portfolio for display."""
        return {
            "Mean Return": self.mean_return,
            "Std Dev": self.std_dev,
            "Sharpe Ratio": self.sharpe_ratio,
            "Risk-Free Rate": self.risk_free_rate,
        }

    def weights_frame(self) -> pd.DataFrame:
        """
        Asset weights as a two-column table.

        Returns:
            DataFrame with Asset and Weight columns, in asset order.
        """
        return pd.DataFrame(
            {"Asset": list(self.assets), "Weight": list(self.row.weights)}
        )


def select_tangent_portfolio(
    frontier: FrontierTable,
    risk_free_rate: float = RISK_FREE_RATE
) -> TangentPortfolio:
    """
    Select the frontier row with the highest Sharpe Ratio.

    Each row is scored as (mean_return - risk_free_rate) / std_dev in a
    single pass. Ties keep the first row in table order.

    Args:
        frontier: Non-empty frontier table.
        risk_free_rate: Per-period risk-free rate, same period as the returns.

    Returns:
        TangentPortfolio for the best row.

    Raises:
        EmptyInputError: If the frontier has no rows.
        DegenerateRiskError: If any row's std_dev is zero, negative or not finite.

    Example:
        >>> best = select_tangent_portfolio(table, risk_free_rate=0.00012)
        >>> best.weights
        {'AAPL': 0.4, 'MSFT': 0.6}
    """
    if len(frontier) == 0:
        raise EmptyInputError("Frontier table has no rows; nothing to select.")

    best_index: Optional[int] = None
    best_sharpe = float("-inf")

    for index, row in enumerate(frontier):
        try:
            sharpe = QuantMetrics.sharpe_ratio(
                row.mean_return, row.std_dev, risk_free_rate
            )
        except DegenerateRiskError as e:
            raise DegenerateRiskError(f"Frontier row {index}: {e}") from e

        if best_index is None or sharpe > best_sharpe:
            best_index, best_sharpe = index, sharpe

    selected = TangentPortfolio(
        row=frontier[best_index],
        sharpe_ratio=best_sharpe,
        index=best_index,
        assets=frontier.assets,
        risk_free_rate=risk_free_rate,
    )

    logger.info(
        f"Selected frontier row {best_index} of {len(frontier)}: "
        f"return={selected.mean_return:.6f}, std={selected.std_dev:.6f}, "
        f"sharpe={best_sharpe:.4f}"
    )

    return selected
