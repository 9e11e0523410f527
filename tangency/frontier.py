"""
Efficient Frontier Table Module.

An efficient frontier arrives from the optimizer as a table of candidate
portfolios. Each row carries the portfolio's expected return, its risk
(standard deviation) and one weight per asset. This module gives those rows
an explicit type so downstream code never depends on column positions.

Table layout (as a DataFrame):
    Return | Volatility | <asset 1> | <asset 2> | ... [| Sharpe]
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Tuple

import pandas as pd

RETURN_COLUMN = "Return"
RISK_COLUMN = "Volatility"
AUXILIARY_COLUMNS: Tuple[str, ...] = ("Sharpe",)


@dataclass(frozen=True)
class FrontierRow:
    """
    One candidate portfolio on the efficient frontier.

    Attributes:
        mean_return: Expected portfolio return over the analysis period.
        std_dev: Standard deviation of portfolio returns (risk proxy).
        weights: One weight per asset, in the table's asset order.
    """
    mean_return: float
    std_dev: float
    weights: Tuple[float, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "mean_return", float(self.mean_return))
        object.__setattr__(self, "std_dev", float(self.std_dev))
        object.__setattr__(self, "weights", tuple(float(w) for w in self.weights))


class FrontierTable:
    """
    Ordered, read-only collection of frontier rows sharing one asset list.

    Rows keep the order the optimizer produced them in; they are not sorted
    by risk or return.

    Example:
        >>> table = FrontierTable(
        ...     ["AAPL", "MSFT"],
        ...     [FrontierRow(0.0010, 0.0200, (0.4, 0.6))],
        ... )
        >>> len(table)
        1
    """

    def __init__(
        self,
        assets: Sequence[str],
        rows: Iterable[FrontierRow] = ()
    ) -> None:
        """
        Initialize the FrontierTable.

        Args:
            assets: Asset identifiers in weight order.
            rows: Frontier rows; each must hold one weight per asset.

        Raises:
            ValueError: If assets repeat or a row's weight count differs
                from the number of assets.
        """
        self._assets: Tuple[str, ...] = tuple(assets)
        if len(set(self._assets)) != len(self._assets):
            raise ValueError(f"Duplicate asset identifiers in {list(self._assets)}")

        self._rows: Tuple[FrontierRow, ...] = tuple(rows)
        for index, row in enumerate(self._rows):
            if len(row.weights) != len(self._assets):
                raise ValueError(
                    f"Row {index} has {len(row.weights)} weights, "
                    f"expected {len(self._assets)} (one per asset)."
                )

    @property
    def assets(self) -> Tuple[str, ...]:
        return self._assets

    @property
    def rows(self) -> Tuple[FrontierRow, ...]:
        return self._rows

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[FrontierRow]:
        return iter(self._rows)

    def __getitem__(self, index: int) -> FrontierRow:
        return self._rows[index]

    def __repr__(self) -> str:
        return f"FrontierTable(assets={list(self._assets)}, rows={len(self._rows)})"

    @classmethod
    def from_frame(
        cls,
        frame: pd.DataFrame,
        return_column: str = RETURN_COLUMN,
        risk_column: str = RISK_COLUMN,
        exclude: Sequence[str] = AUXILIARY_COLUMNS
    ) -> "FrontierTable":
        """
        Build a table from a DataFrame with named return and risk columns.

        Every column other than the return, risk and excluded auxiliary
        columns is taken as an asset weight, in column order.

        Args:
            frame: Frontier DataFrame, one row per portfolio.
            return_column: Name of the expected return column.
            risk_column: Name of the standard deviation column.
            exclude: Auxiliary columns to ignore (e.g. a precomputed Sharpe).

        Returns:
            FrontierTable with the frame's rows in order.

        Raises:
            ValueError: If the return or risk column is missing.
        """
        missing = [c for c in (return_column, risk_column) if c not in frame.columns]
        if missing:
            raise ValueError(f"Frontier frame is missing columns: {missing}")

        skip = {return_column, risk_column, *exclude}
        assets: List[str] = [str(c) for c in frame.columns if c not in skip]
        weight_columns = [c for c in frame.columns if c not in skip]

        rows = [
            FrontierRow(
                mean_return=record[return_column],
                std_dev=record[risk_column],
                weights=tuple(record[c] for c in weight_columns),
            )
            for _, record in frame.iterrows()
        ]
        return cls(assets, rows)

    def to_frame(self) -> pd.DataFrame:
        """
        Convert the table to a DataFrame with Return, Volatility and asset columns.

        Returns:
            DataFrame with one row per frontier portfolio.
        """
        columns = [RETURN_COLUMN, RISK_COLUMN, *self._assets]
        records = [
            [row.mean_return, row.std_dev, *row.weights]
            for row in self._rows
        ]
        return pd.DataFrame(records, columns=columns)
