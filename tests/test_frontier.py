"""
Unit Tests for frontier rows and tables.

Run with: pytest tests/test_frontier.py -v
"""

import numpy as np
import pandas as pd
import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from tangency.frontier import FrontierRow, FrontierTable


class TestFrontierRow:
    """Tests for the frontier row record."""

    def test_weights_become_float_tuple(self):
        row = FrontierRow(0.001, 0.02, np.array([0.25, 0.75]))

        assert row.weights == (0.25, 0.75)
        assert all(type(w) is float for w in row.weights)

    def test_numpy_scalars_coerced(self):
        row = FrontierRow(np.float64(0.001), np.float64(0.02), [1])

        assert type(row.mean_return) is float
        assert type(row.std_dev) is float
        assert row.weights == (1.0,)

    def test_immutable(self):
        row = FrontierRow(0.001, 0.02, (1.0,))
        with pytest.raises(AttributeError):
            row.std_dev = 0.0


class TestFrontierTable:
    """Tests for the frontier table container."""

    def test_sequence_protocol(self):
        rows = [
            FrontierRow(0.001, 0.02, (0.5, 0.5)),
            FrontierRow(0.002, 0.03, (0.2, 0.8)),
        ]
        table = FrontierTable(["A", "B"], rows)

        assert len(table) == 2
        assert table[1] is rows[1]
        assert list(table) == rows
        assert table.assets == ("A", "B")

    def test_weight_count_mismatch_raises(self):
        with pytest.raises(ValueError, match="Row 1"):
            FrontierTable(
                ["A", "B"],
                [
                    FrontierRow(0.001, 0.02, (0.5, 0.5)),
                    FrontierRow(0.002, 0.03, (1.0,)),
                ],
            )

    def test_duplicate_assets_raise(self):
        with pytest.raises(ValueError, match="Duplicate"):
            FrontierTable(["A", "A"], [])

    def test_empty_table_allowed(self):
        table = FrontierTable(["A"])
        assert len(table) == 0


class TestFrameConversion:
    """Tests for DataFrame conversion."""

    def test_from_frame_named_columns(self):
        """Asset columns are whatever is left after return, risk and auxiliaries."""
        frame = pd.DataFrame({
            "Sharpe": [0.1, 0.2],
            "AAPL": [0.6, 0.1],
            "Volatility": [0.02, 0.03],
            "MSFT": [0.4, 0.9],
            "Return": [0.001, 0.002],
        })

        table = FrontierTable.from_frame(frame)

        assert table.assets == ("AAPL", "MSFT")
        assert table[0] == FrontierRow(0.001, 0.02, (0.6, 0.4))
        assert table[1] == FrontierRow(0.002, 0.03, (0.1, 0.9))

    def test_from_frame_custom_columns(self):
        frame = pd.DataFrame({
            "mean": [0.001],
            "sd": [0.02],
            "A": [1.0],
        })

        table = FrontierTable.from_frame(frame, return_column="mean", risk_column="sd")

        assert table[0].mean_return == 0.001
        assert table[0].std_dev == 0.02
        assert table.assets == ("A",)

    def test_from_frame_missing_column_raises(self):
        frame = pd.DataFrame({"Return": [0.001], "A": [1.0]})

        with pytest.raises(ValueError, match="Volatility"):
            FrontierTable.from_frame(frame)

    def test_to_frame_layout(self):
        table = FrontierTable(
            ["A", "B"],
            [FrontierRow(0.001, 0.02, (0.3, 0.7))],
        )

        frame = table.to_frame()

        assert list(frame.columns) == ["Return", "Volatility", "A", "B"]
        assert frame.iloc[0].tolist() == [0.001, 0.02, 0.3, 0.7]

    def test_to_frame_then_from_frame(self):
        table = FrontierTable(
            ["A", "B"],
            [
                FrontierRow(0.001, 0.02, (0.3, 0.7)),
                FrontierRow(0.0015, 0.025, (0.6, 0.4)),
            ],
        )

        rebuilt = FrontierTable.from_frame(table.to_frame())

        assert rebuilt.assets == table.assets
        assert rebuilt.rows == table.rows


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
