"""
Error types raised while selecting a portfolio from an efficient frontier.

Both errors subclass ValueError so callers that already guard numeric
input with ``except ValueError`` keep working.
"""


class FrontierError(ValueError):
    """Base class for frontier selection errors."""


class EmptyInputError(FrontierError):
    """Raised when a frontier table has no rows to select from."""


class DegenerateRiskError(FrontierError):
    """Raised when a portfolio's risk is zero, negative or not finite.

    A Sharpe Ratio over such a risk is infinite or undefined and would
    otherwise rank as a spurious maximum.
    """
