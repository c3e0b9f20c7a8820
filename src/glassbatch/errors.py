"""Exception types raised by glassbatch.

The calculation engine itself never raises on incomplete user input; these are
used by the strict helpers, the table loaders and the config parser.
"""

from __future__ import annotations


class GlassBatchError(Exception):
    """Base class for glassbatch errors."""


class UnknownElementError(GlassBatchError, KeyError):
    def __init__(self, symbol: str) -> None:
        super().__init__(symbol)
        self.symbol = symbol

    def __str__(self) -> str:
        return f"Unknown element symbol: {self.symbol!r}"


class MalformedFormulaError(GlassBatchError, ValueError):
    def __init__(self, formula: str) -> None:
        super().__init__(f"No element tokens found in formula {formula!r}")
        self.formula = formula


class DuplicateElementError(GlassBatchError, ValueError):
    """An atomic table was built with the same symbol twice."""


class BatchConfigError(GlassBatchError, ValueError):
    """A batch configuration file could not be interpreted."""
