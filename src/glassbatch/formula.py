"""Chemical formula tokenization.

Formulas are flat sequences of ``Symbol[count]`` tokens such as ``La2O3`` or
``H3BO3``. Parentheses and hydrate notation are not supported. Parsing is
purely syntactic; symbols are not checked against an atomic table.
"""

from __future__ import annotations

import re
from typing import Dict, List, Tuple

_TOKEN_RE = re.compile(r"([A-Z][a-z]*)(\d*)")


def parse_formula(formula: str) -> List[Tuple[str, int]]:
    """Split a formula into ``(symbol, count)`` pairs in formula order.

    Repeated symbols are kept as separate pairs. Text that holds no token
    (``""``, ``"abc"``) gives an empty list instead of raising, since formulas
    are parsed while they are still being typed.

    Examples:
        >>> parse_formula("La2O3")
        [('La', 2), ('O', 3)]
        >>> parse_formula("CH3COOH")
        [('C', 1), ('H', 3), ('C', 1), ('O', 1), ('O', 1), ('H', 1)]
    """
    if not formula:
        return []
    return [
        (symbol, int(count) if count else 1)
        for symbol, count in _TOKEN_RE.findall(formula)
    ]


def element_counts(formula: str) -> Dict[str, int]:
    """Total count per symbol, in order of first appearance."""
    counts: Dict[str, int] = {}
    for symbol, count in parse_formula(formula):
        counts[symbol] = counts.get(symbol, 0) + count
    return counts
