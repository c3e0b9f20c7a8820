"""Molecular weights from formulas and an atomic table."""

from __future__ import annotations

import logging
from typing import Mapping

from glassbatch.errors import MalformedFormulaError, UnknownElementError
from glassbatch.formula import parse_formula
from glassbatch.models import ElementEntry

logger = logging.getLogger(__name__)


def molecular_weight_strict(formula: str, table: Mapping[str, ElementEntry]) -> float:
    """Molar mass of ``formula`` in g/mol.

    Raises:
        MalformedFormulaError: If the formula contains no element token.
        UnknownElementError: If a symbol is missing from ``table``.
    """
    tokens = parse_formula(formula)
    if not tokens:
        raise MalformedFormulaError(formula)
    total = 0.0
    for symbol, count in tokens:
        entry = table.get(symbol)
        if entry is None:
            raise UnknownElementError(symbol)
        total += entry.atomic_mass * count
    return total


def molecular_weight(formula: str, table: Mapping[str, ElementEntry]) -> float | None:
    """Molar mass of ``formula``, or ``None`` when it cannot be resolved.

    This is the form the batch engine uses: an empty, half-typed or unknown
    formula simply has no weight to show.
    """
    try:
        return molecular_weight_strict(formula, table)
    except (MalformedFormulaError, UnknownElementError) as exc:
        logger.debug("Unresolved formula %r: %s", formula, exc)
        return None
