"""Batch composition calculations.

This module turns a list of batch components into the weight tables shown to
the user and the aggregated elemental breakdown.

Molar quantity convention:
    molar_quantity = (matrix / 100) * MW

``matrix`` is read as a fraction of 100; no further /1000 scaling is applied.
The quantity is relative, so only its share of the total matters when it is
allocated onto a desired batch mass:

    batch_weight_i = molar_quantity_i / sum(molar_quantity) * desired_batch_mass

Three views are produced:
- precursor view: MW of each precursor as entered.
- GF-adjusted view: components matching a designated precursor use MW * GF,
  and every other component is re-allocated against the new total.
- product view: each component uses MW * GF_i of its own conversion and only
  the converted components are reported.

Nothing in this module raises on incomplete input. Unknown elements, blank
formulas and zero totals all degrade to ``None`` or ``0``.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Sequence

import numpy as np

from glassbatch.chart import element_color
from glassbatch.constants import PERCENT
from glassbatch.formula import parse_formula
from glassbatch.gravimetric import gravimetric_factor
from glassbatch.mass import molecular_weight
from glassbatch.models import (
    BatchComponent,
    BatchTable,
    ComponentResult,
    ElementComposition,
    ElementEntry,
)


def molar_quantities(
    fractions: Sequence[float],
    weights: Sequence[float | None],
) -> np.ndarray:
    """Relative molar quantity per component; unresolved weights count as 0."""
    mw = np.array([0.0 if w is None else float(w) for w in weights], dtype=float)
    return np.asarray(fractions, dtype=float) / PERCENT * mw


def allocate_batch_weights(molar: Sequence[float], desired_batch_mass: float) -> np.ndarray:
    """Split ``desired_batch_mass`` proportionally to ``molar``.

    Returns all zeros when the total is not positive (every fraction zero or
    every formula unresolved).
    """
    molar = np.asarray(molar, dtype=float)
    total = float(np.sum(molar))
    if total <= 0:
        return np.zeros_like(molar)
    return molar / total * desired_batch_mass


def _build_table(
    components: Sequence[BatchComponent],
    weights: Sequence[float | None],
    factors: Sequence[float | None],
    effective: Sequence[float | None],
    desired_batch_mass: float,
    keep: Sequence[bool] | None = None,
) -> BatchTable:
    molar = molar_quantities([c.matrix for c in components], effective)
    batch = allocate_batch_weights(molar, desired_batch_mass)
    if keep is None:
        keep = [True] * len(components)

    rows = []
    for i, component in enumerate(components):
        if not keep[i]:
            continue
        share = batch[i] / desired_batch_mass * PERCENT if desired_batch_mass > 0 else 0.0
        rows.append(
            ComponentResult(
                component=component,
                molecular_weight=weights[i],
                gravimetric_factor=factors[i],
                effective_weight=0.0 if effective[i] is None else float(effective[i]),
                molar_quantity=float(molar[i]),
                batch_weight=float(batch[i]),
                weight_percent=float(share),
            )
        )
    return BatchTable(
        rows=tuple(rows),
        total_molar_quantity=float(np.sum(molar)),
        desired_batch_mass=desired_batch_mass,
    )


def precursor_view(
    components: Sequence[BatchComponent],
    table: Mapping[str, ElementEntry],
    desired_batch_mass: float,
) -> BatchTable:
    weights = [molecular_weight(c.formula, table) for c in components]
    return _build_table(components, weights, [None] * len(components), weights, desired_batch_mass)


def gf_adjusted_view(
    components: Sequence[BatchComponent],
    table: Mapping[str, ElementEntry],
    desired_batch_mass: float,
    precursor_formula: str,
    gf: float | None,
) -> BatchTable:
    """Precursor view with ``MW * gf`` substituted for ``precursor_formula``.

    With no factor, or no component using that precursor, this is exactly the
    precursor view.
    """
    weights = [molecular_weight(c.formula, table) for c in components]
    factors: List[float | None] = []
    effective: List[float | None] = []
    for component, mw in zip(components, weights):
        applies = gf is not None and bool(precursor_formula) and component.formula == precursor_formula
        factors.append(gf if applies else None)
        effective.append(mw * gf if applies and mw is not None else mw)
    return _build_table(components, weights, factors, effective, desired_batch_mass)


def product_view(
    components: Sequence[BatchComponent],
    table: Mapping[str, ElementEntry],
    desired_batch_mass: float,
) -> BatchTable:
    """Batch weights expressed through each component's own conversion.

    Every component with a formula takes part in the total, using a factor of
    1 when it does not convert or its factor cannot be resolved. Only
    converted components (distinct product formula, resolvable factor,
    positive quantity) appear as rows.
    """
    weights: List[float | None] = []
    factors: List[float | None] = []
    effective: List[float | None] = []
    for c in components:
        mw = molecular_weight(c.formula, table)
        gf = gravimetric_factor(
            c.formula,
            c.product_formula or c.formula,
            c.precursor_moles,
            c.product_moles,
            table,
        )
        weights.append(mw)
        factors.append(gf)
        effective.append(None if mw is None else mw * (1.0 if gf is None else gf))

    molar = molar_quantities([c.matrix for c in components], effective)
    keep = [
        c.converts and gf is not None and quantity > 0
        for c, gf, quantity in zip(components, factors, molar)
    ]
    return _build_table(components, weights, factors, effective, desired_batch_mass, keep=keep)


def element_composition(
    components: Sequence[BatchComponent],
    table: Mapping[str, ElementEntry] | None = None,
) -> List[ElementComposition]:
    """Aggregate elemental share of the batch.

    Each component adds ``count * matrix`` for every element token of its
    formula; the totals are then expressed as percentages of their own sum.
    Components without a positive matrix or without tokens are skipped. When
    ``table`` is given, symbols it does not know are dropped, so an
    unresolvable formula contributes nothing.
    """
    totals: Dict[str, float] = {}
    for component in components:
        if not component.formula or not component.matrix > 0:
            continue
        for symbol, count in parse_formula(component.formula):
            if table is not None and symbol not in table:
                continue
            totals[symbol] = totals.get(symbol, 0.0) + count * component.matrix

    grand_total = sum(totals.values())
    if grand_total <= 0:
        return []
    return [
        ElementComposition(
            element=symbol,
            percentage=value / grand_total * PERCENT,
            color=element_color(symbol, table),
        )
        for symbol, value in totals.items()
    ]
