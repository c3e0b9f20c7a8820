"""Gravimetric factors between a precursor and the product it converts into."""

from __future__ import annotations

from typing import Mapping

from glassbatch.mass import molecular_weight
from glassbatch.models import ElementEntry


def gravimetric_factor(
    precursor_formula: str,
    product_formula: str,
    precursor_moles: float,
    product_moles: float,
    table: Mapping[str, ElementEntry],
) -> float | None:
    """Mass of precursor per unit mass of product.

    GF = (n_precursor * MW_precursor) / (n_product * MW_product)

    e.g. 2 H3BO3 -> B2O3 + 3 H2O gives GF = 2 * 61.83 / 69.62 ≈ 1.776.

    Returns:
        The factor, unrounded, or ``None`` if either formula is unresolvable
        or the product side is zero.
    """
    precursor_mw = molecular_weight(precursor_formula, table)
    product_mw = molecular_weight(product_formula, table)
    if precursor_mw is None or product_mw is None:
        return None
    denominator = product_moles * product_mw
    if denominator == 0:
        return None
    return (precursor_moles * precursor_mw) / denominator
