"""Data structures for elements, batch components and calculation results."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class ElementEntry:
    symbol: str
    atomic_mass: float
    name: str | None = None
    atomic_number: int | None = None


@dataclass(frozen=True)
class BatchComponent:
    """One precursor line of a batch.

    Attributes:
        formula: Precursor formula as entered (e.g. ``"H3BO3"``).
        matrix: Relative proportion of the component; the set sums to 100.
        product_formula: Compound the precursor converts into (e.g. ``"B2O3"``).
            Equal to ``formula`` when the component does not convert.
        precursor_moles: Moles of precursor in the conversion reaction.
        product_moles: Moles of product in the conversion reaction.
    """

    formula: str = ""
    matrix: float = 0.0
    product_formula: str = ""
    precursor_moles: float = 1.0
    product_moles: float = 1.0

    @property
    def converts(self) -> bool:
        return bool(self.formula and self.product_formula) and self.formula != self.product_formula


@dataclass(frozen=True)
class ComponentResult:
    component: BatchComponent
    molecular_weight: float | None
    gravimetric_factor: float | None
    effective_weight: float  # MW actually used for the molar quantity
    molar_quantity: float
    batch_weight: float  # g
    weight_percent: float  # share of the desired batch mass


@dataclass(frozen=True)
class ElementComposition:
    element: str
    percentage: float
    color: str | None = None


@dataclass(frozen=True)
class BatchTable:
    rows: Tuple[ComponentResult, ...]
    total_molar_quantity: float
    desired_batch_mass: float

    @property
    def weights(self) -> Tuple[float, ...]:
        return tuple(row.batch_weight for row in self.rows)

    @property
    def total_batch_weight(self) -> float:
        return sum(self.weights)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rows": [asdict(row) for row in self.rows],
            "total_molar_quantity": self.total_molar_quantity,
            "total_batch_weight": self.total_batch_weight,
            "desired_batch_mass": self.desired_batch_mass,
        }


@dataclass(frozen=True)
class BatchReport:
    """Everything the presentation layer renders after an edit."""

    gravimetric_factor: float | None
    precursors: BatchTable
    gf_adjusted: BatchTable
    products: BatchTable
    elements: Tuple[ElementComposition, ...] = field(default_factory=tuple)
    warning: str = ""

    @property
    def was_rescaled(self) -> bool:
        return bool(self.warning)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gravimetric_factor": self.gravimetric_factor,
            "precursors": self.precursors.to_dict(),
            "gf_adjusted": self.gf_adjusted.to_dict(),
            "products": self.products.to_dict(),
            "elements": [asdict(element) for element in self.elements],
            "warning": self.warning,
        }
