"""Glass batch composition calculator."""

from glassbatch.atomic_table import AtomicTable, load_default_table
from glassbatch.composition import (
    allocate_batch_weights,
    element_composition,
    gf_adjusted_view,
    molar_quantities,
    precursor_view,
    product_view,
)
from glassbatch.formula import element_counts, parse_formula
from glassbatch.gravimetric import gravimetric_factor
from glassbatch.mass import molecular_weight, molecular_weight_strict
from glassbatch.models import (
    BatchComponent,
    BatchReport,
    BatchTable,
    ComponentResult,
    ElementComposition,
    ElementEntry,
)
from glassbatch.normalize import NormalizationResult, normalize_fractions
from glassbatch.session import BatchState, apply_edit, default_state, evaluate

__all__ = [
    "AtomicTable",
    "load_default_table",
    "allocate_batch_weights",
    "element_composition",
    "gf_adjusted_view",
    "molar_quantities",
    "precursor_view",
    "product_view",
    "element_counts",
    "parse_formula",
    "gravimetric_factor",
    "molecular_weight",
    "molecular_weight_strict",
    "BatchComponent",
    "BatchReport",
    "BatchTable",
    "ComponentResult",
    "ElementComposition",
    "ElementEntry",
    "NormalizationResult",
    "normalize_fractions",
    "BatchState",
    "apply_edit",
    "default_state",
    "evaluate",
]
