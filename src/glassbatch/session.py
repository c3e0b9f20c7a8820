"""Batch editing state and its derived report.

The presentation layer holds a :class:`BatchState`, feeds every user edit
through :func:`apply_edit` to get the next state, and calls :func:`evaluate`
to get a fresh :class:`BatchReport`. Derived values are never stored on the
state, so a report always matches the inputs it was computed from.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Any, Mapping, Tuple, Union

from glassbatch.composition import (
    element_composition,
    gf_adjusted_view,
    precursor_view,
    product_view,
)
from glassbatch.constants import DEFAULT_BATCH_MASS
from glassbatch.gravimetric import gravimetric_factor
from glassbatch.models import BatchComponent, BatchReport, ElementEntry
from glassbatch.normalize import NORMALIZATION_WARNING, normalize_fractions

logger = logging.getLogger(__name__)

COMPONENT_FIELDS = ("formula", "matrix", "product_formula", "precursor_moles", "product_moles")
GF_FIELDS = ("precursor_formula", "precursor_moles", "product_formula", "product_moles")
_TEXT_FIELDS = {"formula", "product_formula", "precursor_formula"}


@dataclass(frozen=True)
class BatchState:
    components: Tuple[BatchComponent, ...] = ()
    desired_batch_mass: float = DEFAULT_BATCH_MASS
    # Global gravimetric factor calculator.
    precursor_formula: str = ""
    precursor_moles: float = 1.0
    product_formula: str = ""
    product_moles: float = 1.0
    warning: str = ""


@dataclass(frozen=True)
class SetComponentCount:
    count: int


@dataclass(frozen=True)
class EditComponent:
    index: int
    field: str
    value: Any


@dataclass(frozen=True)
class SetDesiredBatchMass:
    mass: float


@dataclass(frozen=True)
class SetGFCalculator:
    field: str
    value: Any


Edit = Union[SetComponentCount, EditComponent, SetDesiredBatchMass, SetGFCalculator]


def default_state() -> BatchState:
    """Starting batch: a lanthanum borate glass with boric acid as B2O3 source."""
    return BatchState(
        components=(
            BatchComponent("CaO", 30.0, "CaO"),
            BatchComponent("La2O3", 10.0, "La2O3"),
            BatchComponent("H3BO3", 60.0, "B2O3", precursor_moles=2.0, product_moles=1.0),
        ),
        desired_batch_mass=DEFAULT_BATCH_MASS,
        precursor_formula="H3BO3",
        precursor_moles=2.0,
        product_formula="B2O3",
        product_moles=1.0,
    )


def apply_edit(state: BatchState, edit: Edit) -> BatchState:
    """Return the state after ``edit``, with the matrix set renormalized.

    ``warning`` is set when the edit left the matrices off 100 % and they were
    rescaled, and cleared otherwise.

    Raises:
        IndexError: ``EditComponent`` points past the component list.
        ValueError: Unknown field name, negative count or batch mass, or a
            value that is not a finite number where one is expected.
    """
    if isinstance(edit, SetComponentCount):
        state = _resize(state, edit.count)
    elif isinstance(edit, EditComponent):
        state = _edit_component(state, edit)
    elif isinstance(edit, SetDesiredBatchMass):
        mass = _to_float(edit.mass)
        if mass < 0:
            raise ValueError("Desired batch mass must be non-negative")
        state = replace(state, desired_batch_mass=mass)
    elif isinstance(edit, SetGFCalculator):
        if edit.field not in GF_FIELDS:
            raise ValueError(f"Unknown gravimetric factor field: {edit.field}")
        state = replace(state, **{edit.field: _coerce(edit.field, edit.value)})
    else:
        raise TypeError(f"Unsupported edit: {edit!r}")
    return renormalize(state)


def renormalize(state: BatchState) -> BatchState:
    result = normalize_fractions([c.matrix for c in state.components])
    if not result.was_rescaled:
        return replace(state, warning="")
    components = tuple(
        replace(c, matrix=m) for c, m in zip(state.components, result.fractions)
    )
    return replace(state, components=components, warning=NORMALIZATION_WARNING)


def evaluate(state: BatchState, table: Mapping[str, ElementEntry]) -> BatchReport:
    """Recompute every derived value for ``state``.

    ``table`` may be empty (masses not loaded yet); the report then carries no
    weights, zero batch allocations and no element shares.
    """
    components = state.components
    gf = gravimetric_factor(
        state.precursor_formula,
        state.product_formula,
        state.precursor_moles,
        state.product_moles,
        table,
    )
    return BatchReport(
        gravimetric_factor=gf,
        precursors=precursor_view(components, table, state.desired_batch_mass),
        gf_adjusted=gf_adjusted_view(
            components, table, state.desired_batch_mass, state.precursor_formula, gf
        ),
        products=product_view(components, table, state.desired_batch_mass),
        elements=tuple(element_composition(components, table)),
        warning=state.warning,
    )


def _resize(state: BatchState, count: int) -> BatchState:
    if count < 0:
        raise ValueError("Component count must be non-negative")
    components = state.components[:count]
    components += tuple(BatchComponent() for _ in range(count - len(components)))
    return replace(state, components=components)


def _edit_component(state: BatchState, edit: EditComponent) -> BatchState:
    if edit.field not in COMPONENT_FIELDS:
        raise ValueError(f"Unknown component field: {edit.field}")
    if not 0 <= edit.index < len(state.components):
        raise IndexError(f"No component at index {edit.index}")

    old = state.components[edit.index]
    value = _coerce(edit.field, edit.value)
    updated = replace(old, **{edit.field: value})
    # The product tracks the precursor until the user sets one of its own.
    if edit.field == "formula" and (not old.product_formula or old.product_formula == old.formula):
        updated = replace(updated, product_formula=value)
    logger.debug("Component %d: %s=%r", edit.index, edit.field, value)

    components = list(state.components)
    components[edit.index] = updated
    return replace(state, components=tuple(components))


def _coerce(field: str, value: Any) -> Any:
    if field in _TEXT_FIELDS:
        return "" if value is None else str(value).strip()
    return _to_float(value)


def _to_float(value: Any) -> float:
    if value is None or (isinstance(value, str) and not value.strip()):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Expected a number, got {value!r}") from None
    if not math.isfinite(number):
        raise ValueError(f"Expected a finite number, got {value!r}")
    return number
