"""JSON batch configuration files.

Example::

    {
      "desired_batch_mass": 5.0,
      "components": [
        {"formula": "CaO", "matrix": 30},
        {"formula": "La2O3", "matrix": 10},
        {"formula": "H3BO3", "matrix": 60, "product_formula": "B2O3",
         "precursor_moles": 2, "product_moles": 1}
      ],
      "gravimetric_factor": {"precursor": "H3BO3", "precursor_moles": 2,
                             "product": "B2O3", "product_moles": 1},
      "atomic_table": "masses.csv"
    }

Every key is optional; missing ones fall back to :func:`default_state`.
"""

from __future__ import annotations

import json
import math
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Mapping

from glassbatch.errors import BatchConfigError
from glassbatch.models import BatchComponent
from glassbatch.session import BatchState, default_state, renormalize


def read_config(path: str | Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise BatchConfigError(f"{path}: invalid JSON ({exc})") from exc
    if not isinstance(data, dict):
        raise BatchConfigError(f"{path}: batch configuration must be a JSON object")
    return data


def load_batch_config(path: str | Path) -> BatchState:
    return parse_batch_config(read_config(path))


def parse_batch_config(data: Mapping[str, Any]) -> BatchState:
    """Build a normalized :class:`BatchState` from decoded JSON."""
    if not isinstance(data, Mapping):
        raise BatchConfigError("Batch configuration must be a JSON object")
    state = default_state()

    if "desired_batch_mass" in data:
        mass = _number(data["desired_batch_mass"], "desired_batch_mass")
        if mass < 0:
            raise BatchConfigError("desired_batch_mass must be non-negative")
        state = replace(state, desired_batch_mass=mass)

    if "components" in data:
        raw = data["components"]
        if not isinstance(raw, list):
            raise BatchConfigError("components must be a list")
        state = replace(
            state,
            components=tuple(_parse_component(c, i) for i, c in enumerate(raw)),
        )

    gf_data = data.get("gravimetric_factor")
    if gf_data is not None:
        if not isinstance(gf_data, Mapping):
            raise BatchConfigError("gravimetric_factor must be an object")
        state = replace(
            state,
            precursor_formula=_text(gf_data.get("precursor", state.precursor_formula), "precursor"),
            precursor_moles=_number(gf_data.get("precursor_moles", state.precursor_moles), "precursor_moles"),
            product_formula=_text(gf_data.get("product", state.product_formula), "product"),
            product_moles=_number(gf_data.get("product_moles", state.product_moles), "product_moles"),
        )

    return renormalize(state)


def atomic_table_path(data: Mapping[str, Any], base_dir: Path | None = None) -> Path | None:
    """Optional atomic table CSV named by the config, relative to ``base_dir``."""
    value = data.get("atomic_table")
    if value is None:
        return None
    path = Path(_text(value, "atomic_table"))
    if base_dir is not None and not path.is_absolute():
        path = base_dir / path
    return path


def _parse_component(data: Any, index: int) -> BatchComponent:
    if not isinstance(data, Mapping):
        raise BatchConfigError(f"components[{index}] must be an object")
    prefix = f"components[{index}]"
    formula = _text(data.get("formula", ""), f"{prefix}.formula")
    fields: Dict[str, Any] = {
        "formula": formula,
        "matrix": _number(data.get("matrix", 0.0), f"{prefix}.matrix"),
        "product_formula": _text(data.get("product_formula") or formula, f"{prefix}.product_formula"),
        "precursor_moles": _number(data.get("precursor_moles", 1.0), f"{prefix}.precursor_moles"),
        "product_moles": _number(data.get("product_moles", 1.0), f"{prefix}.product_moles"),
    }
    return BatchComponent(**fields)


def _number(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise BatchConfigError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise BatchConfigError(f"{name} must be finite, got {value!r}")
    return float(value)


def _text(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise BatchConfigError(f"{name} must be a string, got {value!r}")
    return value.strip()
