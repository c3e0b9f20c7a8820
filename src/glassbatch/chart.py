"""Element composition colours and chart rendering."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Sequence

from matplotlib import colormaps
from matplotlib.colors import to_hex
from matplotlib.figure import Figure

from glassbatch.models import ElementComposition, ElementEntry

_PALETTE = colormaps["tab20"]


def element_color(symbol: str, table: Mapping[str, ElementEntry] | None = None) -> str:
    """Stable hex colour for an element symbol.

    Keyed on the atomic number when the table knows it, otherwise on the
    symbol's characters, so the same element always gets the same colour.
    """
    entry = table.get(symbol) if table is not None else None
    if entry is not None and entry.atomic_number:
        key = entry.atomic_number
    else:
        key = sum(ord(ch) for ch in symbol)
    return to_hex(_PALETTE(key % _PALETTE.N))


def plot_element_composition(
    composition: Sequence[ElementComposition],
    path: str | Path,
    title: str = "Element composition",
) -> Path:
    figure = Figure(figsize=(6, 4), tight_layout=True)
    axes = figure.add_subplot(1, 1, 1)
    labels = [item.element for item in composition]
    values = [item.percentage for item in composition]
    colors = [item.color or element_color(item.element) for item in composition]
    axes.barh(labels, values, color=colors)
    axes.invert_yaxis()
    axes.set_xlabel("Share (%)")
    axes.set_xlim(0.0, 100.0)
    axes.set_title(title)
    for y, value in enumerate(values):
        axes.annotate(f"{value:.2f}", (value, y), xytext=(3, 0),
                      textcoords="offset points", va="center")

    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    figure.savefig(output)
    return output
