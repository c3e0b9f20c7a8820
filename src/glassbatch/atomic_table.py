"""Atomic mass lookup table.

The table is built once (usually from the bundled periodic table CSV) and is
read-only afterwards. An empty table is a valid value: it stands for "masses
not loaded yet" and every formula evaluated against it is unresolved.

CSV layout (header required)::

    AtomicNumber,Element,Symbol,AtomicMass
    1,Hydrogen,H,1.008
"""

from __future__ import annotations

import csv
import logging
import re
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, List, Mapping

from glassbatch.errors import DuplicateElementError
from glassbatch.models import ElementEntry

logger = logging.getLogger(__name__)

_SYMBOL_RE = re.compile(r"^[A-Z][a-z]*$")
_DEFAULT_RESOURCE = "periodic_table.csv"


class AtomicTable(Mapping[str, ElementEntry]):
    """Immutable mapping of element symbol to :class:`ElementEntry`."""

    def __init__(self, entries: Iterable[ElementEntry] = ()) -> None:
        table = {}
        for entry in entries:
            if not _SYMBOL_RE.match(entry.symbol):
                raise ValueError(f"Invalid element symbol: {entry.symbol!r}")
            if not entry.atomic_mass > 0:
                raise ValueError(f"Atomic mass of {entry.symbol} must be positive")
            if entry.symbol in table:
                raise DuplicateElementError(f"Duplicate element symbol: {entry.symbol}")
            table[entry.symbol] = entry
        self._entries = MappingProxyType(table)

    def __getitem__(self, symbol: str) -> ElementEntry:
        return self._entries[symbol]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"AtomicTable({len(self)} elements)"

    def mass(self, symbol: str) -> float | None:
        entry = self._entries.get(symbol)
        return None if entry is None else entry.atomic_mass

    def search(self, query: str, limit: int | None = None) -> List[ElementEntry]:
        """Match entries for formula autocompletion.

        Symbols starting with ``query`` come first, then entries whose name
        contains it. Matching is case-insensitive and each group keeps table
        order.
        """
        needle = query.strip().lower()
        if not needle:
            return []
        by_symbol = [e for e in self._entries.values() if e.symbol.lower().startswith(needle)]
        by_name = [
            e
            for e in self._entries.values()
            if e not in by_symbol and e.name and needle in e.name.lower()
        ]
        matches = by_symbol + by_name
        return matches if limit is None else matches[:limit]

    @classmethod
    def from_csv(cls, path: str | Path) -> "AtomicTable":
        with open(path, "r", newline="", encoding="utf-8") as f:
            table = cls(_read_rows(csv.DictReader(f), source=str(path)))
        logger.debug("Loaded %d elements from %s", len(table), path)
        return table


def load_default_table() -> AtomicTable:
    """Load the periodic table bundled with the package."""
    resource = resources.files("glassbatch.data").joinpath(_DEFAULT_RESOURCE)
    with resource.open("r", newline="", encoding="utf-8") as f:
        table = AtomicTable(_read_rows(csv.DictReader(f), source=_DEFAULT_RESOURCE))
    logger.debug("Loaded %d elements from bundled table", len(table))
    return table


def _read_rows(reader: csv.DictReader, source: str) -> List[ElementEntry]:
    entries = []
    for line, row in enumerate(reader, start=2):
        symbol = (row.get("Symbol") or "").strip()
        mass = (row.get("AtomicMass") or "").strip()
        if not symbol and not mass:
            continue
        try:
            atomic_mass = float(mass)
        except ValueError:
            raise ValueError(f"{source}:{line}: invalid atomic mass {mass!r}") from None
        number = (row.get("AtomicNumber") or "").strip()
        entries.append(
            ElementEntry(
                symbol=symbol,
                atomic_mass=atomic_mass,
                name=(row.get("Element") or "").strip() or None,
                atomic_number=int(number) if number.isdigit() else None,
            )
        )
    return entries
