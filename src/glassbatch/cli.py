"""Command-line entrypoints for glassbatch."""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Annotated

import typer

from glassbatch.atomic_table import AtomicTable, load_default_table
from glassbatch.chart import plot_element_composition
from glassbatch.config import atomic_table_path, parse_batch_config, read_config
from glassbatch.constants import DEFAULT_BATCH_MASS
from glassbatch.errors import GlassBatchError
from glassbatch.gravimetric import gravimetric_factor
from glassbatch.mass import molecular_weight_strict
from glassbatch.models import BatchReport
from glassbatch.session import default_state, evaluate

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False)

TableOption = Annotated[
    Path | None, typer.Option("--table", help="Atomic mass CSV (defaults to the bundled table).")
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    """Glass batch composition calculator."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_table(path: Path | None) -> AtomicTable:
    if path is None:
        return load_default_table()
    try:
        return AtomicTable.from_csv(path)
    except (OSError, ValueError) as exc:
        typer.echo(f"Cannot load atomic table {path}: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _emit(report: BatchReport, output: Path | None, chart: Path | None) -> None:
    if report.warning:
        logger.warning(report.warning)
    json_output = json.dumps(report.to_dict(), indent=2)
    typer.echo(json_output)

    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(json_output)
    if chart:
        plot_element_composition(report.elements, chart)


@app.command()
def run(
    config_file: Annotated[
        Path, typer.Argument(help="Path to JSON batch configuration file.")
    ],
    output: Annotated[
        Path | None, typer.Option(help="Path to save output JSON.")
    ] = None,
    chart: Annotated[
        Path | None, typer.Option(help="Path to save an element composition chart (PNG).")
    ] = None,
    table: TableOption = None,
) -> None:
    """Evaluate a batch configuration file."""
    try:
        data = read_config(config_file)
        state = parse_batch_config(data)
    except (OSError, GlassBatchError) as exc:
        typer.echo(f"Cannot read {config_file}: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    atomic_table = _load_table(table or atomic_table_path(data, config_file.parent))
    _emit(evaluate(state, atomic_table), output, chart)


@app.command()
def demo(
    desired_batch_mass: Annotated[float, typer.Option(help="Total batch mass (g).")] = DEFAULT_BATCH_MASS,
    chart: Annotated[
        Path | None, typer.Option(help="Path to save an element composition chart (PNG).")
    ] = None,
) -> None:
    """Evaluate the CaO / La2O3 / H3BO3 example batch."""
    state = replace(default_state(), desired_batch_mass=desired_batch_mass)
    _emit(evaluate(state, load_default_table()), None, chart)


@app.command()
def mw(
    formula: Annotated[str, typer.Argument(help="Chemical formula, e.g. La2O3.")],
    table: TableOption = None,
) -> None:
    """Print the molecular weight of a formula."""
    try:
        weight = molecular_weight_strict(formula, _load_table(table))
    except GlassBatchError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"{weight:.3f}")


@app.command()
def gf(
    precursor: Annotated[str, typer.Argument(help="Precursor formula, e.g. H3BO3.")],
    product: Annotated[str, typer.Argument(help="Product formula, e.g. B2O3.")],
    precursor_moles: Annotated[float, typer.Option(help="Moles of precursor.")] = 1.0,
    product_moles: Annotated[float, typer.Option(help="Moles of product.")] = 1.0,
    table: TableOption = None,
) -> None:
    """Print the gravimetric factor of a precursor -> product conversion."""
    factor = gravimetric_factor(
        precursor, product, precursor_moles, product_moles, _load_table(table)
    )
    if factor is None:
        typer.echo("Gravimetric factor is undefined for these inputs.", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"{factor:.4f}")


@app.command()
def elements(
    query: Annotated[str, typer.Argument(help="Symbol prefix or part of an element name.")],
    limit: Annotated[int, typer.Option(help="Maximum number of matches.")] = 10,
    table: TableOption = None,
) -> None:
    """List elements matching a query, for formula completion."""
    for entry in _load_table(table).search(query, limit=limit):
        typer.echo(f"{entry.symbol}\t{entry.name or ''}\t{entry.atomic_mass}")
