"""CLI command: var-fallback inspect -- display merged fallback variables."""

from __future__ import annotations

import click

from var_fallback.engine.cycles import find_cycles
from var_fallback.engine.loader import SourceLoader
from var_fallback.engine.merger import merge_sources
from var_fallback.engine.resolver import VariableResolver
from var_fallback.model.diagnostic import DiagnosticSink


@click.command()
@click.option(
    "-f",
    "--fallback",
    "fallbacks",
    multiple=True,
    required=True,
    help="Stylesheet defining variables; repeat in precedence order (last wins).",
)
@click.option(
    "--base",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Directory that fallback paths are relative to (default: cwd).",
)
def inspect(fallbacks: tuple[str, ...], base: str | None) -> None:
    """Show the merged variables of the fallback sources.

    Lists every variable with its winning raw value and the fallback that
    would be written for it, and marks circular variables.
    """
    diagnostics = DiagnosticSink()
    mapping = merge_sources(list(fallbacks), SourceLoader(), diagnostics, base)
    cycles = find_cycles(mapping, diagnostics)
    resolver = VariableResolver(mapping, cycles)

    click.echo(f"Sources:   {len(fallbacks)}")
    click.echo(f"Variables: {len(mapping)}")
    click.echo(f"Circular:  {len(cycles)}")
    click.echo()

    for name, raw in mapping.items():
        if resolver.is_circular(name):
            click.echo(f"  {name}: {raw}  (circular)")
            continue
        resolved = resolver.resolve(name)
        if resolved is not None and resolved != raw:
            click.echo(f"  {name}: {raw}  -> {resolved}")
        else:
            click.echo(f"  {name}: {raw}")

    if diagnostics.warnings:
        click.echo()
        for diag in diagnostics.warnings:
            click.echo(str(diag), err=True)
