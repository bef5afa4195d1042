"""CLI command: var-fallback process -- rewrite a stylesheet with fallbacks."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from var_fallback.model.diagnostic import DiagnosticSink
from var_fallback.parser import ParseError
from var_fallback.processor import process as run_process


@click.command()
@click.argument("target", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-f",
    "--fallback",
    "fallbacks",
    multiple=True,
    help="Stylesheet defining variables; repeat in precedence order (last wins).",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the result here instead of stdout.",
)
@click.option("--verbose", is_flag=True, default=False, help="Log engine activity to stderr.")
def process(target: str, fallbacks: tuple[str, ...], output: str | None, verbose: bool) -> None:
    """Add computed fallbacks to every var() reference in TARGET.

    Fallback paths are resolved relative to TARGET's directory. Warnings
    are printed to stderr; the run only fails if TARGET cannot be parsed.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    target_path = Path(target)
    diagnostics = DiagnosticSink(source=str(target_path))
    diagnostics.subscribe(lambda diag: click.echo(str(diag), err=True))

    try:
        source = target_path.read_text(encoding="utf-8")
        result = run_process(
            source,
            {"fallbacks": list(fallbacks)},
            from_path=target_path,
            diagnostics=diagnostics,
        )
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    if output:
        Path(output).write_text(result.css, encoding="utf-8")
        click.echo(f"Wrote {output}", err=True)
    else:
        click.echo(result.css, nl=False)
