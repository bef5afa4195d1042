"""var-fallback CLI entry point: Click group with subcommands."""

import click

from var_fallback import __version__


@click.group()
@click.version_option(version=__version__, prog_name="var-fallback")
def cli() -> None:
    """var-fallback - add computed fallbacks to CSS var() references."""


# Import and register subcommands
from var_fallback.cli.process import process  # noqa: E402
from var_fallback.cli.inspect import inspect  # noqa: E402

cli.add_command(process)
cli.add_command(inspect)


def main() -> None:
    cli()
