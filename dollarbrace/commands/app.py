"""
Defines the main Click command group for dollarbrace.

This module provides:
- The root `cli` command group.
- Integration with Rich-enhanced Click classes (`RichGroup`).
- Registration of the filtering subcommands.
"""

import click
from dollarbrace.commands.base import RichGroup
from dollarbrace.commands.filter import text, file, get, scan


@click.group(
    cls=RichGroup,
    help="""
    dollarbrace

    Substitute ${...} placeholders in text and files.
    """,
)
@click.version_option(package_name="dollarbrace")
def cli() -> None:
    """
    The root Click command group for dollarbrace.
    """
    pass


cli.add_command(text)
cli.add_command(file)
cli.add_command(get)
cli.add_command(scan)
