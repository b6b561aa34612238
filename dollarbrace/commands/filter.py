"""
Filtering Commands

This module provides CLI commands that run the dollarbrace engine over text,
files and single property names.

Commands:
- text <TEXT>: Print TEXT with all placeholders substituted.
- file <SOURCE> <DESTINATION>: Filter SOURCE into DESTINATION.
- get <NAME>: Print the value of a single property.
- scan <TEXT>: List the placeholders found in TEXT.

Every command except `scan` accepts the same resolver options. The chain is
built in this order: oneof, raw, -D definitions, property files, the
per-user defaults file, then the optional env, system and expression
resolvers.
"""

from pathlib import Path
from typing import Any, Callable
from rich.console import Console
from rich.markup import escape
from rich.table import Table
import click
from dollarbrace.commands.base import RichCommand, rich_help
from dollarbrace.config.settings import DEFAULTS_FILE, properties_load
from dollarbrace.lib.errors import DollarBraceError
from dollarbrace.lib.log import LOG
from dollarbrace.lib.parser import (
    EnvironmentResolver,
    ExpressionResolver,
    Filter,
    OneOfResolver,
    PropertiesResolver,
    PropertyResolver,
    RawResolver,
    SystemPropertyResolver,
    get_filter,
    placeholders_scan,
)
from dollarbrace.models.dataModel import FilterRequest, ScanResult

console: Console = Console()

RESOLVER_ARGS: dict[str, str] = {
    "-D key=value": "Define a property (repeatable).",
    "-p FILE": "JSON file of properties (repeatable, first wins).",
    "--env": "Resolve ${env.NAME} from the environment.",
    "--system": "Resolve runtime properties such as ${user.home}.",
    "--expr": "Evaluate ${py:EXPRESSION}.",
    "--no-defaults": "Ignore the per-user defaults file.",
}


def define_parse(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str]:
    """
    Click callback turning repeated `-D key=value` options into a mapping.

    :raises click.BadParameter: If a definition has no '='.
    """
    defines: dict[str, str] = {}
    for definition in values:
        key, sep, value = definition.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got '{definition}'")
        defines[key] = value
    return defines


def resolver_options(command: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the shared resolver options to a command."""
    decorators = [
        click.option(
            "-D",
            "--define",
            "defines",
            multiple=True,
            callback=define_parse,
            help="Define a property as key=value.",
        ),
        click.option(
            "-p",
            "--properties",
            "property_files",
            multiple=True,
            type=click.Path(path_type=Path),
            help="JSON property file.",
        ),
        click.option("--env", "use_env", is_flag=True, help="Enable env. lookups."),
        click.option(
            "--system", "use_system", is_flag=True, help="Enable runtime properties."
        ),
        click.option("--expr", "use_expr", is_flag=True, help="Enable expressions."),
        click.option(
            "--defaults/--no-defaults",
            "use_defaults",
            default=True,
            help="Consult the per-user defaults file.",
        ),
    ]
    for decorator in reversed(decorators):
        command = decorator(command)
    return command


def filter_build(request: FilterRequest) -> Filter:
    """
    Build the resolver chain described by a request.

    :param request: Resolver configuration collected from the options.
    :return: A filter over the chain.
    :raises FilterIOError: If a property file cannot be read.
    :raises ValueError: If a property file is malformed.
    """
    chain: list[PropertyResolver] = [OneOfResolver(), RawResolver()]
    if request.defines:
        chain.append(PropertiesResolver(request.defines))
    for path in request.property_files:
        chain.append(PropertiesResolver(properties_load(path, missing_ok=False)))
    if request.use_defaults:
        defaults: dict[str, str] = properties_load(DEFAULTS_FILE)
        if defaults:
            chain.append(PropertiesResolver(defaults))
    if request.use_env:
        chain.append(EnvironmentResolver())
    if request.use_system:
        chain.append(SystemPropertyResolver())
    if request.use_expr:
        chain.append(ExpressionResolver())

    LOG(f"Resolver chain: {[type(resolver).__name__ for resolver in chain]}")
    return get_filter(*chain)


def command_run(action: Callable[[Filter], Any], **options: Any) -> Any:
    """
    Build a filter from command options and run `action` with it.

    Errors from the engine are reported on the console and end the command
    with exit status 1.
    """
    try:
        return action(filter_build(FilterRequest(**options)))
    except (DollarBraceError, ValueError) as e:
        LOG(f"Command failed: {e}")
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise click.exceptions.Exit(1)


@click.command(
    cls=RichCommand,
    short_help="Substitute placeholders in text",
    help=rich_help(
        description="Print TEXT with every ${...} placeholder substituted.",
        usage="dollarbrace text [OPTIONS] <TEXT>",
        args={"<TEXT>": "The text to filter.", **RESOLVER_ARGS},
    ),
)
@click.argument("text", type=str)
@resolver_options
def text(text: str, **options: Any) -> None:
    """
    Substitutes placeholders in a string and prints the result.

    :param text: The text to filter.
    """
    result: str = command_run(lambda f: f.substitute(text), **options)
    click.echo(result)


@click.command(
    cls=RichCommand,
    short_help="Substitute placeholders in a file",
    help=rich_help(
        description="Filter SOURCE and write the result to DESTINATION.",
        usage="dollarbrace file [OPTIONS] <SOURCE> <DESTINATION>",
        args={
            "<SOURCE>": "File to read.",
            "<DESTINATION>": "File to write.",
            **RESOLVER_ARGS,
        },
    ),
)
@click.argument("source", type=click.Path(path_type=Path))
@click.argument("destination", type=click.Path(path_type=Path))
@resolver_options
def file(source: Path, destination: Path, **options: Any) -> None:
    """
    Filters a file into another file.

    :param source: The file to read.
    :param destination: The file to write.
    """
    command_run(lambda f: f.substitute_file(source, destination), **options)
    console.print(f"[bold green]Filtered '{source}' into '{destination}'.[/bold green]")


@click.command(
    cls=RichCommand,
    short_help="Resolve a single property",
    help=rich_help(
        description="Print the value of property NAME.",
        usage="dollarbrace get [OPTIONS] <NAME>",
        args={"<NAME>": "Property name, without ${ and }.", **RESOLVER_ARGS},
    ),
)
@click.argument("name", type=str)
@resolver_options
def get(name: str, **options: Any) -> None:
    """
    Resolves a property name and prints its value.

    :param name: The property name.
    """
    value: str = command_run(lambda f: f.resolve_name(name), **options)
    click.echo(value)


@click.command(
    cls=RichCommand,
    short_help="List placeholders in text",
    help=rich_help(
        description="List the placeholders found in TEXT without resolving them.",
        usage="dollarbrace scan <TEXT>",
        args={"<TEXT>": "The text to scan."},
    ),
)
@click.argument("text", type=str)
def scan(text: str) -> None:
    """
    Lists placeholders in a table.

    :param text: The text to scan.
    """
    result: ScanResult = placeholders_scan(text)
    if not result.placeholders:
        console.print("[bold yellow]No placeholders found.[/bold yellow]")
    else:
        table: Table = Table(title="Placeholders")
        table.add_column("#", style="cyan", justify="right")
        table.add_column("Name", style="green")
        for index, name in enumerate(result.placeholders, start=1):
            table.add_row(str(index), escape(name))
        console.print(table)

    if result.dangling is not None:
        console.print(
            f"[bold red]Unclosed placeholder left as text:[/bold red] {escape(result.dangling)}",
            highlight=False,
        )
