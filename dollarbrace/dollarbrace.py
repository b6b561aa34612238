"""
dollarbrace main module.

Entry point of the `dollarbrace` console script, a thin command line front
end over the substitution library.

Examples:
    Substitute a string:
        $ dollarbrace text -D name=World 'Hello ${name}'

    Filter a file with properties from a JSON file and the environment:
        $ dollarbrace file -p build.json --env app.conf.in app.conf

    Look up one property:
        $ dollarbrace get --system user.home

    List the placeholders of a template:
        $ dollarbrace scan '${a} ${oneof:${b},c}'
"""

from typing import Final
from dollarbrace.commands.app import cli

__version__: Final[str] = "0.1.0"


def main() -> None:
    """Run the command line interface."""
    cli(prog_name="dollarbrace")


if __name__ == "__main__":
    main()
