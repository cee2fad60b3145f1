"""CLI entry point for mastotext."""

import rich_click as click

from .. import __version__
from . import config_cmd as _config_mod
from . import count as _count_mod
from . import parse as _parse_mod
from ._console import configure_logging


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """Parse, render and count Mastodon status content."""
    configure_logging(verbose)


# Register commands
cli.add_command(_parse_mod.parse)
cli.add_command(_parse_mod.render)
cli.add_command(_count_mod.count)
cli.add_command(_config_mod.config)


if __name__ == "__main__":
    cli()
