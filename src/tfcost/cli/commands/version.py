"""Version command - show tfcost version."""

import click
from ... import __version__


@click.command()
def version():
    """Show tfcost version."""
    click.echo(f"tfcost version {__version__}")
