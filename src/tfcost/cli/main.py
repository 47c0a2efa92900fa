"""Main CLI entry point for tfcost."""

import logging
import click
from .commands.estimate import estimate
from .commands.compare import compare
from .commands.state import state
from .commands.plan import plan
from .commands.report import report
from .commands.fetch import fetch
from .commands.version import version
from ..utils.logging import set_level
from .. import __version__


@click.group()
@click.version_option(version=__version__, prog_name="tfcost", message="%(prog)s version %(version)s")
@click.option('--verbose', '-v', count=True, help='Log progress to stderr (-v info, -vv debug)')
def cli(verbose):
    """tfcost - Terraform cost estimation."""
    if verbose:
        set_level(logging.DEBUG if verbose > 1 else logging.INFO)


cli.add_command(estimate)
cli.add_command(compare)
cli.add_command(state)
cli.add_command(plan)
cli.add_command(report)
cli.add_command(fetch)
cli.add_command(version)
