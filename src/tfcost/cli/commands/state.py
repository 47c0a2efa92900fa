"""State command - overview of a Terraform state."""

import sys
import click
from ...graph.resource_graph import ResourceGraph
from ...ingest.loader import load_state_json
from ...ingest.state_normalizer import normalize_state
from ...presentation.human_formatter import format_state_overview
from ...utils.errors import TfCostError
from ...utils.logging import get_logger
from ..utils import resolve_or_raise, format_error, to_json, emit

logger = get_logger("cli.state")


@click.command()
@click.argument('state_json', type=click.Path(exists=False))
@click.option('--json', 'as_json', is_flag=True, help='Output the normalized state as JSON')
@click.option('--graph', 'as_graph', is_flag=True, help='Output the resource dependency graph as node-link JSON')
def state(state_json, as_json, as_graph):
    """Show versions, resources, modules and providers of a Terraform state."""
    try:
        state_path = resolve_or_raise(state_json)
        normalized = normalize_state(load_state_json(str(state_path)))

        if as_graph:
            graph = ResourceGraph()
            graph.build_from_state(normalized)
            output_text = to_json(graph.to_node_link())
        elif as_json:
            output_text = to_json(normalized)
        else:
            output_text = format_state_overview(normalized)

        emit(output_text)

    except TfCostError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        click.echo(format_error(f"State inspection failed: {e}"), err=True)
        sys.exit(1)
