"""Estimate command - cost summary of a Terraform state."""

import sys
import click
from ...analysis.state_costs import estimate_state_costs
from ...ingest.loader import load_state_json
from ...ingest.state_normalizer import normalize_state
from ...presentation.human_formatter import format_cost_summary
from ...utils.errors import TfCostError
from ...utils.logging import get_logger
from ..utils import resolve_or_raise, format_error, load_settings, to_json, emit

logger = get_logger("cli.estimate")


@click.command()
@click.argument('state_json', type=click.Path(exists=False))
@click.option('--json', 'as_json', is_flag=True, help='Output structured JSON instead of human-readable')
@click.option('--output', '-o', type=click.Path(), help='Save output to file')
@click.option('--quiet', is_flag=True, help='Suppress progress messages')
@click.option('--config', 'config_path', type=click.Path(), help='Config file (replaces user/project config)')
def estimate(state_json, as_json, output, quiet, config_path):
    """
    Estimate monthly costs of the resources in a Terraform state.

    Accepts a .tfstate file or `terraform show -json` output.
    """
    try:
        state_path = resolve_or_raise(state_json)
        _, catalog, ascii_mode = load_settings(config_path)

        if not quiet:
            click.echo(f"Loading state: {state_path}", err=True)

        state = normalize_state(load_state_json(str(state_path)))
        summary = estimate_state_costs(state, catalog)

        if as_json:
            output_text = to_json(summary)
        else:
            output_text = format_cost_summary(summary, ascii_mode=ascii_mode)

        emit(output_text, output, quiet)

    except TfCostError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        click.echo(format_error(f"Estimation failed: {e}"), err=True)
        sys.exit(1)
