"""Compare command - current versus planned costs for a Terraform plan."""

import sys
import click
from ...analysis.state_costs import estimate_planned_costs
from ...ingest.loader import load_plan_json, load_state_json
from ...ingest.plan_normalizer import normalize_plan
from ...ingest.state_normalizer import normalize_state
from ...presentation.human_formatter import format_cost_comparison
from ...utils.errors import TfCostError
from ...utils.logging import get_logger
from ..utils import resolve_or_raise, format_error, load_settings, to_json, emit

logger = get_logger("cli.compare")


@click.command()
@click.argument('plan_json', type=click.Path(exists=False))
@click.option('--state', 'state_json', type=click.Path(exists=False), help='Current state JSON (baseline costs)')
@click.option('--json', 'as_json', is_flag=True, help='Output structured JSON instead of human-readable')
@click.option('--output', '-o', type=click.Path(), help='Save output to file')
@click.option('--quiet', is_flag=True, help='Suppress progress messages')
@click.option('--config', 'config_path', type=click.Path(), help='Config file (replaces user/project config)')
def compare(plan_json, state_json, as_json, output, quiet, config_path):
    """
    Show the monthly cost impact of a Terraform plan.

    Without --state the baseline is zero and every created resource counts as added.
    """
    try:
        plan_path = resolve_or_raise(plan_json)
        state_path = resolve_or_raise(state_json) if state_json else None
        _, catalog, ascii_mode = load_settings(config_path)

        if not quiet:
            click.echo(f"Loading plan: {plan_path}", err=True)

        plan = normalize_plan(load_plan_json(str(plan_path)))
        state = None
        if state_path:
            if not quiet:
                click.echo(f"Loading baseline state: {state_path}", err=True)
            state = normalize_state(load_state_json(str(state_path)))

        comparison = estimate_planned_costs(plan, state, catalog)

        if as_json:
            output_text = to_json(comparison)
        else:
            output_text = format_cost_comparison(comparison, ascii_mode=ascii_mode)

        emit(output_text, output, quiet)

    except TfCostError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        click.echo(format_error(f"Comparison failed: {e}"), err=True)
        sys.exit(1)
