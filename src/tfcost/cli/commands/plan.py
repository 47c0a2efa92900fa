"""Plan command - summary and change listing of a Terraform plan."""

import sys
import click
from ...ingest.loader import load_plan_json
from ...ingest.plan_normalizer import normalize_plan
from ...presentation.human_formatter import format_plan_overview
from ...utils.errors import TfCostError
from ...utils.logging import get_logger
from ..utils import resolve_or_raise, format_error, to_json, emit

logger = get_logger("cli.plan")


@click.command()
@click.argument('plan_json', type=click.Path(exists=False))
@click.option('--json', 'as_json', is_flag=True, help='Output summary and changes as JSON')
def plan(plan_json, as_json):
    """Show add/change/destroy counts and the resource changes of a plan."""
    try:
        plan_path = resolve_or_raise(plan_json)
        normalized = normalize_plan(load_plan_json(str(plan_path)))

        if as_json:
            output_text = to_json({
                "format_version": normalized.format_version,
                "terraform_version": normalized.terraform_version,
                "summary": normalized.summary.model_dump(),
                "resource_changes": [c.model_dump() for c in normalized.resource_changes],
            })
        else:
            output_text = format_plan_overview(normalized)

        emit(output_text)

    except TfCostError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        click.echo(format_error(f"Plan inspection failed: {e}"), err=True)
        sys.exit(1)
