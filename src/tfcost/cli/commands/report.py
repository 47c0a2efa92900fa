"""Report command - markdown cost report and CI/CD artifacts for a plan."""

import sys
from pathlib import Path
import click
from ...analysis.state_costs import estimate_planned_costs
from ...ingest.loader import load_plan_json, load_state_json
from ...ingest.plan_normalizer import normalize_plan
from ...ingest.state_normalizer import normalize_state
from ...report.markdown import generate_markdown, render_markdown
from ...report.artifact import generate_artifacts
from ...utils.errors import TfCostError
from ...utils.logging import get_logger
from ..utils import resolve_or_raise, format_error, load_settings, emit

logger = get_logger("cli.report")


@click.command()
@click.argument('plan_json', type=click.Path(exists=False))
@click.option('--state', 'state_json', type=click.Path(exists=False), help='Current state JSON (baseline costs)')
@click.option('--output', '-o', type=click.Path(), help='Output markdown file path (default: stdout)')
@click.option('--artifacts', 'artifacts_dir', type=click.Path(), help='Also write JSON artifacts to this directory')
@click.option('--config', 'config_path', type=click.Path(), help='Config file (replaces user/project config)')
def report(plan_json, state_json, output, artifacts_dir, config_path):
    """Generate a markdown cost report for a Terraform plan."""
    try:
        plan_path = resolve_or_raise(plan_json)
        state_path = resolve_or_raise(state_json) if state_json else None
        _, catalog, _ = load_settings(config_path)

        plan = normalize_plan(load_plan_json(str(plan_path)))
        state = normalize_state(load_state_json(str(state_path))) if state_path else None
        comparison = estimate_planned_costs(plan, state, catalog)

        if output:
            output_path = Path(output)
            generate_markdown(comparison, output_path, plan)
            click.echo(f"Generated markdown report: {output_path}", err=True)
        else:
            emit(render_markdown(comparison, plan))

        if artifacts_dir:
            generate_artifacts(comparison, Path(artifacts_dir))
            click.echo(f"Generated artifacts in: {artifacts_dir}", err=True)

    except TfCostError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        click.echo(format_error(f"Report generation failed: {e}"), err=True)
        sys.exit(1)
