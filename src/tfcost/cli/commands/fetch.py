"""Fetch command - retrieve a remote state and summarize its costs."""

import sys
import click
from ...analysis.state_costs import estimate_state_costs
from ...config import get_state_config
from ...presentation.human_formatter import format_state_overview, format_cost_summary
from ...state import StateFetcher, LocalStateSource, HttpStateSource
from ...utils.errors import TfCostError
from ...utils.logging import get_logger
from ..utils import format_error, load_settings, to_json, emit

logger = get_logger("cli.fetch")


@click.command()
@click.argument('bucket', required=False)
@click.argument('path', required=False)
@click.option('--root', type=click.Path(file_okay=False), help='Read buckets as directories under this root')
@click.option('--endpoint', help='HTTP state endpoint (default: state.endpoint or TFCOST_STATE_ENDPOINT)')
@click.option('--json', 'as_json', is_flag=True, help='Output state and cost summary as JSON')
@click.option('--config', 'config_path', type=click.Path(), help='Config file (replaces user/project config)')
def fetch(bucket, path, root, endpoint, as_json, config_path):
    """
    Fetch a Terraform state by bucket and path, then summarize it.

    BUCKET and PATH fall back to state.bucket and state.path from config.
    """
    try:
        if root and endpoint:
            raise TfCostError("Use either --root or --endpoint, not both")

        config, catalog, ascii_mode = load_settings(config_path)
        state_config = get_state_config(config)
        bucket = bucket or state_config.get("bucket")
        path = path or state_config.get("path")

        if root:
            source = LocalStateSource(root)
        else:
            source = HttpStateSource(endpoint or state_config.get("endpoint"))

        state = StateFetcher(source).fetch(bucket, path)
        summary = estimate_state_costs(state, catalog)

        if as_json:
            output_text = to_json({
                "state": state.model_dump(mode="json"),
                "costs": summary.model_dump(mode="json", by_alias=True),
            })
        else:
            output_text = (
                format_state_overview(state, ascii_mode=ascii_mode)
                + "\n"
                + format_cost_summary(summary, ascii_mode=ascii_mode)
            )

        emit(output_text)

    except TfCostError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        click.echo(format_error(f"Fetch failed: {e}"), err=True)
        sys.exit(1)
